"""Text analysis functions, a wire protocol, and client and admin tools for a text server."""

__version__ = "0.1.0"