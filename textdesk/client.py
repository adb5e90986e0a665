"""Command-line client that sends a text file to the processing server."""

from __future__ import annotations

import socket
import sys
from pathlib import Path

from textdesk.protocol import (
    MAX_TEXT_SIZE,
    ProtocolError,
    Request,
    RequestType,
    Response,
    StatusCode,
    receive_response,
    send_request,
)

SERVER_HOST = "127.0.0.1"
SERVER_PORT = 12345

HELP_TEXT = (
    "Utilizare: client_bin COMANDA FIȘIER\n"
    "Comenzi disponibile:\n"
    "  --count-words FIȘIER       - Numără cuvintele din fișier\n"
    "  --determine-topic FIȘIER   - Determină domeniul tematic al fișierului\n"
    "  --generate-summary FIȘIER  - Generează un rezumat al fișierului"
)

_COMMANDS = {
    "--count-words": RequestType.COUNT_WORDS,
    "--determine-topic": RequestType.DETERMINE_TOPIC,
    "--generate-summary": RequestType.GENERATE_SUMMARY,
}


def parse_command(option: str) -> RequestType:
    """Map a command-line option to its request type."""
    try:
        return _COMMANDS[option]
    except KeyError:
        raise ValueError(f"Comandă necunoscută: {option}") from None


def format_response(request_type: RequestType, response: Response) -> str:
    """Render a server response the way the client prints it."""
    if response.status != StatusCode.OK:
        return f"Eroare: {response.error_message}"
    timing = f"Timpul de procesare: {response.processing_time:.2f} secunde"
    if request_type == RequestType.COUNT_WORDS:
        return f"Numărul de cuvinte: {response.word_count}\n{timing}"
    if request_type == RequestType.DETERMINE_TOPIC:
        return f"Domeniul tematic: {response.topic or ''}\n{timing}"
    return f"Rezumat:\n{response.summary or ''}\n{timing}"


def _read_text(path: str) -> str | None:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        print(f"Eroare la deschiderea fișierului: {exc}", file=sys.stderr)
        return None
    if len(data) > MAX_TEXT_SIZE:
        print(f"Fișierul este prea mare, maxim {MAX_TEXT_SIZE} bytes permis")
        return None
    data = data.split(b"\0", 1)[0][: MAX_TEXT_SIZE - 1]
    return data.decode("utf-8", "ignore")


def _ask(prompt: str = "") -> str:
    try:
        return input(prompt)
    except EOFError:
        return ""


def main(argv: list[str] | None = None) -> int:
    """Send one request to the server and print its answer."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print(HELP_TEXT)
        return 1

    option, path = args
    try:
        request_type = parse_command(option)
    except ValueError as exc:
        print(exc)
        print(HELP_TEXT)
        return 1

    text = _read_text(path)
    if text is None:
        return 1

    try:
        sock = socket.create_connection((SERVER_HOST, SERVER_PORT))
    except OSError as exc:
        print(f"Eroare la conectarea la server: {exc}", file=sys.stderr)
        return 1

    with sock:
        try:
            send_request(sock, Request(request_type, text))
        except (OSError, ValueError) as exc:
            print(f"Eroare la trimiterea cererii: {exc}", file=sys.stderr)
            return 1
        try:
            response = receive_response(sock)
        except (OSError, ProtocolError) as exc:
            print(f"Eroare la primirea răspunsului: {exc}", file=sys.stderr)
            return 1

        print(format_response(request_type, response))

        choice = _ask("\nVreți să faceți o altă cerere? (d/n): ").strip()[:1]
        if choice in ("d", "D"):
            print("Clientul rămâne conectat. Introduceți o nouă comandă...")
            print("Pentru această demonstrație, clientul va rămâne conectat.")
            print("Apăsați Enter pentru a închide conexiunea...")
            _ask()
    return 0


if __name__ == "__main__":
    sys.exit(main())