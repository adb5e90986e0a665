"""Administrative tool that queries the server over its local socket."""

from __future__ import annotations

import socket
import sys
import time

from textdesk.protocol import (
    AdminCommand,
    AdminResponse,
    ProtocolError,
    StatusCode,
    receive_admin_response,
    send_admin_request,
)

ADMIN_SOCKET_PATH = "/tmp/nlp_admin_socket"

HELP_TEXT = (
    "Utilizare: admin_client COMANDA\n"
    "Comenzi disponibile:\n"
    "  --clients        - Afișează informații despre clienții conectați\n"
    "  --queue-status   - Afișează starea cozii de procesare"
)

_COMMANDS = {
    "--clients": AdminCommand.GET_CLIENTS,
    "--queue-status": AdminCommand.GET_QUEUE_STATUS,
}

_SEPARATOR = "-" * 61


def parse_command(option: str) -> AdminCommand:
    """Map a command-line option to its administrative command."""
    try:
        return _COMMANDS[option]
    except KeyError:
        raise ValueError(f"Comandă necunoscută: {option}") from None


def format_admin_response(command: AdminCommand, response: AdminResponse) -> str:
    """Render an administrative response the way the tool prints it."""
    if response.status != StatusCode.OK:
        return f"Eroare: {response.error_message}"
    if command == AdminCommand.GET_CLIENTS:
        lines = [
            f"Număr total de clienți: {response.client_count}",
            f"{'ID':<5} {'Adresă':<20} {'Conectat la':<25} {'Cereri':<15}",
            _SEPARATOR,
        ]
        for number, info in enumerate(response.clients, start=1):
            connected = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(info.connect_time))
            lines.append(
                f"{number:<5} {info.address:<20} {connected:<25} {info.request_count:<15}"
            )
        return "\n".join(lines)
    return (
        "Starea cozii de procesare:\n"
        f"Cereri în așteptare: {response.queue_size} / {response.queue_capacity}"
    )


def main(argv: list[str] | None = None) -> int:
    """Send one administrative command and print the answer."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(HELP_TEXT)
        return 1
    try:
        command = parse_command(args[0])
    except ValueError as exc:
        print(exc)
        print(HELP_TEXT)
        return 1

    try:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    except OSError as exc:
        print(f"Eroare la crearea socket-ului: {exc}", file=sys.stderr)
        return 1

    with sock:
        try:
            sock.connect(ADMIN_SOCKET_PATH)
        except OSError as exc:
            print(f"Eroare la conectarea la server: {exc}", file=sys.stderr)
            return 1
        try:
            send_admin_request(sock, command)
        except OSError as exc:
            print(f"Eroare la trimiterea cererii administrative: {exc}", file=sys.stderr)
            return 1
        try:
            response = receive_admin_response(sock)
        except (OSError, ProtocolError) as exc:
            print(f"Eroare la primirea răspunsului administrativ: {exc}", file=sys.stderr)
            return 1

    print(format_admin_response(command, response))
    return 0


if __name__ == "__main__":
    sys.exit(main())