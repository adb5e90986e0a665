"""Binary wire protocol shared by the text server, its clients and the admin tool."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass, field
from enum import IntEnum

MAX_TEXT_SIZE = 65536
MAX_ERROR_MSG = 256
MAX_CLIENTS = 10

_ADDRESS_SIZE = 50

_INT = struct.Struct("=i")
_SIZE = struct.Struct("=Q")
_DOUBLE = struct.Struct("=d")
# fd, address[50], padding, connect_time, request_count, padding
_CLIENT_INFO = struct.Struct("=i50s2xqi4x")


class ProtocolError(Exception):
    """Raised when a peer closes early or sends a malformed message."""


class RequestType(IntEnum):
    COUNT_WORDS = 1
    DETERMINE_TOPIC = 2
    GENERATE_SUMMARY = 3


class StatusCode(IntEnum):
    OK = 0
    ERROR = 1


class AdminCommand(IntEnum):
    GET_CLIENTS = 1
    GET_QUEUE_STATUS = 2


@dataclass
class Request:
    """A text processing request; an unrecognised type is kept as a plain int."""

    type: RequestType | int
    text: str


@dataclass
class Response:
    """The outcome of a processing request."""

    status: StatusCode = StatusCode.OK
    word_count: int = 0
    topic: str | None = None
    summary: str | None = None
    processing_time: float = 0.0
    error_message: str = ""


@dataclass
class ClientInfo:
    """What the server knows about one connected client."""

    fd: int
    address: str
    connect_time: int
    request_count: int = 0


@dataclass
class AdminResponse:
    """Answer to an administrative command."""

    status: StatusCode = StatusCode.OK
    clients: list[ClientInfo] = field(default_factory=list)
    queue_size: int = 0
    queue_capacity: int = 0
    error_message: str = ""

    @property
    def client_count(self) -> int:
        return len(self.clients)


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = sock.recv(remaining)
        if not chunk:
            raise ProtocolError("connection closed by peer")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _recv_struct(sock: socket.socket, layout: struct.Struct) -> tuple:
    return layout.unpack(_recv_exact(sock, layout.size))


def _recv_int(sock: socket.socket) -> int:
    return _recv_struct(sock, _INT)[0]


def _recv_size(sock: socket.socket) -> int:
    return _recv_struct(sock, _SIZE)[0]


def _encode_c_string(text: str) -> bytes:
    return text.split("\0", 1)[0].encode("utf-8") + b"\0"


def _decode_c_string(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", "replace")


def _recv_c_string(sock: socket.socket, length: int) -> str:
    if length <= 0:
        raise ProtocolError("empty string field")
    return _decode_c_string(_recv_exact(sock, length))


def _send_string_field(sock: socket.socket, text: str | None) -> None:
    if text is None:
        sock.sendall(_SIZE.pack(0))
        return
    encoded = _encode_c_string(text)
    sock.sendall(_SIZE.pack(len(encoded)) + encoded)


def _status_from_wire(value: int) -> StatusCode:
    return StatusCode.OK if value == StatusCode.OK else StatusCode.ERROR


def _receive_error_message(sock: socket.socket) -> str:
    length = _recv_size(sock)
    if length > MAX_ERROR_MSG:
        raise ProtocolError(f"error message of {length} bytes exceeds {MAX_ERROR_MSG}")
    return _recv_c_string(sock, length)


def send_request(sock: socket.socket, request: Request) -> None:
    """Send a request: type, text length including the terminator, then the text."""
    encoded = _encode_c_string(request.text)
    if len(encoded) > MAX_TEXT_SIZE:
        raise ValueError(f"text of {len(encoded)} bytes exceeds {MAX_TEXT_SIZE}")
    sock.sendall(_INT.pack(int(request.type)) + _SIZE.pack(len(encoded)) + encoded)


def receive_request(sock: socket.socket) -> Request:
    """Read one request from the socket."""
    raw_type = _recv_int(sock)
    length = _recv_size(sock)
    if length > MAX_TEXT_SIZE:
        raise ProtocolError(f"text of {length} bytes exceeds {MAX_TEXT_SIZE}")
    text = _recv_c_string(sock, length)
    try:
        request_type: RequestType | int = RequestType(raw_type)
    except ValueError:
        request_type = raw_type
    return Request(request_type, text)


def send_response(sock: socket.socket, response: Response) -> None:
    """Send a response; the fields that follow depend on its status."""
    sock.sendall(_INT.pack(int(response.status)))
    if response.status == StatusCode.OK:
        sock.sendall(_INT.pack(response.word_count) + _DOUBLE.pack(response.processing_time))
        _send_string_field(sock, response.topic)
        _send_string_field(sock, response.summary)
    else:
        _send_string_field(sock, response.error_message)


def receive_response(sock: socket.socket) -> Response:
    """Read one response from the socket."""
    status = _status_from_wire(_recv_int(sock))
    if status != StatusCode.OK:
        return Response(status=status, error_message=_receive_error_message(sock))

    word_count = _recv_int(sock)
    processing_time = _recv_struct(sock, _DOUBLE)[0]
    topic_length = _recv_size(sock)
    topic = _recv_c_string(sock, topic_length) if topic_length > 0 else None
    summary_length = _recv_size(sock)
    summary = _recv_c_string(sock, summary_length) if summary_length > 0 else None
    return Response(
        status=status,
        word_count=word_count,
        topic=topic,
        summary=summary,
        processing_time=processing_time,
    )


def send_admin_request(sock: socket.socket, command: AdminCommand | int) -> None:
    """Send an administrative command."""
    sock.sendall(_INT.pack(int(command)))


def receive_admin_request(sock: socket.socket) -> AdminCommand | int:
    """Read an administrative command; an unrecognised one is returned as a plain int."""
    raw = _recv_int(sock)
    try:
        return AdminCommand(raw)
    except ValueError:
        return raw


def send_admin_response(sock: socket.socket, response: AdminResponse) -> None:
    """Send an administrative response, with client records when there are any."""
    sock.sendall(_INT.pack(int(response.status)))
    if response.status != StatusCode.OK:
        _send_string_field(sock, response.error_message)
        return
    if len(response.clients) > MAX_CLIENTS:
        raise ValueError(f"at most {MAX_CLIENTS} clients fit in a response")
    header = (
        _INT.pack(len(response.clients))
        + _INT.pack(response.queue_size)
        + _INT.pack(response.queue_capacity)
    )
    records = b"".join(
        _CLIENT_INFO.pack(
            client.fd,
            client.address.encode("ascii", "replace")[: _ADDRESS_SIZE - 1],
            client.connect_time,
            client.request_count,
        )
        for client in response.clients
    )
    sock.sendall(header + records)


def receive_admin_response(sock: socket.socket) -> AdminResponse:
    """Read an administrative response."""
    status = _status_from_wire(_recv_int(sock))
    if status != StatusCode.OK:
        return AdminResponse(status=status, error_message=_receive_error_message(sock))

    client_count = _recv_int(sock)
    queue_size = _recv_int(sock)
    queue_capacity = _recv_int(sock)
    if client_count > MAX_CLIENTS:
        raise ProtocolError(f"client count {client_count} exceeds {MAX_CLIENTS}")
    clients = []
    for _ in range(max(client_count, 0)):
        fd, address, connect_time, request_count = _recv_struct(sock, _CLIENT_INFO)
        clients.append(ClientInfo(fd, _decode_c_string(address), connect_time, request_count))
    return AdminResponse(
        status=status,
        clients=clients,
        queue_size=queue_size,
        queue_capacity=queue_capacity,
    )