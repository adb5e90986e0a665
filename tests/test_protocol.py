import socket
import struct

import pytest

from textdesk.protocol import (
    MAX_CLIENTS,
    MAX_ERROR_MSG,
    MAX_TEXT_SIZE,
    AdminCommand,
    AdminResponse,
    ClientInfo,
    ProtocolError,
    Request,
    RequestType,
    Response,
    StatusCode,
    receive_admin_request,
    receive_admin_response,
    receive_request,
    receive_response,
    send_admin_request,
    send_admin_response,
    send_request,
    send_response,
)


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    left.settimeout(5)
    right.settimeout(5)
    yield left, right
    left.close()
    right.close()


def _recv_exact(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def test_request_round_trip(pair):
    left, right = pair
    send_request(left, Request(RequestType.GENERATE_SUMMARY, "Fotbal și tenis. Meci bun!"))
    received = receive_request(right)
    assert received == Request(RequestType.GENERATE_SUMMARY, "Fotbal și tenis. Meci bun!")


def test_request_wire_layout(pair):
    left, right = pair
    expected = struct.pack("=i", 1) + struct.pack("=Q", 3) + b"ab\0"
    send_request(left, Request(RequestType.COUNT_WORDS, "ab"))
    data = _recv_exact(right, len(expected))
    assert data == expected
    right.sendall(data)
    received = receive_request(left)
    assert received == Request(RequestType.COUNT_WORDS, "ab")


def test_request_unknown_type_kept(pair):
    left, right = pair
    send_request(left, Request(9, "x"))
    received = receive_request(right)
    assert received.type == 9
    assert received.text == "x"


def test_request_text_too_long_rejected(pair):
    left, right = pair
    left.sendall(struct.pack("=i", 1) + struct.pack("=Q", MAX_TEXT_SIZE + 1))
    with pytest.raises(ProtocolError):
        receive_request(right)


def test_send_request_too_large_raises(pair):
    left, _ = pair
    with pytest.raises(ValueError):
        send_request(left, Request(RequestType.COUNT_WORDS, "a" * MAX_TEXT_SIZE))


def test_receive_request_on_closed_socket(pair):
    left, right = pair
    left.close()
    with pytest.raises(ProtocolError):
        receive_request(right)


def test_ok_response_round_trip(pair):
    left, right = pair
    sent = Response(word_count=12, topic="Sport", summary="Un rezumat. ", processing_time=2.0)
    send_response(left, sent)
    assert receive_response(right) == sent


def test_ok_response_without_optional_fields(pair):
    left, right = pair
    send_response(left, Response(word_count=4))
    received = receive_response(right)
    assert received.topic is None
    assert received.summary is None
    assert received.word_count == 4


def test_error_response_round_trip(pair):
    left, right = pair
    send_response(left, Response(status=StatusCode.ERROR, error_message="Tip de cerere necunoscut"))
    received = receive_response(right)
    assert received.status == StatusCode.ERROR
    assert received.error_message == "Tip de cerere necunoscut"


def test_error_response_too_long_rejected(pair):
    left, right = pair
    left.sendall(struct.pack("=i", 1) + struct.pack("=Q", MAX_ERROR_MSG + 1))
    with pytest.raises(ProtocolError):
        receive_response(right)


def test_admin_request_wire_and_round_trip(pair):
    left, right = pair
    send_admin_request(left, AdminCommand.GET_QUEUE_STATUS)
    assert _recv_exact(right, 4) == struct.pack("=i", 2)
    send_admin_request(left, AdminCommand.GET_CLIENTS)
    assert receive_admin_request(right) == AdminCommand.GET_CLIENTS


def test_admin_request_unknown_command(pair):
    left, right = pair
    send_admin_request(left, 42)
    assert receive_admin_request(right) == 42


def test_admin_response_round_trip(pair):
    left, right = pair
    clients = [
        ClientInfo(fd=5, address="127.0.0.1", connect_time=1700000000, request_count=3),
        ClientInfo(fd=6, address="10.0.0.2", connect_time=1700000100, request_count=0),
    ]
    sent = AdminResponse(clients=clients, queue_size=1, queue_capacity=100)
    send_admin_response(left, sent)
    received = receive_admin_response(right)
    assert received == sent
    assert received.client_count == len(clients)


def test_admin_error_response_round_trip(pair):
    left, right = pair
    message = "Comandă de administrare necunoscută"
    send_admin_response(left, AdminResponse(status=StatusCode.ERROR, error_message=message))
    received = receive_admin_response(right)
    assert received.status == StatusCode.ERROR
    assert received.error_message == message


def test_admin_response_too_many_clients_rejected(pair):
    left, right = pair
    left.sendall(struct.pack("=iiii", 0, MAX_CLIENTS + 1, 0, 100))
    with pytest.raises(ProtocolError):
        receive_admin_response(right)


def test_send_admin_response_too_many_clients(pair):
    left, _ = pair
    clients = [ClientInfo(i, "127.0.0.1", 0) for i in range(MAX_CLIENTS + 1)]
    with pytest.raises(ValueError):
        send_admin_response(left, AdminResponse(clients=clients))