import socket
import threading

import pytest

from textdesk import client
from textdesk.protocol import (
    MAX_TEXT_SIZE,
    RequestType,
    Response,
    StatusCode,
    receive_request,
    send_response,
)


@pytest.mark.parametrize(
    "option, expected",
    [
        ("--count-words", RequestType.COUNT_WORDS),
        ("--determine-topic", RequestType.DETERMINE_TOPIC),
        ("--generate-summary", RequestType.GENERATE_SUMMARY),
    ],
)
def test_parse_command(option, expected):
    assert client.parse_command(option) == expected


def test_parse_command_unknown():
    with pytest.raises(ValueError, match="Comandă necunoscută: --bogus"):
        client.parse_command("--bogus")


def test_format_count_words():
    text = client.format_response(RequestType.COUNT_WORDS, Response(word_count=5))
    assert text.splitlines() == ["Numărul de cuvinte: 5", "Timpul de procesare: 0.00 secunde"]


def test_format_topic():
    text = client.format_response(RequestType.DETERMINE_TOPIC, Response(topic="Sport"))
    assert text.startswith("Domeniul tematic: Sport\n")


def test_format_summary():
    text = client.format_response(RequestType.GENERATE_SUMMARY, Response(summary="Ceva. "))
    assert text.splitlines()[:2] == ["Rezumat:", "Ceva. "]


def test_format_error():
    response = Response(status=StatusCode.ERROR, error_message="Tip de cerere necunoscut")
    assert client.format_response(RequestType.COUNT_WORDS, response) == "Eroare: Tip de cerere necunoscut"


def test_main_wrong_argument_count(capsys):
    assert client.main([]) == 1
    assert "Utilizare: client_bin COMANDA FIȘIER" in capsys.readouterr().out


def test_main_unknown_command(capsys, tmp_path):
    assert client.main(["--nope", str(tmp_path / "x.txt")]) == 1
    assert "Comandă necunoscută: --nope" in capsys.readouterr().out


def test_main_missing_file(tmp_path):
    assert client.main(["--count-words", str(tmp_path / "missing.txt")]) == 1


def test_main_file_too_large(capsys, tmp_path):
    big = tmp_path / "big.txt"
    big.write_bytes(b"a" * (MAX_TEXT_SIZE + 1))
    assert client.main(["--count-words", str(big)]) == 1
    assert "Fișierul este prea mare" in capsys.readouterr().out


def test_main_full_exchange(capsys, tmp_path, monkeypatch):
    listener = socket.socket()
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    received = {}

    def serve():
        conn, _ = listener.accept()
        with conn:
            request = receive_request(conn)
            received["request"] = request
            send_response(conn, Response(word_count=7, processing_time=1.0))
            conn.recv(1)

    worker = threading.Thread(target=serve, daemon=True)
    worker.start()

    document = tmp_path / "doc.txt"
    document.write_text("Meci de fotbal azi.", encoding="utf-8")
    monkeypatch.setattr(client, "SERVER_PORT", listener.getsockname()[1])
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")

    try:
        assert client.main(["--count-words", str(document)]) == 0
    finally:
        worker.join(timeout=5)
        listener.close()

    assert received["request"].text == "Meci de fotbal azi."
    assert received["request"].type == RequestType.COUNT_WORDS
    out = capsys.readouterr().out
    assert "Numărul de cuvinte: 7" in out
    assert "Timpul de procesare: 1.00 secunde" in out