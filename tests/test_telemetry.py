import socket

import pytest

from esp_vision import TelemetryClient, TelemetryError, format_centroid


@pytest.fixture
def server():
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.bind(('127.0.0.1', 0))
    srv.listen(1)
    srv.settimeout(5)
    yield srv
    srv.close()


def read_all(conn):
    data = b''
    while True:
        chunk = conn.recv(1024)
        if not chunk:
            return data
        data += chunk


def test_format_centroid():
    assert format_centroid(40, 40) == "40 40 \n"
    assert format_centroid(0, 123) == "0 123 \n"


def test_lines_reach_the_server(server):
    port = server.getsockname()[1]
    client = TelemetryClient('127.0.0.1', port).connect()
    conn, _ = server.accept()
    conn.settimeout(5)

    assert client.send_centroid(40, 40)
    assert client.send_centroid(12, 7)
    client.close()

    data = read_all(conn)
    conn.close()
    assert data == b"40 40 \n12 7 \n"
    lines = [tuple(int(v) for v in line.split()) for line in data.decode().splitlines()]
    assert lines == [(40, 40), (12, 7)]


def test_context_manager(server):
    port = server.getsockname()[1]
    with TelemetryClient('127.0.0.1', port) as client:
        assert client.connected
    assert not client.connected


def test_connect_refused(unused_port):
    client = TelemetryClient('127.0.0.1', unused_port)
    with pytest.raises(TelemetryError):
        client.connect()
    assert not client.connected


class BrokenSocket:
    def sendall(self, data):
        raise BrokenPipeError("peer went away")

    def close(self):
        pass


def test_write_failure_is_ignored():
    client = TelemetryClient()
    client.sock = BrokenSocket()
    assert client.send_centroid(1, 2) is False


def test_send_without_connection():
    assert TelemetryClient().send_centroid(1, 2) is False
