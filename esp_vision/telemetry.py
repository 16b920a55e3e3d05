"""
TCP telemetry sink
Streams tracked centroids as "<x> <y> \\n" text lines to an ESP TcpInputStream
"""
import socket


class TelemetryError(ConnectionError):
    """The telemetry peer could not be reached at startup"""


def format_centroid(cx, cy):
    return f"{int(cx)} {int(cy)} \n"


class TelemetryClient:
    """
    One TCP connection held for the whole session

    There is no reconnection: a failed connect is fatal, failed writes are dropped.
    """

    def __init__(self, host='127.0.0.1', port=8001):
        self.host = host
        self.port = port
        self.sock = None

    @property
    def connected(self):
        return self.sock is not None

    def connect(self):
        try:
            self.sock = socket.create_connection((self.host, self.port))
        except OSError as e:
            raise TelemetryError(f"The server is not on ({self.host}:{self.port}): {e}") from e
        return self

    def send_centroid(self, cx, cy):
        """Write one centroid line; returns False when the write did not go out"""
        if self.sock is None:
            return False
        try:
            self.sock.sendall(format_centroid(cx, cy).encode('ascii'))
        except OSError:
            # best effort: no retry, no buffering
            return False
        return True

    def close(self):
        if self.sock is not None:
            try:
                self.sock.close()
            finally:
                self.sock = None

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc, tb):
        self.close()
