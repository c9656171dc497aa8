"""Minimal TCP client and server used to pass job messages around."""

from __future__ import annotations

import socket

_BUFFER_SIZE = 1024


class Client:
    """A TCP client that sends a single text message to a local port."""

    def __init__(self, port: int, host: str = "127.0.0.1") -> None:
        self.address = (host, port)
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

    def connect_to_server(self) -> None:
        """Open the connection to the server."""
        self._sock.connect(self.address)

    def send_msg(self, msg: str) -> None:
        """Send ``msg`` encoded as UTF-8."""
        self._sock.sendall(msg.encode("utf-8"))

    def close_connection(self) -> None:
        """Close the connection."""
        self._sock.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args) -> None:
        self.close_connection()


class Server:
    """A TCP server that accepts connections and reads one message from each."""

    def __init__(self, port: int, host: str = "") -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind((host, port))
        self._listening = False
        self._conn: socket.socket | None = None

    @property
    def port(self) -> int:
        """The port the server is bound to."""
        return self._sock.getsockname()[1]

    def get_connection(self) -> None:
        """Wait for and accept the next client connection."""
        if not self._listening:
            self._sock.listen(5)
            self._listening = True
        if self._conn is not None:
            self._conn.close()
        self._conn, _ = self._sock.accept()

    def get_msg(self) -> str:
        """Read one message (up to 1024 bytes) from the current connection."""
        if self._conn is None:
            raise RuntimeError("no client connection; call get_connection() first")
        data = self._conn.recv(_BUFFER_SIZE)
        data = data.split(b"\0", 1)[0]
        return data.decode("utf-8", errors="replace")

    def close_server(self) -> None:
        """Close the client connection and the listening socket."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        self._sock.close()

    def __enter__(self) -> "Server":
        return self

    def __exit__(self, *args) -> None:
        self.close_server()