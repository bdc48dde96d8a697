from __future__ import annotations

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, Iterator

import pytest


class _SlowHandler(BaseHTTPRequestHandler):
    delay = 0.0

    def do_GET(self) -> None:  # noqa: N802 - http.server naming
        time.sleep(self.delay)
        body = b"ok\n"
        try:
            self.send_response(200)
            self.send_header("Content-Type", "text/plain")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture
def slow_server() -> Iterator[Callable[[float], str]]:
    """Start a local server that sleeps ``delay`` seconds before answering."""
    servers: list[ThreadingHTTPServer] = []

    def start(delay: float) -> str:
        handler = type("Handler", (_SlowHandler,), {"delay": delay})
        server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
        server.daemon_threads = True
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        host, port = server.server_address[:2]
        return f"http://{host}:{port}/"

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()


class _RedirectingEchoHandler(BaseHTTPRequestHandler):
    """Answer ``/a`` with a redirect to ``/b`` and record every request body."""

    status = 307
    received: list[tuple[str, bytes]] = []

    def _read_body(self) -> bytes:
        if self.headers.get("Transfer-Encoding", "").lower() == "chunked":
            chunks: list[bytes] = []
            while True:
                size = int(self.rfile.readline().split(b";")[0].strip(), 16)
                if size == 0:
                    self.rfile.readline()
                    return b"".join(chunks)
                chunks.append(self.rfile.read(size))
                self.rfile.readline()
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length)

    def _respond(self, status: int, body: bytes, location: str | None = None) -> None:
        self.send_response(status)
        if location is not None:
            self.send_header("Location", location)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_POST(self) -> None:  # noqa: N802 - http.server naming
        body = self._read_body()
        self.received.append((self.path, body))
        if self.path == "/a":
            self._respond(self.status, b"moved", location="/b")
        else:
            self._respond(200, body)

    do_PUT = do_POST
    do_GET = do_POST

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture
def redirecting_server() -> Iterator[Callable[[int], tuple[str, list[tuple[str, bytes]]]]]:
    """Start a local server whose ``/a`` redirects to ``/b`` with ``status``.

    Returns the ``/a`` URL and the list of ``(path, body)`` pairs received.
    """
    servers: list[ThreadingHTTPServer] = []

    def start(status: int) -> tuple[str, list[tuple[str, bytes]]]:
        received: list[tuple[str, bytes]] = []
        handler = type("Handler", (_RedirectingEchoHandler,), {"status": status, "received": received})
        server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        host, port = server.server_address[:2]
        return f"http://{host}:{port}/a", received

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()
