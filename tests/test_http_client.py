"""Tests for vazhi.ui.http_client – QtHttpBackend against a local HTTP server."""

from __future__ import annotations

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List

import pytest
from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer

from vazhi.core.api import FetchFailure, WriteFailure
from vazhi.ui.http_client import QtHttpBackend

PATHS = [{"id": "p1", "name": "Path p1", "milestones": []}]


class _Handler(BaseHTTPRequestHandler):
    posted: List[Dict[str, Any]] = []

    def log_message(self, format, *args) -> None:
        pass

    def _reply(self, status: int, body: bytes, content_type: str = "application/json") -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self) -> None:
        if self.path == "/api/career-paths":
            self._reply(200, json.dumps(PATHS).encode("utf-8"))
        elif self.path == "/api/progress/u/p1":
            self._reply(200, json.dumps({"completed_milestones": ["m1"]}).encode("utf-8"))
        elif self.path == "/api/progress/u/text":
            self._reply(200, b"not json", "text/plain")
        else:
            self._reply(500, b'{"detail": "server error"}')

    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length", 0))
        body = json.loads(self.rfile.read(length).decode("utf-8"))
        if self.path == "/api/progress/u/p1":
            _Handler.posted.append(body)
            self._reply(200, b'{"ok": true}')
        else:
            self._reply(500, b'{"detail": "server error"}')


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module")
def qapp():
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture(scope="module")
def base_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}/api"
    server.shutdown()
    server.server_close()


@pytest.fixture()
def backend(qapp, base_url) -> QtHttpBackend:
    _Handler.posted.clear()
    return QtHttpBackend(base_url)


def run_request(start) -> Dict[str, Any]:
    """Start a request and spin the event loop until one of its callbacks fires."""
    loop = QEventLoop()
    result: Dict[str, Any] = {}

    def on_success(payload):
        result["payload"] = payload
        loop.quit()

    def on_failure(error):
        result["error"] = error
        loop.quit()

    timer = QTimer()
    timer.setSingleShot(True)
    timer.timeout.connect(loop.quit)
    start(on_success, on_failure)
    timer.start(5000)
    if not result:
        loop.exec()
    timer.stop()
    assert result, "request did not finish"
    return result


def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


# ---------------------------------------------------------------------------
# GET
# ---------------------------------------------------------------------------

class TestFetch:
    def test_career_paths_payload(self, backend):
        result = run_request(backend.fetch_career_paths)
        assert result == {"payload": PATHS}

    def test_progress_payload(self, backend):
        result = run_request(lambda ok, fail: backend.fetch_progress("u", "p1", ok, fail))
        assert result == {"payload": {"completed_milestones": ["m1"]}}

    def test_server_error_is_fetch_failure(self, backend):
        result = run_request(lambda ok, fail: backend.fetch_progress("u", "bad", ok, fail))
        assert isinstance(result["error"], FetchFailure)
        assert "payload" not in result

    def test_non_json_body_is_fetch_failure(self, backend):
        result = run_request(lambda ok, fail: backend.fetch_progress("u", "text", ok, fail))
        assert isinstance(result["error"], FetchFailure)
        assert "invalid JSON" in str(result["error"])

    def test_unreachable_server_is_fetch_failure(self, qapp):
        offline = QtHttpBackend(f"http://127.0.0.1:{unused_port()}/api")
        result = run_request(offline.fetch_career_paths)
        assert isinstance(result["error"], FetchFailure)


# ---------------------------------------------------------------------------
# POST
# ---------------------------------------------------------------------------

class TestPost:
    def test_sends_body_and_acknowledges(self, backend):
        body = {"milestone_id": "m2", "completed": True}
        result = run_request(lambda ok, fail: backend.post_progress("u", "p1", body, ok, fail))
        assert result == {"payload": None}
        assert _Handler.posted == [body]

    def test_failed_write_is_write_failure(self, backend):
        body = {"milestone_id": "m2", "completed": False}
        result = run_request(lambda ok, fail: backend.post_progress("u", "broken", body, ok, fail))
        assert isinstance(result["error"], WriteFailure)
        assert _Handler.posted == []
