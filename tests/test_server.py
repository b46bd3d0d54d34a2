"""Tests for the static file server."""

import socket
import threading
import urllib.request
from datetime import datetime

import pytest

from cyber_zen.core.errors import ToolEnvironmentError, UserInputError
from cyber_zen.core.server import (
    create_server,
    format_request_line,
    is_port_in_use,
    method_label,
    validate_port,
)


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def busy_port():
    """A port held by a listening socket for the duration of the test."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        s.listen(1)
        yield s.getsockname()[1]


@pytest.mark.parametrize("port", [0, -1, 65536, 100000])
def test_port_out_of_range(port):
    with pytest.raises(UserInputError):
        validate_port(port)


def test_busy_port_is_detected(busy_port):
    assert is_port_in_use(busy_port)


def test_server_refuses_busy_port(busy_port, tmp_path):
    with pytest.raises(ToolEnvironmentError, match="already in use"):
        create_server(tmp_path, busy_port)


def test_server_refuses_missing_directory(tmp_path):
    with pytest.raises(UserInputError, match="does not exist"):
        create_server(tmp_path / "missing", free_port())


def test_request_line_format():
    now = datetime(2024, 1, 1, 12, 30, 5)

    assert format_request_line("GET", "/index.html", now) == "[12:30:05] 🔍 GET /index.html"
    assert format_request_line("PATCH", "/x", now) == "[12:30:05] ❓ PATCH /x"


def test_method_labels():
    assert method_label("POST") == "📝 POST"
    assert method_label("DELETE") == "🗑️  DELETE"


def test_serves_files_and_reports_requests(tmp_path):
    (tmp_path / "hello.txt").write_text("hello from cyber-zen")
    lines = []
    server = create_server(tmp_path, free_port(), host="127.0.0.1", request_sink=lines.append)
    port = server.server_address[1]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    try:
        with urllib.request.urlopen(f"http://127.0.0.1:{port}/hello.txt", timeout=5) as response:
            body = response.read().decode()
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)

    assert body == "hello from cyber-zen"
    assert len(lines) == 1
    assert lines[0].endswith("🔍 GET /hello.txt")
