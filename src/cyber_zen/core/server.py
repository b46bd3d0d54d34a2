"""Static file server built on the standard library handler."""

import socket
from datetime import datetime
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from cyber_zen.core.errors import ToolEnvironmentError, UserInputError

DEFAULT_PORT = 3000
MIN_PORT = 1
MAX_PORT = 65535

METHOD_LABELS = {
    "GET": "🔍 GET",
    "HEAD": "👀 HEAD",
    "POST": "📝 POST",
    "PUT": "✏️  PUT",
    "DELETE": "🗑️  DELETE",
}

RequestSink = Callable[[str], None]


def method_label(method: str) -> str:
    return METHOD_LABELS.get(method, f"❓ {method}")


def format_request_line(method: str, path: str, now: Optional[datetime] = None) -> str:
    """Render one access log line: ``[HH:MM:SS] <label> <path>``."""
    timestamp = (now or datetime.now()).strftime("%H:%M:%S")
    return f"[{timestamp}] {method_label(method)} {path}"


def validate_port(port: int) -> int:
    if not MIN_PORT <= port <= MAX_PORT:
        raise UserInputError(f"Port must be between {MIN_PORT} and {MAX_PORT}, got {port}")
    return port


def is_port_in_use(port: int, host: str = "") -> bool:
    """Probe the port by binding and immediately releasing it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        try:
            probe.bind((host, port))
            probe.listen(1)
        except OSError:
            return True
    return False


class LoggingRequestHandler(SimpleHTTPRequestHandler):
    """Serves files from a directory and reports every request to a sink."""

    def __init__(self, *args, request_sink: Optional[RequestSink] = None, **kwargs):
        self.request_sink = request_sink
        super().__init__(*args, **kwargs)

    def _report(self) -> None:
        line = format_request_line(self.command, self.path)
        if self.request_sink is not None:
            self.request_sink(line)
        logger.debug(f"{self.client_address[0]} {self.command} {self.path}")

    def parse_request(self):
        if not super().parse_request():
            return False
        self._report()
        return True

    def log_message(self, format, *args):
        # Access lines go through the request sink instead of stderr
        logger.debug(format % args)


def create_server(
    directory: Path,
    port: int = DEFAULT_PORT,
    host: str = "",
    request_sink: Optional[RequestSink] = None,
) -> ThreadingHTTPServer:
    """Validate arguments and bind a server for directory without serving yet."""
    validate_port(port)

    directory = Path(directory)
    if not directory.is_dir():
        raise UserInputError(f"Directory does not exist: {directory}")

    if is_port_in_use(port, host):
        raise ToolEnvironmentError(f"Port {port} is already in use")

    handler = partial(
        LoggingRequestHandler,
        directory=str(directory.resolve()),
        request_sink=request_sink,
    )
    try:
        return ThreadingHTTPServer((host, port), handler)
    except OSError as e:
        raise ToolEnvironmentError(f"Failed to start server on port {port}: {e}") from e


def serve(server: ThreadingHTTPServer) -> None:
    """Serve until interrupted, then release the socket."""
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.debug("Server interrupted")
    finally:
        server.server_close()
