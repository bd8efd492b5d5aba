# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

PROXY_ENV_VARS = (
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "NO_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
    "no_proxy",
)


class _RecordingHandler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802
        self.server.user_agents.append(self.headers.get("User-Agent"))
        self.server.paths.append(self.path)
        body = b"ok"
        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):  # noqa: A002,ARG002
        return None


@pytest.fixture
def no_proxy_env(monkeypatch):
    for name in PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def ua_server(no_proxy_env):
    """Local HTTP server recording the User-Agent of each request (None when absent)."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _RecordingHandler)
    server.user_agents = []
    server.paths = []
    server.url = f"http://127.0.0.1:{server.server_address[1]}/"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
