"""Shared fixtures: logging sandbox, settings builder and mocked HTTP."""

from __future__ import annotations

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Callable, Mapping, Union

import httpx
import pytest

from param_harvester.config import ProbeSettings
from param_harvester.engine import Prober
from param_harvester.logging_conf import configure_logging

LOGIN_PAGE = """
<html><body>
<form name="login" action="/session">
  <input type="text" name="username">
  <input type="password" name='password' id="pw-field">
  <input type="hidden" id="csrf_token">
</form>
<a href="/x?token=abc&redirect=home">click</a>
<a class="nav" href="https://example.com/docs">docs</a>
<script>var cfg = {"apiKey": "k", "user.name": "n"};</script>
</body></html>
"""


@pytest.fixture(scope="session", autouse=True)
def _sandbox_logging(tmp_path_factory: pytest.TempPathFactory) -> None:
    configure_logging(log_dir=tmp_path_factory.mktemp("logs"))


@pytest.fixture
def login_page() -> str:
    return LOGIN_PAGE


@pytest.fixture
def make_settings() -> Callable[..., ProbeSettings]:
    def _builder(**overrides: Any) -> ProbeSettings:
        base: dict[str, Any] = {"timeout": 2.0}
        base.update(overrides)
        return ProbeSettings(**base)

    return _builder


Route = Union[str, int, Callable[[httpx.Request], httpx.Response], Exception]


def _respond(route: Route, request: httpx.Request) -> httpx.Response:
    if isinstance(route, Exception):
        raise route
    if callable(route):
        return route(request)
    if isinstance(route, int):
        return httpx.Response(route, request=request)
    return httpx.Response(200, request=request, text=route)


@pytest.fixture
def mock_client() -> Callable[[Mapping[str, Route]], httpx.Client]:
    """Build an httpx client answering from a URL → route mapping."""

    clients: list[httpx.Client] = []

    def _builder(routes: Mapping[str, Route]) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(str(request.url))
            if route is None:
                return httpx.Response(404, request=request, text="")
            return _respond(route, request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _builder
    for client in clients:
        client.close()


@pytest.fixture
def mock_prober(mock_client, make_settings) -> Callable[..., Prober]:
    def _builder(routes: Mapping[str, Route], **overrides: Any) -> Prober:
        return Prober(make_settings(**overrides), client=mock_client(routes), sleep=lambda _s: None)

    return _builder


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "out" / "params.txt"


class _TrickleHandler(BaseHTTPRequestHandler):
    """``/fast`` answers at once; anything else sends its body a byte at a time."""

    fast_body = b'<input name="fast_param">'
    slow_body = b'<input name="slow_param">'
    byte_interval = 0.2

    def do_GET(self) -> None:  # noqa: N802
        body = self.fast_body if self.path.startswith("/fast") else self.slow_body
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        try:
            if body is self.fast_body:
                self.wfile.write(body)
                return
            for byte in body:
                self.wfile.write(bytes([byte]))
                time.sleep(self.byte_interval)
        except OSError:
            # client gave up on the response
            return

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        pass


class _TrickleServer(ThreadingHTTPServer):
    request_queue_size = 256


@pytest.fixture
def trickle_server(monkeypatch: pytest.MonkeyPatch) -> str:
    """Base URL of a local server with prompt and trickling endpoints."""

    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    server = _TrickleServer(("127.0.0.1", 0), _TrickleHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()
