"""Shared fixtures: recording logger, temp static dir, mocked upstream."""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, LogSettings, ProxySettings


class RecordingLogger:
    """RequestLogger that keeps every call in memory."""

    def __init__(self) -> None:
        self.incoming: list[tuple[str, str, str, dict[str, str], Any]] = []
        self.requests: list[tuple[str, str]] = []
        self.responses: list[tuple[str, int, str]] = []
        self.events: list[tuple[str, str]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_incoming(self, provider, method, path, headers, body) -> None:
        self.incoming.append((provider, method, path, headers, body))

    def log_request(self, provider: str, summary: str) -> None:
        self.requests.append((provider, summary))

    def log_response(self, provider: str, status: int, detail: str = "") -> None:
        self.responses.append((provider, status, detail))

    def log_event(self, provider: str, message: str) -> None:
        self.events.append((provider, message))

    def log_error(self, route: str, status: int, message: str) -> None:
        self.errors.append((route, status, message))


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    root = tmp_path / "static"
    (root / "images").mkdir(parents=True)
    (root / "index.html").write_text("<html>index</html>")
    (root / "images" / "logo.png").write_bytes(b"\x89PNG-real-logo")
    return root


@pytest.fixture
def config(static_dir: Path, tmp_path: Path) -> Config:
    return Config(
        proxy=ProxySettings(static_dir=static_dir),
        logging=LogSettings(directory=tmp_path / "logs", request_logs=False),
    )


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def upstream_calls() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(
    config: Config,
    logger: RecordingLogger,
    upstream_calls: list[httpx.Request],
) -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], TestClient]]:
    """Build a TestClient whose upstream is answered by ``handler``."""
    clients: list[TestClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> TestClient:
        def recording(request: httpx.Request) -> httpx.Response:
            upstream_calls.append(request)
            return handler(request)

        app = create_app(config, logger, transport=httpx.MockTransport(recording))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


def unreachable(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected upstream call to {request.url}")
