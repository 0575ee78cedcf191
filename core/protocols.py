"""Shared protocol definitions."""

from typing import Any, Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_incoming(
        self,
        provider: str,
        method: str,
        path: str,
        headers: dict[str, str],
        body: Any,
    ) -> None: ...
    def log_request(self, provider: str, summary: str) -> None: ...
    def log_response(self, provider: str, status: int, detail: str = "") -> None: ...
    def log_event(self, provider: str, message: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
