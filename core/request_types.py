"""Shared request data types."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request.

    Exactly one of ``json_body`` and ``content`` is set.
    """

    provider: str
    target_url: str
    headers: dict[str, str]
    json_body: dict[str, Any] | None = None
    content: str | None = None
