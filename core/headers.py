"""Header construction for upstream requests.

Inbound credentials are copied verbatim; callers are responsible for sending
values the upstream accepts.
"""

from typing import Any

from core.config import ProviderSettings


class HeaderBuilder:
    """Build upstream headers from a provider's static template."""

    def build_bearer_headers(
        self,
        settings: ProviderSettings,
        headers: dict[str, Any],
    ) -> dict[str, str]:
        """Overlay the inbound Authorization value on the provider template."""
        upstream = dict(settings.headers)
        authorization = get_header(headers, "authorization")
        if authorization is not None:
            upstream["authorization"] = authorization
        return upstream

    def build_cookie_headers(self, settings: ProviderSettings, cookie: str) -> dict[str, str]:
        """Template plus the session cookie."""
        upstream = dict(settings.headers)
        upstream["cookie"] = cookie
        return upstream


def get_header(headers: dict[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup on a plain dict."""
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return str(value)
    return None
