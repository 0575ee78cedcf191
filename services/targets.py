"""Upstream target handlers for Travclan, Tripjack and TBO."""

import json
from typing import Any

from core.config import ProviderSettings, TboSettings
from core.exceptions import ValidationError
from core.headers import HeaderBuilder, get_header
from core.protocols import RequestLogger
from core.request_types import PreparedRequest
from core.transform import FormEncoder

PREVIEW_CHARS = 200


class JsonTarget:
    """Bearer-auth provider taking and returning JSON."""

    name = "JSON"

    def __init__(
        self,
        settings: ProviderSettings,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
    ) -> None:
        self._settings = settings
        self._logger = logger
        self._headers = header_builder

    def prepare(self, body: dict[str, Any], headers: dict[str, Any]) -> PreparedRequest:
        """Forward the body unchanged with the provider header template."""
        upstream_headers = self._headers.build_bearer_headers(self._settings, headers)
        self._logger.log_request(self.name, self.describe_request(body))
        return PreparedRequest(
            self.name,
            self._settings.url,
            upstream_headers,
            json_body=body,
        )

    def describe_request(self, body: dict[str, Any]) -> str:
        return "flight search request"

    def describe_response(self, data: Any) -> str:
        return ""


class TravclanTarget(JsonTarget):
    name = "Travclan"

    def describe_request(self, body: dict[str, Any]) -> str:
        return f"flight search request - Page {body.get('page')}"


class TripjackTarget(JsonTarget):
    name = "Tripjack"

    def describe_request(self, body: dict[str, Any]) -> str:
        return f"flight search request {json.dumps(body)[:PREVIEW_CHARS]}"

    def describe_response(self, data: Any) -> str:
        has_payload = isinstance(data, dict) and bool(data.get("payload"))
        return f"has payload: {has_payload}"


class TboTarget:
    """Cookie-session provider taking form fields and returning HTML."""

    name = "TBO"
    cookie_header = "x-tbo-cookie"

    def __init__(
        self,
        settings: TboSettings,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
        encoder: FormEncoder,
    ) -> None:
        self._settings = settings
        self._logger = logger
        self._headers = header_builder
        self._encoder = encoder

    def prepare(self, body: dict[str, Any], headers: dict[str, Any]) -> PreparedRequest:
        """Build the form POST; raise ValidationError when no cookie was sent."""
        cookie = get_header(headers, self.cookie_header) or ""
        if not cookie:
            self._logger.log_event(self.name, "No cookies provided")
            raise ValidationError(
                "No TBO cookies provided",
                "Please provide TBO session cookies in X-TBO-Cookie header",
            )

        form = self._encoder.encode(body)
        self._logger.log_request(
            self.name,
            f"cookie length {len(cookie)}, form {form[:PREVIEW_CHARS]}...",
        )
        return PreparedRequest(
            self.name,
            self._settings.url,
            self._headers.build_cookie_headers(self._settings, cookie),
            content=form,
        )
