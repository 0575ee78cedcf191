"""Relay orchestration: prepare, send, classify, respond."""

from typing import Any

from fastapi import Response
from fastapi.responses import JSONResponse

from core.classify import Outcome, ResponseClassifier
from core.config import Config
from core.exceptions import RelayError, TransportError, UpstreamAuthError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.transform import FormEncoder
from services.targets import JsonTarget, TboTarget, TravclanTarget, TripjackTarget
from services.upstream import UpstreamClient
from ui.log_utils import redact_headers

HTML_MEDIA_TYPE = "text/html; charset=utf-8"
EXPIRED_PREVIEW_CHARS = 500
SESSION_MESSAGE = "Please login to TBO and update your session cookies"


def error_response(error: RelayError) -> JSONResponse:
    return JSONResponse(content=error.to_payload(), status_code=error.status_code)


class RelayService:
    """Forward flight searches to each provider and shape the reply."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        upstream: UpstreamClient,
        header_builder: HeaderBuilder | None = None,
        classifier: ResponseClassifier | None = None,
    ) -> None:
        header_builder = header_builder or HeaderBuilder()
        self._logger = logger
        self._upstream = upstream
        self._classifier = classifier or ResponseClassifier(config.tbo)
        self.travclan = TravclanTarget(config.travclan, logger, header_builder)
        self.tripjack = TripjackTarget(config.tripjack, logger, header_builder)
        self.tbo = TboTarget(config.tbo, logger, header_builder, FormEncoder())

    async def relay_json(
        self,
        target: JsonTarget,
        body: dict[str, Any],
        headers: dict[str, Any],
    ) -> Response:
        """Relay upstream status and JSON body verbatim."""
        try:
            prepared = target.prepare(body, headers)
            status, data = await self._upstream.post_json(prepared)
            self._logger.log_response(target.name, status, target.describe_response(data))
            return JSONResponse(content=data, status_code=status)
        except Exception as e:
            return self._fail(TransportError(f"{target.name} proxy error", e), target.name)

    async def relay_tbo(self, body: dict[str, Any], headers: dict[str, Any]) -> Response:
        """Relay the TBO result page, or a 401 when the session is not usable."""
        name = self.tbo.name
        try:
            prepared = self.tbo.prepare(body, headers)
            response = await self._upstream.post_form(prepared)
            raw = response.content
            html = raw.decode("utf-8", errors="replace")
            location = response.headers.get("location")

            self._logger.log_response(name, response.status_code, f"HTML length {len(html)}")
            self._logger.log_event(name, f"response headers {redact_headers(dict(response.headers))}")

            result = self._classifier.classify(response.status_code, location, html)
        except RelayError as e:
            return self._fail(e, name)
        except Exception as e:
            return self._fail(TransportError(f"{name} proxy error", e), name)

        if result.redirect is not None:
            self._logger.log_event(name, f"redirect to {result.redirect}")
            return self._fail(
                UpstreamAuthError("TBO session expired", SESSION_MESSAGE, redirect=result.redirect),
                name,
            )

        if not result.relayable:
            self._logger.log_event(name, f"session expired, page starts {html[:EXPIRED_PREVIEW_CHARS]}")
            return self._fail(
                UpstreamAuthError(
                    "TBO session expired or invalid",
                    SESSION_MESSAGE,
                    html_length=result.html_length,
                ),
                name,
            )

        if result.outcome is Outcome.UNKNOWN:
            note = "no flights for this route/date" if result.no_flights else "no result markers found"
            self._logger.log_event(name, note)

        return Response(content=raw, status_code=200, media_type=HTML_MEDIA_TYPE)

    def _fail(self, error: RelayError, route: str) -> JSONResponse:
        self._logger.log_error(route, error.status_code, str(error))
        return error_response(error)
