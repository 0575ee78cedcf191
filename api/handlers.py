"""FastAPI route handlers."""

import base64
import json
from json import JSONDecodeError
from typing import Any
from urllib.parse import parse_qsl

from fastapi import Request, Response
from fastapi.responses import FileResponse, JSONResponse

from core.config import Config
from core.exceptions import InvalidBody, RelayError, RequestTooLarge
from core.protocols import RequestLogger
from services.relay_service import RelayService, error_response

# 1x1 transparent GIF
EMPTY_GIF = base64.b64decode("R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7")

HEALTH_PAYLOAD = {"status": "ok", "message": "Multi-portal proxy server is running"}


def check_declared_size(content_length: str | None, max_size: int) -> None:
    """Reject a body by its Content-Length before reading it."""
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        raise RequestTooLarge()


def parse_body(raw_body: bytes, content_type: str, max_size: int) -> dict[str, Any]:
    """Parse a JSON or URL-encoded body into a dict.

    Raises:
        RequestTooLarge: body exceeds ``max_size`` bytes
        InvalidBody: body is not valid JSON or not a JSON object
    """
    if len(raw_body) > max_size:
        raise RequestTooLarge()
    if not raw_body.strip():
        return {}

    text_body = raw_body.decode("utf-8", errors="replace")
    if "application/x-www-form-urlencoded" in content_type.lower():
        return dict(parse_qsl(text_body, keep_blank_values=True))

    try:
        body = json.loads(text_body)
    except (JSONDecodeError, ValueError) as e:
        raise InvalidBody(f"Invalid JSON: {e}") from e
    if not isinstance(body, dict):
        raise InvalidBody("expected a JSON object")
    return body


async def _read_body(
    request: Request,
    config: Config,
    logger: RequestLogger,
    provider: str,
) -> tuple[dict[str, Any], dict[str, str]] | Response:
    """Parse request body, return (body, headers) or error Response."""
    headers = dict(request.headers)
    try:
        check_declared_size(request.headers.get("content-length"), config.proxy.max_body_size)
        raw_body = await request.body()
        body = parse_body(
            raw_body,
            request.headers.get("content-type", ""),
            config.proxy.max_body_size,
        )
    except RelayError as e:
        logger.log_error(provider, e.status_code, str(e))
        return error_response(e)

    logger.log_incoming(provider, request.method, request.url.path, headers, body)
    return body, headers


async def handle_health(_request: Request) -> JSONResponse:
    """Liveness probe."""
    return JSONResponse(HEALTH_PAYLOAD)


async def handle_image(config: Config, folder: str, path: str) -> Response:
    """Serve a real image if present, otherwise the placeholder GIF."""
    base = (config.proxy.static_dir / folder).resolve()
    candidate = (base / path).resolve()
    if candidate.is_relative_to(base) and candidate.is_file():
        return FileResponse(candidate)
    return Response(content=EMPTY_GIF, media_type="image/gif")


async def handle_options(_request: Request) -> Response:
    """Answer non-preflight OPTIONS requests; preflights never reach here."""
    return Response(status_code=204, headers={"Allow": "GET, POST, OPTIONS"})


async def handle_travclan(request: Request, config: Config, logger: RequestLogger) -> Response:
    result = await _read_body(request, config, logger, "Travclan")
    if isinstance(result, Response):
        return result
    body, headers = result

    relay: RelayService = request.app.state.relay_service
    return await relay.relay_json(relay.travclan, body, headers)


async def handle_tripjack(request: Request, config: Config, logger: RequestLogger) -> Response:
    result = await _read_body(request, config, logger, "Tripjack")
    if isinstance(result, Response):
        return result
    body, headers = result

    relay: RelayService = request.app.state.relay_service
    return await relay.relay_json(relay.tripjack, body, headers)


async def handle_tbo(request: Request, config: Config, logger: RequestLogger) -> Response:
    """Handle /api/tbo/flights: cookie-session form POST returning HTML."""
    result = await _read_body(request, config, logger, "TBO")
    if isinstance(result, Response):
        return result
    body, headers = result

    relay: RelayService = request.app.state.relay_service
    return await relay.relay_tbo(body, headers)

