"""HTTP forwarding utilities for upstream requests."""

from typing import Any

import httpx

from core.request_types import PreparedRequest


class UpstreamClient:
    """Send prepared requests over a shared client.

    Each call is a single outbound request; the client is built with
    redirects disabled.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def post_json(self, prepared: PreparedRequest) -> tuple[int, Any]:
        """POST a JSON body and decode the JSON answer."""
        response = await self._client.post(
            prepared.target_url,
            json=prepared.json_body,
            headers=prepared.headers,
        )
        return response.status_code, response.json()

    async def post_form(self, prepared: PreparedRequest) -> httpx.Response:
        """POST a pre-encoded form body and return the buffered response."""
        return await self._client.post(
            prepared.target_url,
            content=prepared.content,
            headers=prepared.headers,
        )
