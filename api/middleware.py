"""CORS middleware that always answers preflights."""

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response


class PreflightCORSMiddleware(CORSMiddleware):
    """Answer every preflight with 204 and the configured lists.

    The browser enforces the lists; unlisted methods or headers are not
    rejected here.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        headers = dict(self.preflight_headers)
        headers["Access-Control-Allow-Origin"] = request_headers["origin"]
        headers["Vary"] = "Origin"
        return Response(status_code=204, headers=headers)
