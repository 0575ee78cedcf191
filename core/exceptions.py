"""Custom exception hierarchy for the flight search relay."""

import traceback
from typing import Any


class RelayError(Exception):
    """Base exception for all relay errors.

    Attributes:
        status_code: HTTP status returned to the caller
        error: Short error label placed in the ``error`` field of the payload
    """

    status_code: int = 500

    def __init__(self, error: str, message: str = "") -> None:
        super().__init__(message or error)
        self.error = error
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        return payload


class ConfigurationError(RelayError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("Configuration error", message)


class ValidationError(RelayError):
    """Raised when a required credential is missing from the inbound request."""

    status_code = 401


class UpstreamAuthError(RelayError):
    """Raised when the upstream answered but the session is expired or invalid.

    Attributes:
        redirect: Login redirect target reported by the upstream (optional)
        html_length: Length of the page classified as expired (optional)
    """

    status_code = 401

    def __init__(
        self,
        error: str,
        message: str,
        redirect: str | None = None,
        html_length: int | None = None,
    ) -> None:
        super().__init__(error, message)
        self.redirect = redirect
        self.html_length = html_length

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.redirect is not None:
            payload["redirect"] = self.redirect
        if self.html_length is not None:
            payload["htmlLength"] = self.html_length
        return payload


class TransportError(RelayError):
    """Raised when the outbound call fails or its response cannot be used."""

    status_code = 500

    def __init__(self, error: str, cause: BaseException) -> None:
        super().__init__(error, str(cause) or type(cause).__name__)
        self.details = "".join(
            traceback.format_exception(type(cause), cause, cause.__traceback__)
        )

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message, "details": self.details}


class RequestTooLarge(RelayError):
    """Request body exceeds size limit."""

    status_code = 413

    def __init__(self) -> None:
        super().__init__("Request body too large")


class InvalidBody(RelayError):
    """Request body could not be parsed."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid request body: {message}")
