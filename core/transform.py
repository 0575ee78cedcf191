"""Request body transformations for form-encoded upstreams."""

from typing import Any


class FormEncoder:
    """Join body fields into an ``application/x-www-form-urlencoded`` string.

    Values are expected to arrive already percent-encoded by the caller and
    are written as-is: no escaping happens here.
    """

    def encode(self, body: dict[str, Any]) -> str:
        return "&".join(f"{key}={self._render(value)}" for key, value in body.items())

    @staticmethod
    def _render(value: Any) -> str:
        """Render scalars the way a browser client would stringify them."""
        if value is True:
            return "true"
        if value is False:
            return "false"
        if value is None:
            return "null"
        return str(value)
