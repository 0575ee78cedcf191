"""Classification of TBO search responses."""

from dataclasses import dataclass
from enum import Enum

from core.config import TboSettings


class Outcome(str, Enum):
    SUCCESS = "success"
    AUTH_EXPIRED = "auth_expired"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Classification:
    """Outcome of inspecting one upstream response.

    ``redirect`` is only set for login redirects. ``no_flights`` is only
    meaningful for ``UNKNOWN`` pages.
    """

    outcome: Outcome
    html_length: int
    redirect: str | None = None
    no_flights: bool = False

    @property
    def relayable(self) -> bool:
        return self.outcome is not Outcome.AUTH_EXPIRED


class ResponseClassifier:
    """Decide whether a TBO response is a result page or a login page."""

    def __init__(self, settings: TboSettings | None = None):
        self.settings = settings or TboSettings()

    def classify(self, status: int, location: str | None, html: str) -> Classification:
        """Return the tagged outcome for a decoded response body."""
        length = len(html)

        if status in (301, 302) and self._is_login_redirect(location):
            return Classification(Outcome.AUTH_EXPIRED, length, redirect=location)

        if status != 200 or self._looks_expired(html):
            return Classification(Outcome.AUTH_EXPIRED, length)

        if any(marker in html for marker in self.settings.result_markers):
            return Classification(Outcome.SUCCESS, length)

        no_flights = length > self.settings.short_page_threshold and any(
            marker in html for marker in self.settings.no_flight_markers
        )
        return Classification(Outcome.UNKNOWN, length, no_flights=no_flights)

    def _is_login_redirect(self, location: str | None) -> bool:
        if not location:
            return False
        return any(marker in location for marker in self.settings.redirect_login_markers)

    def _looks_expired(self, html: str) -> bool:
        if any(marker in html for marker in self.settings.expiry_markers):
            return True
        # Short pages mentioning login are the login form itself
        return self.settings.login_marker in html and len(html) < self.settings.short_page_threshold
