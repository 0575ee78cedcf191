"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.exceptions import ConfigurationError

CONFIG_FILE = Path.cwd() / "relay.config.json"

CHROME_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/137.0.0.0 Safari/537.36"
)


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ProxySettings(FrozenModel):
    host: str = "127.0.0.1"
    port: int = 3001
    static_dir: Path = Path(".")
    max_body_size: int = 10 * 1024 * 1024  # 10MB


class CorsSettings(FrozenModel):
    allow_methods: tuple[str, ...] = ("GET", "POST", "OPTIONS")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization", "X-TBO-Cookie")
    expose_headers: tuple[str, ...] = ("Content-Length", "Content-Type")


class ProviderSettings(FrozenModel):
    """Fixed upstream URL plus the static header template sent with every call."""

    url: str
    headers: dict[str, str] = Field(default_factory=dict)


def _travclan_settings() -> ProviderSettings:
    return ProviderSettings(
        url="https://aggregator-flights-v1.travclan.com/api/v3/flights/search/",
        headers={
            "accept": "application/json, text/plain, */*",
            "accept-language": "en-US,en;q=0.9",
            "authorization-mode": "AWSCognito",
            "content-type": "application/json",
            "source": "website",
            "user-agent": CHROME_USER_AGENT,
            "origin": "https://www.travclan.com",
            "referer": "https://www.travclan.com/",
        },
    )


def _tripjack_settings() -> ProviderSettings:
    return ProviderSettings(
        url="https://tripjack.com/xms/v1/backend",
        headers={
            "accept": "application/json, text/plain, */*",
            "accept-language": "en-US,en;q=0.9",
            "browsername": "chrome",
            "browserversion": "137.0.0",
            "channeltype": "DESKTOP",
            "content-type": "application/json",
            "currenv": "prod",
            "origin": "https://tripjack.com",
            "referer": "https://tripjack.com/",
            "user-agent": CHROME_USER_AGENT,
            "whitelabel": "",
        },
    )


class TboSettings(ProviderSettings):
    """TBO scraping endpoint plus the markers used to classify its HTML."""

    url: str = "https://m.travelboutiqueonline.com/FlightSearchResult.aspx"
    headers: dict[str, str] = Field(
        default_factory=lambda: {
            "accept": (
                "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
                "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
            ),
            "accept-language": "en-US,en;q=0.9",
            "cache-control": "max-age=0",
            "content-type": "application/x-www-form-urlencoded",
            "origin": "https://m.travelboutiqueonline.com",
            "priority": "u=0, i",
            "referer": "https://m.travelboutiqueonline.com/FlightSearchResult.aspx",
            "sec-ch-ua": '"Google Chrome";v="137", "Chromium";v="137", "Not/A)Brand";v="24"',
            "sec-ch-ua-mobile": "?0",
            "sec-ch-ua-platform": '"Windows"',
            "sec-fetch-dest": "document",
            "sec-fetch-mode": "navigate",
            "sec-fetch-site": "same-origin",
            "sec-fetch-user": "?1",
            "upgrade-insecure-requests": "1",
            "user-agent": CHROME_USER_AGENT,
        }
    )
    redirect_login_markers: tuple[str, ...] = ("login", "Login")
    expiry_markers: tuple[str, ...] = ("Session has expired", "Please login")
    login_marker: str = "login"
    short_page_threshold: int = 10000
    result_markers: tuple[str, ...] = ("flightresult", "result_p", "flight-result", "FlightResult")
    no_flight_markers: tuple[str, ...] = ("No flights", "no results")


class LogSettings(FrozenModel):
    directory: Path = Path("logs")
    request_logs: bool = True


class Config(FrozenModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    travclan: ProviderSettings = Field(default_factory=_travclan_settings)
    tripjack: ProviderSettings = Field(default_factory=_tripjack_settings)
    tbo: TboSettings = Field(default_factory=TboSettings)
    logging: LogSettings = Field(default_factory=LogSettings)
    # None disables the outbound timeout entirely
    upstream_timeout: float | None = None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from an optional JSON file, falling back to defaults.

    Nothing is written back: a missing file simply means the built-in defaults.
    """
    config_file = path or CONFIG_FILE
    if not config_file.exists():
        return Config()

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid config file {config_file}: {e}") from e
