# src/folio_site/core/config.py
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_PAGE_SIZE = 100


class ConfigError(ValueError):
    """Raised when the environment does not describe a runnable site."""
    pass


@dataclass(frozen=True)
class SiteConfig:
    """
    Holds static configuration settings for the site.
    Built once at startup and passed explicitly to ``create_app``.
    """
    prismic_endpoint: str
    prismic_access_token: Optional[str] = None
    analytics: Optional[str] = None # Google Analytics measurement ID, rendered into every page.
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    page_size: int = DEFAULT_PAGE_SIZE # Documents fetched per request; the site renders from one page.
    request_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "SiteConfig":
        """
        Reads configuration from the environment.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.
            dotenv: Load a ``.env`` file into ``os.environ`` first.

        Raises:
            ConfigError: PRISMIC_ENDPOINT is missing or PORT is not an integer.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        endpoint = (environ.get("PRISMIC_ENDPOINT") or "").strip()
        if not endpoint:
            raise ConfigError("PRISMIC_ENDPOINT is not set. Please set it in your .env file.")

        raw_port = environ.get("PORT") or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer, got '{raw_port}'") from e

        return cls(
            prismic_endpoint=endpoint,
            prismic_access_token=environ.get("PRISMIC_ACCESS_TOKEN") or None,
            analytics=environ.get("GOOGLE_ANALYTICS") or None,
            host=environ.get("HOST") or DEFAULT_HOST,
            port=port,
            log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        )
