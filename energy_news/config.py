from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

DEFAULT_FEED_SERVICE_URL = "https://api.rss2json.com/v1/api.json"
DEFAULT_SEARCH_URL = "https://news.google.com/rss/search"
DEFAULT_TIMEOUT_SEC = 10.0

# Mixed English / Indonesian energy terms
DEFAULT_KEYWORDS: Tuple[str, ...] = (
    "oil", "gas", "energy", "petroleum", "geothermal", "renewable",
    "minyak", "energi", "migas",
)


def clean_base(url: Optional[str]) -> str:
    """Normalize an endpoint taken from the environment (no newlines, no trailing slash)."""
    s = (url or "").strip()
    s = re.sub(r"\s+", " ", s)
    s = re.sub(r"[\r\n]+", "", s)
    return s.rstrip("/")


@dataclass(frozen=True)
class AggregatorConfig:
    feed_service_url: str = DEFAULT_FEED_SERVICE_URL
    search_url: str = DEFAULT_SEARCH_URL
    default_keywords: Tuple[str, ...] = DEFAULT_KEYWORDS
    timeout: float = DEFAULT_TIMEOUT_SEC
    api_key: Optional[str] = None
    user_agent: str = "energy-news/0.1"

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "AggregatorConfig":
        """
        Build a config from environment variables (a local .env file is loaded first).

        ENERGY_NEWS_FEED_SERVICE_URL, ENERGY_NEWS_SEARCH_URL, ENERGY_NEWS_KEYWORDS,
        ENERGY_NEWS_TIMEOUT, RSS2JSON_API_KEY. Blank values fall back to defaults.
        """
        if dotenv:
            load_dotenv()

        keywords = DEFAULT_KEYWORDS
        raw_keywords = os.getenv("ENERGY_NEWS_KEYWORDS")
        if raw_keywords and raw_keywords.strip():
            parsed = tuple(k.strip() for k in raw_keywords.split(",") if k.strip())
            if parsed:
                keywords = parsed

        timeout = DEFAULT_TIMEOUT_SEC
        raw_timeout = (os.getenv("ENERGY_NEWS_TIMEOUT") or "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ValueError(f"ENERGY_NEWS_TIMEOUT must be a number, got {raw_timeout!r}") from e
            if timeout <= 0:
                raise ValueError(f"ENERGY_NEWS_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(
            feed_service_url=clean_base(os.getenv("ENERGY_NEWS_FEED_SERVICE_URL")) or DEFAULT_FEED_SERVICE_URL,
            search_url=clean_base(os.getenv("ENERGY_NEWS_SEARCH_URL")) or DEFAULT_SEARCH_URL,
            default_keywords=keywords,
            timeout=timeout,
            api_key=(os.getenv("RSS2JSON_API_KEY") or "").strip() or None,
        )
