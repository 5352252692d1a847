"""Environment-driven settings for tubesearch.

Variables:
  YOUTUBE_API_KEY        default API key (optional; can be set per session)
  YOUTUBE_API_BASE_URL   API root, defaults to the public v3 endpoint
  YOUTUBE_HTTP_TIMEOUT   request timeout in seconds; unset means no timeout
  TUBESEARCH_LOG_LEVEL   logging level name, defaults to INFO
"""

import logging
import os
from typing import Mapping, NamedTuple, Optional

DEFAULT_API_BASE_URL = "https://www.googleapis.com/youtube/v3"


class Settings(NamedTuple):
    api_key: Optional[str]
    api_base_url: str
    http_timeout: Optional[float]
    log_level: str


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring invalid YOUTUBE_HTTP_TIMEOUT=%r", raw
        )
        return None
    return value if value > 0 else None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        api_key=env.get("YOUTUBE_API_KEY") or None,
        api_base_url=(env.get("YOUTUBE_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/"),
        http_timeout=_parse_timeout(env.get("YOUTUBE_HTTP_TIMEOUT")),
        log_level=(env.get("TUBESEARCH_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or load_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
