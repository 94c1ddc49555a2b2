"""Runtime settings read from the environment (and .env via python-dotenv)."""

import logging
import os
from dataclasses import dataclass

from exorate.catalog import CATALOG_URL

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration. Ratings are disabled when no backend URL is set."""

    supabase_url: str
    supabase_anon_key: str
    catalog_url: str = CATALOG_URL
    ratings_table: str = "ratings"
    http_timeout: float = 30.0  # Seconds
    max_concurrency: int | None = None  # None = unbounded
    log_level: str = "INFO"

    @property
    def ratings_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _env_int_or_none(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {raw!r}")
    return value


def load_settings() -> Settings:
    """Build Settings from environment variables.

    Callers load ``.env`` first with ``load_dotenv()``.

    Raises:
        ValueError: When a numeric variable does not parse.
    """
    return Settings(
        supabase_url=os.environ.get("SUPABASE_URL", "").strip(),
        supabase_anon_key=os.environ.get("SUPABASE_ANON_KEY", "").strip(),
        catalog_url=os.environ.get("EXORATE_CATALOG_URL", "").strip() or CATALOG_URL,
        ratings_table=os.environ.get("EXORATE_RATINGS_TABLE", "").strip() or "ratings",
        http_timeout=_env_float("EXORATE_HTTP_TIMEOUT", 30.0),
        max_concurrency=_env_int_or_none("EXORATE_MAX_CONCURRENCY"),
        log_level=os.environ.get("EXORATE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once. Later calls are no-ops."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)
