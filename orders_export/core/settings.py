"""Application settings loaded from .env."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from orders_export.ordering.exceptions import ConfigurationError


load_dotenv()


def _as_int(raw: str | None, default: int) -> int:
    try:
        return int(raw) if raw is not None else default
    except (TypeError, ValueError):
        return default


def _first_env(*names: str) -> str:
    for name in names:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the weekly orders export."""

    api_key: str = field(repr=False)
    business_slug: str
    api_host: str
    api_version: str
    locale: str
    output_dir: Path
    connect_timeout_seconds: int
    read_timeout_seconds: int
    log_level: str
    log_file: Path | None

    @classmethod
    def from_env(cls) -> "Settings":
        log_file_raw = os.getenv("LOG_FILE", "").strip()

        return cls(
            api_key=_first_env("ORDERING_API_KEY", "API_KEY"),
            business_slug=_first_env("ORDERING_BUSINESS_SLUG", "BUSINESS_SLUG"),
            api_host=os.getenv("ORDERING_API_HOST", "apiv4.ordering.co").strip() or "apiv4.ordering.co",
            api_version=os.getenv("ORDERING_API_VERSION", "v400").strip() or "v400",
            locale=os.getenv("ORDERING_LOCALE", "en").strip() or "en",
            output_dir=Path(os.getenv("EXPORT_OUTPUT_DIR", ".").strip() or ".").expanduser(),
            connect_timeout_seconds=_as_int(os.getenv("EXPORT_CONNECT_TIMEOUT_SECONDS"), 10),
            read_timeout_seconds=_as_int(os.getenv("EXPORT_READ_TIMEOUT_SECONDS"), 120),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper().strip() or "INFO",
            log_file=Path(log_file_raw).expanduser() if log_file_raw else None,
        )

    @property
    def timeout(self) -> tuple[int, int]:
        return (self.connect_timeout_seconds, self.read_timeout_seconds)

    def validate(self) -> None:
        missing = []
        if not self.api_key:
            missing.append("ORDERING_API_KEY")
        if not self.business_slug:
            missing.append("ORDERING_BUSINESS_SLUG")
        if missing:
            raise ConfigurationError(missing)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns cached settings instance."""
    return Settings.from_env()
