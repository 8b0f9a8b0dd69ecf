"""Domain models for the weekly export flow."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path


@dataclass(frozen=True)
class DateWindow:
    """Inclusive Monday 00:00:00.000 to Sunday 23:59:59.999 range."""

    start: datetime
    end: datetime

    def filename(self) -> str:
        return f"orders_{self.start:%Y-%m-%d}_to_{self.end:%Y-%m-%d}.csv"

    def describe(self) -> str:
        return f"{self.start:%a %b %d %Y} to {self.end:%a %b %d %Y}"


@dataclass(frozen=True)
class ExportRequest:
    """Authenticated GET for the orders CSV."""

    host: str
    path: str
    headers: dict[str, str] = field(repr=False)

    @property
    def url(self) -> str:
        return f"https://{self.host}{self.path}"


@dataclass(frozen=True)
class ExportCommand:
    """Input command to execute one export run."""

    output_dir: Path
    reference_date: date | None = None


@dataclass(frozen=True)
class ExportPlan:
    """Everything resolved before the network call."""

    window: DateWindow
    request: ExportRequest
    destination: Path


@dataclass(frozen=True)
class ExportResult:
    """Output of one export run."""

    path: Path
    size_bytes: int
    window: DateWindow
    request: ExportRequest
