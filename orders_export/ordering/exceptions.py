"""Custom errors for the orders export."""
from __future__ import annotations

from pathlib import Path


class OrderExportError(RuntimeError):
    """Base error for export failures."""


class ConfigurationError(OrderExportError):
    """Raised when required settings are missing."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")


class RemoteRequestError(OrderExportError):
    """Raised when the API answers with anything other than 200."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        message = f"HTTP {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class TransportError(OrderExportError):
    """Raised on network, TLS or timeout failures."""


class FilesystemError(OrderExportError):
    """Raised when the destination file cannot be created or written."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")
