"""HTTP client that streams the orders CSV to disk."""
from __future__ import annotations

import logging
import os
from pathlib import Path

import requests

from orders_export.core.settings import Settings
from orders_export.ordering.exceptions import FilesystemError, RemoteRequestError, TransportError
from orders_export.ordering.models import ExportRequest


logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
PARTIAL_SUFFIX = ".part"


class OrderingExportClient:
    """Performs the single authenticated GET and relays the body to a file."""

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self._settings = settings
        self._session = session or requests.Session()

    def download(self, request: ExportRequest, destination: Path) -> Path:
        """Writes the response body to ``destination`` and returns it.

        The body goes to ``<destination>.part`` first and is renamed on
        success; on any failure the partial file is removed and an existing
        ``destination`` is left as it was.
        """
        destination = Path(destination)
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)

        logger.info("Requesting %s", request.url)
        try:
            with self._session.get(
                request.url,
                headers=request.headers,
                stream=True,
                timeout=self._settings.timeout,
            ) as response:
                if response.status_code != 200:
                    raise RemoteRequestError(response.status_code, response.reason or "")
                written = self._write_body(response, partial)
        except requests.RequestException as exc:
            self._discard(partial)
            raise TransportError(f"Request to {request.host} failed: {exc}") from exc
        except BaseException:
            self._discard(partial)
            raise

        try:
            os.replace(partial, destination)
        except OSError as exc:
            self._discard(partial)
            raise FilesystemError(destination, "Could not move export into place") from exc

        logger.info("Export written | file=%s | bytes=%d", destination, written)
        return destination

    @staticmethod
    def _write_body(response: requests.Response, partial: Path) -> int:
        written = 0
        try:
            with partial.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
                        written += len(chunk)
        except requests.RequestException:
            # subclasses OSError; must surface as a transport failure
            raise
        except OSError as exc:
            raise FilesystemError(partial, "Could not write export file") from exc
        return written

    @staticmethod
    def _discard(partial: Path) -> None:
        try:
            partial.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning("Could not remove partial file %s: %s", partial, exc)
        else:
            logger.info("Removed partial file %s", partial)
