"""Coordinates the weekly export flow end-to-end."""
from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Callable

from orders_export.core.settings import Settings
from orders_export.ordering.date_window import previous_week_window
from orders_export.ordering.exceptions import FilesystemError
from orders_export.ordering.export_client import OrderingExportClient
from orders_export.ordering.models import ExportCommand, ExportPlan, ExportResult
from orders_export.ordering.query_builder import build_export_request


logger = logging.getLogger(__name__)


class WeeklyExportOrchestrator:
    """Runs window calculation, request building and the download."""

    def __init__(
        self,
        settings: Settings,
        client: OrderingExportClient,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._settings = settings
        self._client = client
        self._clock = clock

    def plan(self, command: ExportCommand) -> ExportPlan:
        self._settings.validate()

        clock = self._clock
        if command.reference_date is not None:
            reference = datetime.combine(command.reference_date, time(12, 0))
            clock = lambda: reference
        window = previous_week_window(clock)

        return ExportPlan(
            window=window,
            request=build_export_request(window, self._settings),
            destination=command.output_dir / window.filename(),
        )

    def execute(self, plan: ExportPlan) -> ExportResult:
        logger.info(
            "Starting weekly export | business=%s | period=%s to %s",
            self._settings.business_slug,
            plan.window.start.isoformat(),
            plan.window.end.isoformat(),
        )

        output_dir = plan.destination.parent
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(output_dir, "Could not create output directory") from exc

        path = self._client.download(plan.request, plan.destination)

        try:
            size_bytes = path.stat().st_size
        except OSError as exc:
            raise FilesystemError(path, "Could not stat export file") from exc

        logger.info("Export finished | file=%s | bytes=%d", path, size_bytes)

        return ExportResult(path=path, size_bytes=size_bytes, window=plan.window, request=plan.request)

    def run(self, command: ExportCommand) -> ExportResult:
        return self.execute(self.plan(command))
