"""
Exports last week's (Monday to Sunday) completed orders from Ordering.co to CSV.

Usage:
    ORDERING_API_KEY=... ORDERING_BUSINESS_SLUG=... python export_orders.py
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from orders_export.core.logging_config import configure_logging, new_run_id, reset_run_id, set_run_id
from orders_export.core.settings import Settings, get_settings
from orders_export.ordering.exceptions import ConfigurationError, OrderExportError
from orders_export.ordering.export_client import OrderingExportClient
from orders_export.ordering.models import ExportCommand
from orders_export.ordering.orchestrator import WeeklyExportOrchestrator
from orders_export.ordering.query_builder import format_api_datetime

logger = logging.getLogger(__name__)

USAGE = "Usage: ORDERING_API_KEY=your_key ORDERING_BUSINESS_SLUG=your_slug export-orders"


def _parse_reference_date(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Invalid date, use YYYY-MM-DD") from exc


class ExportArgumentParser(argparse.ArgumentParser):
    """Reports bad arguments with the same exit code as every other failure."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = ExportArgumentParser(
        description="Export last week's completed Ordering.co orders to CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:
      python export_orders.py
      python export_orders.py --today 2024-03-13
      python export_orders.py --output-dir exports/
    """,
    )
    parser.add_argument(
        "--today",
        type=_parse_reference_date,
        help="Reference date (YYYY-MM-DD); exports the week before it",
    )
    parser.add_argument("--output-dir", "-o", type=Path, help="Directory for the CSV file")
    return parser


def run_export(
    settings: Settings,
    command: ExportCommand,
    client: OrderingExportClient | None = None,
) -> int:
    orchestrator = WeeklyExportOrchestrator(
        settings=settings,
        client=client or OrderingExportClient(settings=settings),
    )

    plan = orchestrator.plan(command)

    print("=== Ordering.co Weekly Export ===")
    print(f"Date Range: {plan.window.describe()}")
    print(f"Start: {format_api_datetime(plan.window.start)}")
    print(f"End: {format_api_datetime(plan.window.end)}")
    print(f"API URL: {plan.request.url}")
    print("Downloading orders...")

    result = orchestrator.execute(plan)

    print(f"File size: {result.size_bytes} bytes")
    print(f"Success! Orders exported to: {result.path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    try:
        settings.validate()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    configure_logging(settings)

    command = ExportCommand(
        output_dir=args.output_dir or settings.output_dir,
        reference_date=args.today,
    )

    token = set_run_id(new_run_id())
    try:
        return run_export(settings, command)
    except OrderExportError as exc:
        logger.debug("Export failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Export cancelled by user")
        return 1
    finally:
        reset_run_id(token)


if __name__ == "__main__":
    sys.exit(main())
