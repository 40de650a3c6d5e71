from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from clubsync.adapters.ledger_file import write_report
from clubsync.app import (
    check_expirations,
    import_members,
    load_ledger_file,
    membership_report,
    reconcile_ledger,
)
from clubsync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile club membership with the directory")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Apply unprocessed ledger entries to the directory",
    )
    reconcile.add_argument(
        "--dry-run",
        action="store_true",
        help="Work against an in-memory copy of the directory and commit nothing",
    )

    ledger_load = subparsers.add_parser("ledger-load", help="Store rows from a ledger CSV export")
    ledger_load.add_argument("path", type=Path, help="CSV file to load")

    members = subparsers.add_parser(
        "import-members",
        help="Create accounts for existing members from a CSV list",
    )
    members.add_argument("path", type=Path, help="CSV file with Joined/Expires columns")

    subparsers.add_parser("check-expirations", help="Send expiry warnings")

    report = subparsers.add_parser("report", help="Write the membership report as CSV")
    report.add_argument(
        "--output",
        type=Path,
        help="Destination file (defaults to stdout)",
    )

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    path: Path | None = getattr(args, "path", None)
    if path is not None and not path.is_file():
        raise ValueError(f"No such file: {path}")


def _write_report(output: Path | None) -> int:
    rows = membership_report()
    if output is None:
        return write_report(rows, sys.stdout)
    with output.open("w", newline="", encoding="utf-8") as stream:
        return write_report(rows, stream)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            result = reconcile_ledger(dry_run=parsed_args.dry_run)
            if result.failed or result.errors:
                log.warning("Reconciliation finished with failures: %s", result.summary())
        elif parsed_args.command == "ledger-load":
            added = load_ledger_file(parsed_args.path)
            log.info("Stored %d new ledger entries", added)
        elif parsed_args.command == "import-members":
            imported = import_members(parsed_args.path)
            log.info(
                "Imported %d members (%d failed, %d skipped)",
                imported.imported,
                imported.failed,
                len(imported.skipped),
            )
        elif parsed_args.command == "check-expirations":
            check_expirations()
        elif parsed_args.command == "report":
            count = _write_report(parsed_args.output)
            log.info("Wrote %d report rows", count)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
