from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from adlistsync.app import sync_adlists
from adlistsync.config import configure_logging, get_feed_config, get_storage_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Timeout must be positive")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Synchronise Pi-hole adlists with the firebog ticked list"
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="The gravity.db file path (defaults to config)",
    )
    parser.add_argument(
        "--feed-url",
        type=str,
        default=None,
        help="CSV feed to reconcile against (defaults to config)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Seconds to wait for the feed (defaults to config)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and log the changes, then roll them back",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every reconcile step",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        storage = get_storage_config(database_path=parsed_args.db) if parsed_args.db else None
        feed = get_feed_config(url=parsed_args.feed_url, timeout_seconds=parsed_args.timeout)
        sync_adlists(storage=storage, feed=feed, dry_run=parsed_args.dry_run)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(130)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
