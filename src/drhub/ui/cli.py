from __future__ import annotations

import argparse
import logging
import sys
import time
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from drhub.app import build_reconcile_engine, reconcile_intent
from drhub.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0
REQUEUE_DELAY_SECONDS = 5.0


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("Interval must be positive")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile DR intents on the hub cluster")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Reconcile one DR intent")
    reconcile.add_argument(
        "--namespace",
        type=str,
        required=True,
        help="Namespace of the DR intent",
    )
    reconcile.add_argument(
        "--name",
        type=str,
        required=True,
        help="Name of the DR intent",
    )
    reconcile.add_argument(
        "--watch",
        action="store_true",
        help="Keep reconciling until interrupted",
    )
    reconcile.add_argument(
        "--interval",
        type=_positive_float,
        default=DEFAULT_INTERVAL_SECONDS,
        help="Seconds between passes in watch mode (default: %(default)s)",
    )
    reconcile.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(list(argv))


def _watch(
    args: argparse.Namespace,
    *,
    run_pass: Callable[[], bool],
    sleep: Callable[[float], None] = time.sleep,
    max_passes: int | None = None,
) -> None:
    passes = 0
    while max_passes is None or passes < max_passes:
        requeue = run_pass()
        passes += 1
        delay = min(REQUEUE_DELAY_SECONDS, args.interval) if requeue else args.interval
        log.debug("Next pass in %.1fs (requeue=%s)", delay, requeue)
        sleep(delay)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    signal(SIGINT, sigint_handler)

    try:
        engine = build_reconcile_engine()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    def run_pass() -> bool:
        result = reconcile_intent(
            namespace=parsed_args.namespace,
            name=parsed_args.name,
            engine=engine,
        )
        return result.requeue

    try:
        if parsed_args.watch:
            _watch(parsed_args, run_pass=run_pass)
        else:
            run_pass()
    except Exception:
        log.exception("Fatal error during reconcile")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
