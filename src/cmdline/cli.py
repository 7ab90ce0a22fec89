"""CLI entry and startup wiring."""

from __future__ import annotations

import argparse
import logging
import time

from . import __version__
from .constants import APP_NAME
from .errors import AppError
from .logging_utils import log_event, setup_logging
from .path_mapping import resolve_start_directory
from .presenters import render_error
from .repl import run_repl


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    app_started = time.perf_counter()

    try:
        setup_logging(args.log)
    except OSError as exc:
        print(render_error(f"Failed to open log file: {args.log} ({exc.strerror})"))
        return 1

    try:
        cursor = resolve_start_directory(args.start_dir)
    except AppError as exc:
        print(render_error(str(exc)))
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="startup_error",
            error_type=type(exc).__name__,
            error=str(exc),
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
        )
        return 1

    log_event("app_start", level=logging.INFO, cursor=cursor, log_file=args.log)
    exit_code = run_repl(cursor=cursor)
    log_event(
        "app_stop",
        level=logging.INFO,
        reason="normal",
        uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
    )
    return exit_code


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Interactive command line over the local filesystem.",
    )
    parser.add_argument(
        "--start-dir",
        required=False,
        help="Initial current directory (default: the process working directory).",
    )
    parser.add_argument(
        "--log",
        required=False,
        help="Path to a log file for structured event logging (optional).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser
