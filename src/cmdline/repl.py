"""REPL loop: owns the cursor and applies command outcomes."""

from __future__ import annotations

import logging
import os
import sys
import time
import traceback
from pathlib import Path
from typing import Callable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from .constants import DEBUG_ENV_VAR, PROMPT_SUFFIX
from .dispatcher import command_names, parse_command
from .logging_utils import log_event, summarize_args
from .presenters import render_error, render_prompt, render_welcome

# Takes the prompt text, returns one line; raises EOFError at end of input.
LineReader = Callable[[str], str]


def create_line_reader() -> LineReader:
    """Interactive prompt with command-name completion; history stays in memory."""
    if not sys.stdin.isatty():
        return input

    prompt_session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        completer=WordCompleter(command_names(), sentence=True),
        complete_while_typing=False,
    )
    return prompt_session.prompt


def _report_unexpected_error(error: Exception) -> None:
    """Print an unexpected exception with optional debug traceback."""
    print(render_error(str(error)))
    if os.getenv(DEBUG_ENV_VAR):
        print("Debug traceback:")
        traceback.print_exc()


def run_line(line: str, cursor: Path) -> tuple[Path, bool]:
    """Execute one input line. Returns the next cursor and whether to stop."""
    command = parse_command(line)
    command_started = time.perf_counter()
    outcome = command.execute(cursor)
    log_event(
        "command_exec",
        level=logging.INFO,
        command=command.name,
        args_summary=summarize_args(command.args),
        cursor=cursor,
        elapsed_ms=round((time.perf_counter() - command_started) * 1000, 1),
    )

    if outcome.is_cursor_change:
        return (outcome.cursor if outcome.cursor is not None else cursor), False

    print(outcome.text)
    return cursor, outcome.is_exit


def run_repl(*, cursor: Path, read_line: LineReader | None = None) -> int:
    """Run the REPL loop until `exit` or end of input."""
    reader = read_line if read_line is not None else create_line_reader()

    print(render_welcome())
    print()

    while True:
        try:
            line = reader(render_prompt(cursor, PROMPT_SUFFIX))
        except EOFError:
            print()
            log_event("session_stop", level=logging.INFO, reason="eof", cursor=cursor)
            return 0
        except KeyboardInterrupt:
            continue

        try:
            cursor, finished = run_line(line, cursor)
        except KeyboardInterrupt:
            print()
            continue
        except Exception as e:
            # Expected failures were already turned into text by Command.execute.
            log_event(
                "repl_error",
                level=logging.ERROR,
                error_type=type(e).__name__,
                error=str(e),
            )
            _report_unexpected_error(e)
            continue

        if finished:
            log_event("session_stop", level=logging.INFO, reason="exit_command", cursor=cursor)
            return 0
