"""Command registry, line parsing and the command error boundary."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping

from . import commands, presenters
from .constants import EXIT_TEXT, UNKNOWN_COMMAND_NAME
from .errors import AppError, UnknownCommandError, UsageError
from .logging_utils import log_event, summarize_args
from .models import Effect, Outcome

Executor = Callable[[tuple[str, ...], Path], Outcome]


@dataclass(frozen=True)
class CommandHandler:
    """Defines how to execute a command."""

    executor: Executor
    usage: str = ""
    summary: str = ""


@dataclass(frozen=True)
class Command:
    """A command name bound to its arguments and handler."""

    name: str
    args: tuple[str, ...]
    handler: CommandHandler = field(repr=False, compare=False)

    @property
    def is_unknown(self) -> bool:
        return self.name == UNKNOWN_COMMAND_NAME

    def usage(self) -> str:
        return render_usage(self.handler)

    def execute(self, cursor: Path) -> Outcome:
        """Run the handler; every expected failure comes back as text."""
        try:
            return self.handler.executor(self.args, cursor)
        except UsageError as exc:
            message = str(exc)
            usage = self.usage()
            return Outcome(text=f"{message}\n{usage}" if message else usage)
        except AppError as exc:
            self._log_error(exc)
            return Outcome(text=str(exc))
        except OSError as exc:
            self._log_error(exc)
            return Outcome(text=describe_os_error(exc))

    def _log_error(self, error: Exception) -> None:
        log_event(
            "command_error",
            level=logging.ERROR,
            command=self.name,
            args_summary=summarize_args(self.args),
            error_type=type(error).__name__,
            error=str(error),
        )


def describe_os_error(error: OSError) -> str:
    reason = error.strerror or str(error)
    if error.filename is not None:
        return f"Error: {reason}: {error.filename}"
    return f"Error: {reason}"


def render_usage(handler: CommandHandler) -> str:
    if not handler.usage:
        return handler.summary
    return f"{handler.summary}\nUsage: {handler.usage}"


def _exec_no_such_command(args: tuple[str, ...], cursor: Path) -> Outcome:
    return Outcome(text="No such command!\nShow available commands: listCommands")


def _exec_exit(args: tuple[str, ...], cursor: Path) -> Outcome:
    return Outcome(text=EXIT_TEXT, effect=Effect.EXIT)


def _exec_list_commands(args: tuple[str, ...], cursor: Path) -> Outcome:
    return Outcome(text=presenters.render_command_names(command_names()))


def _exec_help(args: tuple[str, ...], cursor: Path) -> Outcome:
    if not args:
        return Outcome(text=render_usage(COMMAND_REGISTRY["help"]))
    try:
        handler = lookup_handler(args[0])
    except UnknownCommandError:
        return Outcome(text=f'Bad argument! No such command "{args[0]}"!')
    return Outcome(text=render_usage(handler))


# Command registry, in listing order
COMMAND_REGISTRY: Mapping[str, CommandHandler] = MappingProxyType({
    UNKNOWN_COMMAND_NAME: CommandHandler(_exec_no_such_command),
    "exit": CommandHandler(_exec_exit, usage="exit", summary="Exit from command line"),
    "listCommands": CommandHandler(
        _exec_list_commands, usage="listCommands", summary="Show all available commands"
    ),
    "help": CommandHandler(_exec_help, usage="help [<command>]", summary="Show usage of a command"),
    "currentPath": CommandHandler(
        commands.exec_current_path, usage="currentPath", summary="Show current absolute path"
    ),
    "changePath": CommandHandler(
        commands.exec_change_path,
        usage="changePath [<directory>]",
        summary="Change current absolute path",
    ),
    "listDir": CommandHandler(
        commands.exec_list_dir,
        usage="listDir [<directory>]",
        summary="Show directory content with sizes",
    ),
    "makeDir": CommandHandler(
        commands.exec_make_dir, usage="makeDir <newDirectoryName>", summary="Create new directory"
    ),
    "remove": CommandHandler(
        commands.exec_remove,
        usage="remove [-R] <file or directory>",
        summary="Remove file or empty directory (-R removes a directory with its content)",
    ),
    "copy": CommandHandler(
        commands.exec_copy,
        usage="copy <source> <destination>",
        summary="Copy file or directory",
    ),
    "move": CommandHandler(
        commands.exec_move,
        usage="move <old path> <new path>",
        summary="Move or rename file or directory",
    ),
    "print": CommandHandler(commands.exec_print, usage="print <file>", summary="Print file's content"),
    "find": CommandHandler(
        commands.exec_find,
        usage="find <root> <glob>",
        summary="Find files whose name matches a glob (*, ?, {a,b}, [abc])",
    ),
    "fileTree": CommandHandler(
        commands.exec_file_tree, usage="fileTree <directory>", summary="Show directory tree"
    ),
    "calendar": CommandHandler(
        commands.exec_calendar, usage="calendar", summary="Show current month"
    ),
    "archive": CommandHandler(
        commands.exec_archive,
        usage="archive [put | get] <file>",
        summary="Put file or directory in a .zip archive, or get it back out",
    ),
})


def command_names() -> list[str]:
    """Registered names a user can type, in registry order."""
    return [name for name in COMMAND_REGISTRY if name != UNKNOWN_COMMAND_NAME]


def lookup_handler(name: str) -> CommandHandler:
    if name == UNKNOWN_COMMAND_NAME or name not in COMMAND_REGISTRY:
        raise UnknownCommandError(f"Unknown command: {name}")
    return COMMAND_REGISTRY[name]


def parse_command(line: str) -> Command:
    """Split a line on whitespace and bind it to a registered command.

    Unrecognized names, and empty lines, become the unknown-command
    variant carrying every token as its arguments.
    """
    tokens = line.split()
    if tokens:
        try:
            handler = lookup_handler(tokens[0])
        except UnknownCommandError:
            pass
        else:
            return Command(name=tokens[0], args=tuple(tokens[1:]), handler=handler)

    return Command(
        name=UNKNOWN_COMMAND_NAME,
        args=tuple(tokens),
        handler=COMMAND_REGISTRY[UNKNOWN_COMMAND_NAME],
    )
