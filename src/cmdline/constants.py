"""Literal constants used by cmdline."""

APP_NAME = "cmdline"

ARCHIVE_SUFFIX = ".zip"
ARCHIVE_PUT = "put"
ARCHIVE_GET = "get"
# Bytes per read/write when streaming files in and out of archives.
COPY_CHUNK_SIZE = 64 * 1024

UNKNOWN_COMMAND_NAME = "noSuchCommand"
EXIT_TEXT = "exit"
RECURSIVE_FLAG = "-R"

PROMPT_SUFFIX = "$ "
LIST_NAME_WIDTH = 32
TREE_INDENT = "  "

DEBUG_ENV_VAR = "CMDLINE_DEBUG"

WELCOME_TEXT = "\n".join(
    (
        "Welcome to simple command line!",
        "Main Usage: <command> [arg0 [arg1 [args...]]]",
        "",
        "Show available commands: listCommands",
        "Show usage of command  : help <command>",
        "Close command line     : exit",
    )
)
