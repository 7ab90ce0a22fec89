"""Custom exception hierarchy for cmdline."""


class AppError(Exception):
    """Base exception for app-specific failures."""


class UsageError(ValueError, AppError):
    """Wrong or missing command arguments."""


class NotFoundError(AppError):
    """A path named by the user does not exist."""


class UnknownCommandError(AppError):
    """A command name is absent from the registry."""


class FileOperationError(AppError):
    """An underlying read/write/create/delete call failed."""


class ArchiveError(FileOperationError):
    """Raised for pack/unpack failures."""


class StartupValidationError(AppError):
    """Raised when process arguments are invalid."""
