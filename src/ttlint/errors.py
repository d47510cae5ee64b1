"""Exceptions raised by ttlint."""


class TtlintError(Exception):
    """Base class for all ttlint errors."""


class PatternError(TtlintError):
    """Raised when the pattern set cannot be compiled."""


class FileAccessError(TtlintError):
    """Raised when a file cannot be opened, read or written.

    Attributes:
        path: Path of the file that failed
        operation: What was being attempted ('open', 'read', 'write', ...)
    """

    def __init__(self, path: str, operation: str, cause: Exception):
        self.path = path
        self.operation = operation
        self.cause = cause
        super().__init__(f'Failed to {operation} file: {path}: {cause}')
