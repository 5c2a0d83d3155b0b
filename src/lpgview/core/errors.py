"""
Error taxonomy for lpgview.

Every failure the core surfaces to a caller derives from ``LpgviewError`` so
front-ends can report them uniformly. None of these are retried by the core.
"""

from typing import Optional


class LpgviewError(Exception):
    """Base class for all lpgview errors."""


class ParseError(LpgviewError):
    """Malformed document structure or an invalid relationship record."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        record: Optional[str] = None,
    ):
        self.message = message
        self.line = line
        self.column = column
        self.record = record
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = ""
        if self.record:
            prefix = f"{self.record}: "
        location = ""
        if self.line is not None:
            location = f" (line {self.line}"
            if self.column is not None:
                location += f", column {self.column}"
            location += ")"
        return f"{prefix}{self.message}{location}"


class StorageError(LpgviewError):
    """A storage backend could not complete an operation."""


class AuthError(StorageError):
    """Backend authentication failed, was cancelled, or is missing."""


class NotFoundError(StorageError):
    """The requested file is not part of the backend's current listing."""

    def __init__(self, file_id: str, message: Optional[str] = None):
        self.file_id = file_id
        super().__init__(message or f"File not found: {file_id}")


class UnsupportedOperationError(StorageError):
    """The backend does not implement the requested operation."""

    def __init__(self, operation: str, provider: str):
        self.operation = operation
        self.provider = provider
        super().__init__(f"{operation} is not implemented for {provider}")
