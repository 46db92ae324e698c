"""Error kinds and exception hierarchy shared by every editor layer."""

from __future__ import annotations

from enum import Enum
from typing import Optional

APP_NAME = "edlin"


class ErrorKind(Enum):
    """Categories of user-visible failures and their short messages."""

    SYNTAX = "Syntax error"
    RANGE = "Invalid range"
    NOT_FOUND = "Not found"
    INVALID = "Invalid input"
    ALLOCATION = "Memory allocation failed"
    OPEN = "Open failed"
    READ = "Read error"
    WRITE = "Write error"
    WRITE_PROTECTED = "Write protected"
    INTERNAL = "Internal error"
    OVERFLOW = "Number too large"
    DOUBLE_FAULT = "Double fault"

    @property
    def message(self) -> str:
        return self.value


class EdlinError(RuntimeError):
    """Base class for every failure the editor reports to the user."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.kind.message)
        self.detail = detail


class CommandSyntaxError(EdlinError):
    """Raised for malformed statements and for unsatisfiable ranges."""

    kind = ErrorKind.SYNTAX

    def __init__(self, detail: str | None = None, *, position: int | None = None) -> None:
        super().__init__(detail)
        self.position = position


class LineRangeError(EdlinError):
    kind = ErrorKind.RANGE


class SearchNotFoundError(EdlinError):
    kind = ErrorKind.NOT_FOUND


class InvalidArgumentError(EdlinError):
    """Raised when a command is given a structurally disallowed argument."""

    kind = ErrorKind.INVALID


class AllocationError(EdlinError):
    kind = ErrorKind.ALLOCATION


class DocumentIOError(EdlinError):
    """Base for file collaborator failures; keeps the offending path."""

    def __init__(self, detail: str | None = None, *, path: str | None = None) -> None:
        super().__init__(detail)
        self.path = path


class DocumentOpenError(DocumentIOError):
    kind = ErrorKind.OPEN


class DocumentReadError(DocumentIOError):
    kind = ErrorKind.READ


class DocumentWriteError(DocumentIOError):
    kind = ErrorKind.WRITE


class WriteProtectedError(DocumentIOError):
    kind = ErrorKind.WRITE_PROTECTED


class InternalError(EdlinError):
    kind = ErrorKind.INTERNAL


class LexerStateError(InternalError):
    """Raised when the lexer is asked to rewind without a saved state."""


class ParserStateError(InternalError):
    """Raised when the parser tries to fill an instruction field twice."""

    def __init__(self, field: str) -> None:
        super().__init__(f"parser saw multiple values for '{field}'")
        self.field = field


class NumberOverflowError(EdlinError):
    kind = ErrorKind.OVERFLOW

    def __init__(self, literal: str, *, position: int | None = None) -> None:
        super().__init__(f"number out of range: {literal}")
        self.literal = literal
        self.position = position


class DoubleFaultError(EdlinError):
    kind = ErrorKind.DOUBLE_FAULT


def format_error(error: BaseException, *, app_name: str = APP_NAME) -> str:
    """Render ``error`` as the one-line message shown to the user.

    Anything that is not an :class:`EdlinError` is reported as an internal
    error. If building the message itself fails the double-fault text is
    returned instead.
    """

    try:
        kind: Optional[ErrorKind] = getattr(error, "kind", None)
        if not isinstance(kind, ErrorKind):
            kind = ErrorKind.INTERNAL
        return f"{app_name}: {kind.message}."
    except Exception:  # pragma: no cover - only reachable with hostile objects
        return f"{app_name}: {ErrorKind.DOUBLE_FAULT.message}. Error formatting failed."


__all__ = [
    "APP_NAME",
    "ErrorKind",
    "EdlinError",
    "CommandSyntaxError",
    "LineRangeError",
    "SearchNotFoundError",
    "InvalidArgumentError",
    "AllocationError",
    "DocumentIOError",
    "DocumentOpenError",
    "DocumentReadError",
    "DocumentWriteError",
    "WriteProtectedError",
    "InternalError",
    "LexerStateError",
    "ParserStateError",
    "NumberOverflowError",
    "DoubleFaultError",
    "format_error",
]
