"""Command handlers and the dispatcher that runs parsed instructions."""

from .base import (
    CommandResult,
    EventBus,
    SessionContext,
    confirm,
    format_line,
    read_text,
)
from .dispatch import CommandHandler, execute, handler_for
from .resolver import RangeShape, ResolvedRange, resolve_range

__all__ = [
    "CommandHandler",
    "CommandResult",
    "EventBus",
    "RangeShape",
    "ResolvedRange",
    "SessionContext",
    "confirm",
    "execute",
    "format_line",
    "handler_for",
    "read_text",
    "resolve_range",
]
