"""Shared context, results and console helpers for command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from edlin_engine.buffer import Document, EditorState
from edlin_engine.config import EditorConfig
from edlin_engine.host import Console

TEXT_TERMINATOR = "."


class EventBus:
    """Minimal event bus letting hosts observe what the executor does."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class CommandResult:
    """Outcome of one executed statement."""

    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class SessionContext:
    """Everything a command handler may touch."""

    document: Document
    state: EditorState
    console: Console
    bus: EventBus = field(default_factory=EventBus)
    config: EditorConfig = field(default_factory=EditorConfig)

    @property
    def line_count(self) -> int:
        return self.document.line_count


def format_line(context: SessionContext, index: int, text: str) -> str:
    """Render ``text`` as line ``index`` with the cursor column."""

    marker = context.state.cursor_marker
    if index != context.state.cursor:
        marker = " " * len(marker)
    return f"{index + 1:>8}:{marker}{text}\n"


def print_line(context: SessionContext, index: int, text: str) -> None:
    context.console.write(format_line(context, index, text))


def read_text(context: SessionContext, number: int) -> Optional[str]:
    """Prompt for the text of one-based line ``number``.

    Returns ``None`` when the user ends input with a lone ``.`` or the input
    stream is exhausted.
    """

    text = context.console.read_line(f"{number:>8}:*")
    if text is None or text == TEXT_TERMINATOR:
        return None
    return text


def confirm(context: SessionContext, prompt: str) -> bool:
    """Ask a yes/no question until the answer is Y or N.

    A closed input stream counts as "no".
    """

    while True:
        reply = context.console.read_key(f"{prompt} (Y/N)? ")
        if reply is None:
            return False
        answer = reply.strip().upper()[:1]
        if answer == "Y":
            return True
        if answer == "N":
            return False


__all__ = [
    "CommandResult",
    "EventBus",
    "SessionContext",
    "TEXT_TERMINATOR",
    "confirm",
    "format_line",
    "print_line",
    "read_text",
]
