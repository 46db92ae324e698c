"""Cursor and session flags that travel alongside a document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from edlin_engine.config import DEFAULT_CURSOR, DEFAULT_PROMPT, EditorConfig


@dataclass(slots=True)
class EditorState:
    """Mutable per-session editor state.

    ``cursor`` is the zero-based index of the current line. ``search_str``
    remembers the last non-empty search or replace pattern.
    """

    cursor: int = 0
    quit: bool = False
    search_str: Optional[str] = None
    prompt: str = DEFAULT_PROMPT
    cursor_marker: str = DEFAULT_CURSOR

    @classmethod
    def from_config(cls, config: EditorConfig) -> "EditorState":
        return cls(prompt=config.prompt, cursor_marker=config.cursor_marker)

    def set_cursor(self, index: int) -> None:
        self.cursor = max(0, index)

    def clamp_cursor(self, line_count: int) -> None:
        """Keep the cursor on an existing line after the document shrinks."""

        self.cursor = max(0, min(self.cursor, line_count - 1))

    def remember_search(self, text: Optional[str]) -> Optional[str]:
        """Adopt ``text`` when non-empty and return the effective pattern."""

        if text:
            self.search_str = text
        return self.search_str


__all__ = ["EditorState"]
