"""Textual front end: queue-backed console, adapter and app."""

from .controller import TextualConsole, TextualEdlinAdapter, TextualUIHooks

__all__ = ["TextualConsole", "TextualEdlinAdapter", "TextualUIHooks"]
