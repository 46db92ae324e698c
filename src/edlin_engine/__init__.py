"""UI-agnostic engine for a line-oriented, edlin-style text editor."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "host",
    "language",
    "runtime",
]

__version__ = "0.1.0"
