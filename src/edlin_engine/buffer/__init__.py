"""Line storage, the document model, and editor state."""

from .document import Document, open_document, read_lines, split_lines, write_lines
from .line_store import LineStore
from .state import EditorState

__all__ = [
    "Document",
    "EditorState",
    "LineStore",
    "open_document",
    "read_lines",
    "split_lines",
    "write_lines",
]
