"""Document model and the file collaborator that loads and saves it."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from edlin_engine.config import DEFAULT_ENCODING
from edlin_engine.errors import (
    DocumentOpenError,
    DocumentReadError,
    DocumentWriteError,
    InvalidArgumentError,
    WriteProtectedError,
)
from edlin_engine.runtime import telemetry

from .line_store import LineStore

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_DOS_EOF = "\x1a"
_ERRORS = "surrogateescape"


def split_lines(text: str, *, ignore_eof: bool = True) -> List[str]:
    """Split ``text`` on ``\\r\\n``, ``\\r`` or ``\\n``.

    A single trailing terminator does not produce an extra empty line. When
    ``ignore_eof`` is false, everything from the first Ctrl-Z on is dropped.
    """

    if not ignore_eof:
        text = text.split(_DOS_EOF, 1)[0]
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def read_lines(
    path: str, *, encoding: str = DEFAULT_ENCODING, ignore_eof: bool = True
) -> List[str]:
    """Read ``path`` and return its lines (file collaborator ``load``)."""

    try:
        with open(path, "r", encoding=encoding, errors=_ERRORS, newline="") as stream:
            try:
                text = stream.read()
            except (OSError, UnicodeError) as exc:
                raise DocumentReadError(str(exc), path=path) from exc
    except OSError as exc:
        raise DocumentOpenError(str(exc), path=path) from exc
    return split_lines(text, ignore_eof=ignore_eof)


def write_lines(
    path: str, lines: Iterable[str], *, encoding: str = DEFAULT_ENCODING
) -> int:
    """Write ``lines`` newline-terminated to ``path`` (collaborator ``save``).

    The text is rendered completely before the file is opened, so a failure
    never touches the caller's data. Returns the number of lines written.
    """

    rendered = [f"{line}\n" for line in lines]
    try:
        stream = open(path, "w", encoding=encoding, errors=_ERRORS, newline="")
    except OSError as exc:
        raise DocumentOpenError(str(exc), path=path) from exc
    with stream:
        try:
            stream.writelines(rendered)
        except (OSError, UnicodeError) as exc:
            raise DocumentWriteError(str(exc), path=path) from exc
    return len(rendered)


@dataclass(slots=True)
class Document:
    """Lines being edited plus the file they are bound to."""

    lines: LineStore[str] = field(default_factory=lambda: LineStore([""]))
    filename: Optional[str] = None
    read_only: bool = False
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def empty(cls, filename: Optional[str] = None, **kwargs: object) -> "Document":
        """A new document holding exactly one placeholder empty line."""

        return cls(lines=LineStore([""]), filename=filename, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, filename: Optional[str] = None
    ) -> "Document":
        return cls(lines=LineStore(lines), filename=filename)

    @classmethod
    def load(
        cls,
        path: str,
        *,
        encoding: str = DEFAULT_ENCODING,
        ignore_eof: bool = False,
    ) -> "Document":
        """Load ``path``; an empty file yields the placeholder line."""

        with telemetry.span(
            "document::load", component="document", metadata={"path": path}
        ):
            lines = read_lines(path, encoding=encoding, ignore_eof=ignore_eof)
            read_only = os.path.exists(path) and not os.access(path, os.W_OK)
        telemetry.record_event(
            "document.loaded", data={"path": path, "lines": len(lines)}
        )
        return cls(
            lines=LineStore(lines or [""]),
            filename=path,
            read_only=read_only,
            encoding=encoding,
        )

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def snapshot(self) -> Sequence[str]:
        return self.lines.snapshot()

    def get_line(self, index: int) -> str:
        return self.lines.get(index)

    def save(
        self,
        path: Optional[str] = None,
        *,
        stop: Optional[int] = None,
    ) -> int:
        """Persist lines ``[0, stop)`` to ``path`` or the bound file name.

        Returns the number of lines written. The in-memory document is never
        modified, whatever the outcome.
        """

        target = path or self.filename
        if target is None:
            raise InvalidArgumentError("document has no file name")
        if self.read_only and target == self.filename:
            raise WriteProtectedError(path=target)
        end = self.line_count if stop is None else max(0, min(stop, self.line_count))
        with telemetry.span(
            "document::save", component="document", metadata={"path": target}
        ):
            written = write_lines(
                target, self.lines.slice(0, end), encoding=self.encoding
            )
        telemetry.record_event(
            "document.saved", data={"path": target, "lines": written}
        )
        return written

    def rebind(self, filename: str) -> None:
        """Point the document at ``filename``; the new binding is writable."""

        if filename != self.filename:
            self.filename = filename
            self.read_only = False


def open_document(
    path: str, *, encoding: str = DEFAULT_ENCODING, ignore_eof: bool = False
) -> Tuple[Document, bool]:
    """Load ``path``, creating an empty file first when it does not exist.

    Returns the document and whether the file was newly created.
    """

    if os.path.exists(path):
        return Document.load(path, encoding=encoding, ignore_eof=ignore_eof), False
    try:
        with open(path, "w", encoding=encoding):
            pass
    except OSError as exc:
        raise DocumentOpenError(str(exc), path=path) from exc
    telemetry.record_event("document.created", data={"path": path})
    return Document.empty(path, encoding=encoding), True


__all__ = ["Document", "open_document", "split_lines", "read_lines", "write_lines"]
