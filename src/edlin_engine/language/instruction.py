"""The instruction record produced for each parsed statement."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Optional, Union

from edlin_engine.errors import ParserStateError


class Command(Enum):
    """Every statement kind the executor knows how to run."""

    APPEND = "append"
    ASK = "ask"
    COPY = "copy"
    DELETE = "delete"
    EDIT = "edit"
    END = "end"
    INSERT = "insert"
    LIST = "list"
    MOVE = "move"
    PAGE = "page"
    QUIT = "quit"
    REPLACE = "replace"
    SEARCH = "search"
    TRANSFER = "transfer"
    WRITE = "write"
    NONE = "none"


class Marker(Enum):
    THIS_LINE = "."

    def __repr__(self) -> str:
        return "THIS_LINE"


THIS_LINE = Marker.THIS_LINE

Address = Union[int, Marker, None]


def to_index(number: int) -> int:
    """Convert a one-based line number to an index; ``0`` stays ``0``."""

    return number - 1 if number > 0 else number


@dataclass(slots=True)
class Instruction:
    """Fields gathered while parsing one statement.

    Addresses are ``None`` when absent, a zero-based index, or
    :data:`THIS_LINE`. Every ``set_*`` method refuses to overwrite a value
    that was already set during the same statement.
    """

    command: Command = Command.NONE
    start: Address = None
    end: Address = None
    only: Address = None
    target: Address = None
    repeat: int = 1
    ask: bool = False
    search: Optional[str] = None
    replace: Optional[str] = None
    filename: Optional[str] = None
    _repeat_set: bool = field(default=False, repr=False, compare=False)

    def reset(self) -> None:
        for entry in fields(self):
            setattr(self, entry.name, entry.default)

    @property
    def is_empty(self) -> bool:
        return self.command is Command.NONE and not self.has_range

    @property
    def has_range(self) -> bool:
        return any(
            value is not None for value in (self.start, self.end, self.only)
        )

    def set_command(self, command: Command) -> None:
        if self.command is not Command.NONE:
            raise ParserStateError("command")
        self.command = command

    def set_start(self, address: Union[int, Marker]) -> None:
        if self.start is not None:
            raise ParserStateError("start")
        self.start = _convert(address)

    def set_end(self, address: Union[int, Marker]) -> None:
        if self.end is not None:
            raise ParserStateError("end")
        self.end = _convert(address)

    def set_only(self, address: Union[int, Marker]) -> None:
        if self.only is not None:
            raise ParserStateError("only")
        if self.start is not None or self.end is not None:
            raise ParserStateError("only")
        self.only = _convert(address)

    def set_target(self, address: Union[int, Marker]) -> None:
        if self.target is not None:
            raise ParserStateError("target")
        self.target = _convert(address)

    def set_repeat(self, count: int) -> None:
        if self._repeat_set:
            raise ParserStateError("repeat")
        self.repeat = count
        self._repeat_set = True

    def set_ask(self) -> None:
        if self.ask:
            raise ParserStateError("ask")
        self.ask = True

    def set_search(self, text: Optional[str]) -> None:
        if self.search is not None:
            raise ParserStateError("search")
        self.search = text

    def set_replace(self, text: Optional[str]) -> None:
        if self.replace is not None:
            raise ParserStateError("replace")
        self.replace = text

    def set_filename(self, name: str) -> None:
        if self.filename is not None:
            raise ParserStateError("filename")
        self.filename = name

    def as_payload(self) -> Dict[str, object]:
        return {
            "command": self.command.value,
            "start": self.start,
            "end": self.end,
            "only": self.only,
            "target": self.target,
            "repeat": self.repeat,
            "ask": self.ask,
            "search": self.search,
            "replace": self.replace,
            "filename": self.filename,
        }


def _convert(address: Union[int, Marker]) -> Union[int, Marker]:
    if isinstance(address, Marker):
        return address
    return to_index(address)


__all__ = [
    "Address",
    "Command",
    "Instruction",
    "Marker",
    "THIS_LINE",
    "to_index",
]
