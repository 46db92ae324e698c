"""Token kinds produced by the command-line lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class TokenKind(Enum):
    NUMBER = "number"
    TEXT = "text"
    STRING = "string"
    THIS_LINE = "this_line"
    COMMA = "comma"
    SEMICOLON = "semicolon"
    KW_APPEND = "append"
    KW_COPY = "copy"
    KW_DELETE = "delete"
    KW_END = "end"
    KW_INSERT = "insert"
    KW_LIST = "list"
    KW_MOVE = "move"
    KW_PAGE = "page"
    KW_QUIT = "quit"
    KW_REPLACE = "replace"
    KW_SEARCH = "search"
    KW_TRANSFER = "transfer"
    KW_WRITE = "write"
    KW_ASK = "ask"
    KW_ASK_REPLACE = "ask_replace"
    KW_ASK_SEARCH = "ask_search"
    EOL = "eol"
    EOF = "eof"
    INVALID = "invalid"
    ERROR = "error"

    @property
    def is_terminator(self) -> bool:
        """True for tokens that close a statement."""

        return self in _TERMINATORS


_TERMINATORS = frozenset({TokenKind.SEMICOLON, TokenKind.EOL, TokenKind.EOF})

COMMAND_KEYWORDS: Mapping[str, TokenKind] = MappingProxyType(
    {
        "A": TokenKind.KW_APPEND,
        "C": TokenKind.KW_COPY,
        "D": TokenKind.KW_DELETE,
        "E": TokenKind.KW_END,
        "I": TokenKind.KW_INSERT,
        "L": TokenKind.KW_LIST,
        "M": TokenKind.KW_MOVE,
        "P": TokenKind.KW_PAGE,
        "Q": TokenKind.KW_QUIT,
        "R": TokenKind.KW_REPLACE,
        "S": TokenKind.KW_SEARCH,
        "T": TokenKind.KW_TRANSFER,
        "W": TokenKind.KW_WRITE,
        "?R": TokenKind.KW_ASK_REPLACE,
        "?S": TokenKind.KW_ASK_SEARCH,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """One scanned token.

    ``start`` and ``end`` delimit the consumed input, so ``end`` is the scan
    position right after the token. ``lexeme`` holds the decoded text, which
    differs from the raw input for quoted strings.
    """

    kind: TokenKind
    lexeme: str = ""
    start: int = 0
    end: int = 0

    def __repr__(self) -> str:
        if self.lexeme:
            return f"{self.kind.name}({self.lexeme!r})"
        return self.kind.name


__all__ = ["TokenKind", "Token", "COMMAND_KEYWORDS"]
