"""Recursive-descent parser for the single-letter editing language.

Grammar (one statement; ``;`` separates statements on a line)::

    statement    := [ line-range ] command-tail | standalone | <empty>
    line-range   := address [ ',' address ] | ',' address
    standalone   := '?' | 'E' | 'Q'
    address      := NUMBER | '.'
    replace-tail := ['?'] 'R' [ STRING | TEXT ] ',' [ STRING | TEXT ]
    search-tail  := ['?'] 'S' [ STRING | TEXT ]
    copy-tail    := [ ',' address [ ',' NUMBER ] ] 'C' [ NUMBER | '.' ]
    move-tail    := [ ',' address ] 'M' [ NUMBER | '.' ]
    transfer-tail:= 'T' STRING
    write-tail   := 'W' [ STRING ]

A range with no command tail becomes an edit-in-place statement.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import NoReturn, Union

from edlin_engine.config import INT32_MAX
from edlin_engine.errors import CommandSyntaxError, InternalError, NumberOverflowError
from edlin_engine.runtime import telemetry

from .instruction import THIS_LINE, Command, Instruction, Marker
from .lexer import Lexer
from .tokens import Token, TokenKind

_SIMPLE_COMMANDS = {
    TokenKind.KW_APPEND: Command.APPEND,
    TokenKind.KW_DELETE: Command.DELETE,
    TokenKind.KW_INSERT: Command.INSERT,
    TokenKind.KW_LIST: Command.LIST,
    TokenKind.KW_PAGE: Command.PAGE,
}

_STANDALONE_COMMANDS = {
    TokenKind.KW_ASK: Command.ASK,
    TokenKind.KW_END: Command.END,
    TokenKind.KW_QUIT: Command.QUIT,
}

_REPLACE_KEYWORDS = frozenset({TokenKind.KW_REPLACE, TokenKind.KW_ASK_REPLACE})
_SEARCH_KEYWORDS = frozenset({TokenKind.KW_SEARCH, TokenKind.KW_ASK_SEARCH})
_TAIL_KEYWORDS = frozenset(
    {
        *_SIMPLE_COMMANDS,
        *_REPLACE_KEYWORDS,
        *_SEARCH_KEYWORDS,
        TokenKind.KW_COPY,
        TokenKind.KW_MOVE,
        TokenKind.KW_TRANSFER,
        TokenKind.KW_WRITE,
    }
)
# Keywords allowed straight after "<start>," to form a start-only range.
_RANGE_END_KEYWORDS = frozenset(
    {
        *_REPLACE_KEYWORDS,
        *_SEARCH_KEYWORDS,
        TokenKind.KW_COPY,
        TokenKind.KW_DELETE,
        TokenKind.KW_LIST,
        TokenKind.KW_MOVE,
        TokenKind.KW_PAGE,
        TokenKind.KW_TRANSFER,
    }
)
_ADDRESS_TOKENS = frozenset({TokenKind.NUMBER, TokenKind.THIS_LINE})
_TEXT_TOKENS = frozenset({TokenKind.STRING, TokenKind.TEXT})


class ParseStatus(Enum):
    MORE = "more"
    DONE = "done"


class Parser:
    """Parses a command line statement by statement.

    Call :meth:`parse` repeatedly; each call fills :attr:`instruction` and
    returns :attr:`ParseStatus.MORE` while further ``;``-separated statements
    remain on the line.
    """

    def __init__(self, line: str) -> None:
        self.lexer = Lexer(line)
        self.instruction = Instruction()

    @property
    def position(self) -> int:
        return self.lexer.position

    def parse(self) -> ParseStatus:
        self.instruction.reset()
        token = self.lexer.step()
        if token.kind is TokenKind.SEMICOLON:
            return ParseStatus.MORE
        if token.kind in (TokenKind.EOL, TokenKind.EOF):
            return ParseStatus.DONE
        self.lexer.rewind()

        self._statement()

        terminator = self.lexer.step()
        if not terminator.kind.is_terminator:
            self._syntax(f"unexpected {terminator.kind.name} after statement")
        if self.instruction.command is Command.NONE and self.instruction.has_range:
            self.instruction.command = Command.EDIT
        telemetry.record_event(
            "parser.instruction", level="debug", data=self.instruction.as_payload()
        )
        if terminator.kind is TokenKind.SEMICOLON:
            return ParseStatus.MORE
        return ParseStatus.DONE

    # Productions -------------------------------------------------------

    def _statement(self) -> None:
        token = self.lexer.step()
        kind = token.kind
        if kind in _ADDRESS_TOKENS:
            self.lexer.rewind()
            self._range_start()
        elif kind is TokenKind.COMMA:
            self.lexer.rewind()
            self._range_end()
        elif kind in _TAIL_KEYWORDS:
            self.lexer.rewind()
            self._after_range()
        elif kind in _STANDALONE_COMMANDS:
            self.instruction.set_command(_STANDALONE_COMMANDS[kind])
        else:
            self._reject(token)

    def _range_start(self) -> None:
        token = self.lexer.step()
        address = self._address(token)
        if self.lexer.peek_next_nonspace() == ",":
            self.instruction.set_start(address)
            self._range_end()
        else:
            self.instruction.set_only(address)
            self._after_range()

    def _range_end(self) -> None:
        self._expect(TokenKind.COMMA)
        token = self.lexer.step()
        if token.kind in _ADDRESS_TOKENS:
            self.instruction.set_end(self._address(token))
            self._check_order()
            self._after_range()
        elif token.kind in _RANGE_END_KEYWORDS:
            self.lexer.rewind()
            self._after_range()
        else:
            self._reject(token)

    def _after_range(self) -> None:
        if self.lexer.peek_next_nonspace() == ",":
            self.lexer.step()
            self._target_range()
            return

        token = self.lexer.step()
        kind = token.kind
        if kind in _SIMPLE_COMMANDS:
            self.instruction.set_command(_SIMPLE_COMMANDS[kind])
        elif kind in _REPLACE_KEYWORDS:
            self.lexer.rewind()
            self._replace()
        elif kind in _SEARCH_KEYWORDS:
            self.lexer.rewind()
            self._search()
        elif kind is TokenKind.KW_TRANSFER:
            self.instruction.set_command(Command.TRANSFER)
            self._transfer()
        elif kind is TokenKind.KW_WRITE:
            self.instruction.set_command(Command.WRITE)
            self._write()
        elif kind is TokenKind.KW_COPY:
            self.instruction.set_command(Command.COPY)
            self._trailing_target()
        elif kind is TokenKind.KW_MOVE:
            self.instruction.set_command(Command.MOVE)
            self._trailing_target()
        elif kind.is_terminator:
            self.lexer.rewind()
        else:
            self._reject(token)

    def _target_range(self) -> None:
        token = self.lexer.step()
        self.instruction.set_target(self._address(token))

        token = self.lexer.step()
        if token.kind is TokenKind.COMMA:
            self._repeat()
        elif token.kind is TokenKind.KW_COPY:
            self.instruction.set_command(Command.COPY)
            self._trailing_target()
        elif token.kind is TokenKind.KW_MOVE:
            self.instruction.set_command(Command.MOVE)
            self._trailing_target()
        else:
            self._reject(token)

    def _repeat(self) -> None:
        token = self.lexer.step()
        if token.kind is not TokenKind.NUMBER:
            self._reject(token)
        self.instruction.set_repeat(self._repeat_count(token))
        self._expect(TokenKind.KW_COPY)
        self.instruction.set_command(Command.COPY)

    def _trailing_target(self) -> None:
        """Optional number after ``C``/``M``.

        For copy it is the repeat count when a target was already given,
        otherwise it is the target. For move it is always the target.
        """

        token = self.lexer.step()
        if token.kind not in _ADDRESS_TOKENS:
            self.lexer.rewind()
            return
        if (
            self.instruction.command is Command.COPY
            and self.instruction.target is not None
        ):
            if token.kind is not TokenKind.NUMBER:
                self._reject(token)
            self.instruction.set_repeat(self._repeat_count(token))
        else:
            self.instruction.set_target(self._address(token))

    def _replace(self) -> None:
        token = self.lexer.step()
        if token.kind is TokenKind.KW_ASK_REPLACE:
            self.instruction.set_ask()
        elif token.kind is not TokenKind.KW_REPLACE:
            raise InternalError(f"replace production entered on {token.kind.name}")
        self.instruction.set_command(Command.REPLACE)

        token = self.lexer.step()
        if token.kind in _TEXT_TOKENS:
            self.instruction.set_search(token.lexeme)
        elif token.kind is TokenKind.COMMA:
            self.instruction.set_search("")
            self.lexer.rewind()
        else:
            self._reject(token)

        self._expect(TokenKind.COMMA)

        token = self.lexer.step()
        if token.kind in _TEXT_TOKENS:
            self.instruction.set_replace(token.lexeme)
        elif token.kind is TokenKind.COMMA or token.kind.is_terminator:
            self.lexer.rewind()
            self.instruction.set_replace("")
        else:
            self._reject(token)

    def _search(self) -> None:
        token = self.lexer.step()
        if token.kind is TokenKind.KW_ASK_SEARCH:
            self.instruction.set_ask()
        elif token.kind is not TokenKind.KW_SEARCH:
            raise InternalError(f"search production entered on {token.kind.name}")
        self.instruction.set_command(Command.SEARCH)

        token = self.lexer.step()
        if token.kind in _TEXT_TOKENS:
            self.instruction.set_search(token.lexeme)
        else:
            self.lexer.rewind()

    def _transfer(self) -> None:
        token = self._expect(TokenKind.STRING)
        self.instruction.set_filename(token.lexeme)

    def _write(self) -> None:
        token = self.lexer.step()
        if token.kind is TokenKind.STRING:
            self.instruction.set_filename(token.lexeme)
        elif token.kind.is_terminator:
            self.lexer.rewind()
        else:
            self._reject(token)

    # Helpers -----------------------------------------------------------

    def _address(self, token: Token) -> Union[int, Marker]:
        if token.kind is TokenKind.THIS_LINE:
            return THIS_LINE
        if token.kind is TokenKind.NUMBER:
            return self._number(token)
        self._reject(token)

    def _number(self, token: Token) -> int:
        value = int(token.lexeme)
        if value > INT32_MAX:
            raise NumberOverflowError(token.lexeme, position=token.end)
        return value

    def _repeat_count(self, token: Token) -> int:
        count = self._number(token)
        if count < 1:
            self._syntax("repeat count must be at least 1")
        return count

    def _check_order(self) -> None:
        start, end = self.instruction.start, self.instruction.end
        if isinstance(start, int) and isinstance(end, int) and end < start:
            self._syntax("range end precedes range start")

    def _expect(self, kind: TokenKind) -> Token:
        token = self.lexer.step()
        if token.kind is not kind:
            self._reject(token, expected=kind)
        return token

    def _reject(
        self, token: Token, *, expected: TokenKind | None = None
    ) -> NoReturn:
        if token.kind is TokenKind.ERROR:
            raise InternalError("lexer produced an error token")
        if expected is not None:
            self._syntax(f"expected {expected.name}, got {token.kind.name}")
        self._syntax(f"unexpected {token.kind.name}")

    def _syntax(self, detail: str) -> NoReturn:
        raise CommandSyntaxError(detail, position=self.lexer.position)


def parse_line(line: str) -> list[Instruction]:
    """Parse every statement of ``line`` up front; used by tests and tools."""

    parser = Parser(line)
    result: list[Instruction] = []
    while True:
        status = parser.parse()
        if not parser.instruction.is_empty:
            result.append(replace(parser.instruction))
        if status is ParseStatus.DONE:
            return result


__all__ = ["ParseStatus", "Parser", "parse_line"]
