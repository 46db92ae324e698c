"""Command-line lexer with a single-slot rewind."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterator, Optional

from edlin_engine.config import EOF_CHARACTERS
from edlin_engine.errors import CommandSyntaxError, LexerStateError

from .tokens import COMMAND_KEYWORDS, Token, TokenKind

_WHITESPACE = frozenset(" \t\n\r\f\v")
_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_ALNUM = _LETTERS | _DIGITS
_DELIMITERS = {",": TokenKind.COMMA, ";": TokenKind.SEMICOLON}
_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "?": "?",
}


@dataclass(frozen=True, slots=True)
class _Snapshot:
    position: int
    token: Token


class Lexer:
    """Turns one command line into tokens, one ``step`` at a time.

    Before every step the previous scan position and token are saved, so the
    parser can put back exactly one token with :meth:`rewind`.
    """

    def __init__(self, line: str) -> None:
        self._line = line
        self._position = 0
        self._token = Token(TokenKind.INVALID)
        self._previous: Optional[_Snapshot] = None

    @property
    def line(self) -> str:
        return self._line

    @property
    def token(self) -> Token:
        return self._token

    @property
    def kind(self) -> TokenKind:
        return self._token.kind

    @property
    def lexeme(self) -> str:
        return self._token.lexeme

    @property
    def position(self) -> int:
        """Scan position just past the current token."""

        return self._position

    def step(self) -> Token:
        self._previous = _Snapshot(self._position, self._token)
        self._token = self._scan(self._position)
        self._position = self._token.end
        return self._token

    def rewind(self) -> None:
        """Restore the state saved by the last :meth:`step`.

        Only one level is kept; rewinding twice in a row, or before any step,
        raises :class:`LexerStateError`.
        """

        if self._previous is None:
            raise LexerStateError("no previous lexer state to rewind to")
        self._position = self._previous.position
        self._token = self._previous.token
        self._previous = None

    def expect(self, kind: TokenKind) -> Token:
        token = self.step()
        if token.kind is not kind:
            raise CommandSyntaxError(
                f"expected {kind.name}, got {token.kind.name}", position=self._position
            )
        return token

    def peek_next_nonspace(self) -> str:
        """Next non-whitespace character after the scan position, or ``""``."""

        pos = self._position
        while pos < len(self._line) and self._line[pos] in _WHITESPACE:
            pos += 1
        return self._line[pos] if pos < len(self._line) else ""

    def tokens(self) -> Iterator[Token]:
        """Step through the rest of the line, ending with EOL or EOF."""

        while True:
            token = self.step()
            yield token
            if token.kind in (TokenKind.EOL, TokenKind.EOF):
                return

    # Scanner -----------------------------------------------------------

    def _scan(self, pos: int) -> Token:
        line = self._line
        size = len(line)
        while pos < size and line[pos] in _WHITESPACE:
            pos += 1
        if pos >= size:
            return Token(TokenKind.EOL, "", pos, pos)

        char = line[pos]
        if char in EOF_CHARACTERS:
            return Token(TokenKind.EOF, "", pos, pos + 1)
        if char in _DIGITS:
            end = self._run(pos, _DIGITS)
            return Token(TokenKind.NUMBER, line[pos:end], pos, end)
        if char == "?":
            return self._scan_ask(pos)
        if char == ".":
            return Token(TokenKind.THIS_LINE, ".", pos, pos + 1)
        if char in _LETTERS:
            return self._scan_word(pos)
        if char in _DELIMITERS:
            return Token(_DELIMITERS[char], char, pos, pos + 1)
        if char == '"':
            return self._scan_string(pos)
        return Token(TokenKind.INVALID, char, pos, pos + 1)

    def _run(self, pos: int, allowed: frozenset[str]) -> int:
        while pos < len(self._line) and self._line[pos] in allowed:
            pos += 1
        return pos

    def _scan_word(self, pos: int) -> Token:
        line = self._line
        keyword = COMMAND_KEYWORDS.get(line[pos].upper())
        follows_letter = pos + 1 < len(line) and line[pos + 1] in _LETTERS
        if keyword is not None and not follows_letter:
            return Token(keyword, line[pos], pos, pos + 1)
        end = self._run(pos + 1, _ALNUM)
        return Token(TokenKind.TEXT, line[pos:end], pos, end)

    def _scan_ask(self, pos: int) -> Token:
        line = self._line
        nxt = line[pos + 1] if pos + 1 < len(line) else ""
        keyword = COMMAND_KEYWORDS.get(f"?{nxt.upper()}") if nxt else None
        if keyword is not None:
            return Token(keyword, line[pos : pos + 2], pos, pos + 2)
        if not nxt or nxt in _WHITESPACE or nxt == ";" or nxt in EOF_CHARACTERS:
            return Token(TokenKind.KW_ASK, "?", pos, pos + 1)
        return Token(TokenKind.INVALID, line[pos : pos + 2], pos, pos + 2)

    def _scan_string(self, pos: int) -> Token:
        line = self._line
        chars: list[str] = []
        index = pos + 1
        while index < len(line):
            char = line[index]
            if char == '"':
                return Token(TokenKind.STRING, "".join(chars), pos, index + 1)
            if char == "\\":
                if index + 1 >= len(line):
                    break
                escaped = line[index + 1]
                chars.append(_ESCAPES.get(escaped, "\\" + escaped))
                index += 2
                continue
            chars.append(char)
            index += 1
        return Token(TokenKind.INVALID, line[pos:], pos, len(line))


__all__ = ["Lexer"]
