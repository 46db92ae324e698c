from __future__ import annotations

from typing import List, Tuple

import pytest

from edlin_engine.errors import CommandSyntaxError, LexerStateError
from edlin_engine.language import Lexer, TokenKind


def make_tokens(line: str) -> List[Tuple[TokenKind, str]]:
    return [(token.kind, token.lexeme) for token in Lexer(line).tokens()]


def test_range_and_command() -> None:
    assert make_tokens("5,10D") == [
        (TokenKind.NUMBER, "5"),
        (TokenKind.COMMA, ","),
        (TokenKind.NUMBER, "10"),
        (TokenKind.KW_DELETE, "D"),
        (TokenKind.EOL, ""),
    ]


def test_command_letters_are_case_insensitive() -> None:
    kinds = [kind for kind, _ in make_tokens("a c d e i l m p q r s t w")]

    assert kinds[:-1] == [
        TokenKind.KW_APPEND,
        TokenKind.KW_COPY,
        TokenKind.KW_DELETE,
        TokenKind.KW_END,
        TokenKind.KW_INSERT,
        TokenKind.KW_LIST,
        TokenKind.KW_MOVE,
        TokenKind.KW_PAGE,
        TokenKind.KW_QUIT,
        TokenKind.KW_REPLACE,
        TokenKind.KW_SEARCH,
        TokenKind.KW_TRANSFER,
        TokenKind.KW_WRITE,
    ]


def test_command_letter_followed_by_letters_is_text() -> None:
    assert make_tokens("Replace") == [(TokenKind.TEXT, "Replace"), (TokenKind.EOL, "")]
    assert make_tokens("x1y") == [(TokenKind.TEXT, "x1y"), (TokenKind.EOL, "")]


def test_digit_after_command_letter_starts_a_number() -> None:
    assert make_tokens("C2") == [
        (TokenKind.KW_COPY, "C"),
        (TokenKind.NUMBER, "2"),
        (TokenKind.EOL, ""),
    ]


def test_ask_keywords() -> None:
    assert make_tokens("?R")[0] == (TokenKind.KW_ASK_REPLACE, "?R")
    assert make_tokens("?s")[0] == (TokenKind.KW_ASK_SEARCH, "?s")
    assert make_tokens("?")[0] == (TokenKind.KW_ASK, "?")
    assert make_tokens("? ;")[0] == (TokenKind.KW_ASK, "?")
    assert make_tokens("?x")[0][0] is TokenKind.INVALID


def test_string_escapes() -> None:
    kinds = make_tokens(r'"a\tb\"c\\d\?"')

    assert kinds[0] == (TokenKind.STRING, 'a\tb"c\\d?')


def test_unknown_escape_keeps_backslash() -> None:
    assert make_tokens(r'"a\qb"')[0] == (TokenKind.STRING, "a\\qb")


def test_unterminated_string_is_invalid() -> None:
    assert make_tokens('"abc')[0][0] is TokenKind.INVALID


def test_this_line_and_delimiters() -> None:
    assert make_tokens(".;,") == [
        (TokenKind.THIS_LINE, "."),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.COMMA, ","),
        (TokenKind.EOL, ""),
    ]


def test_ctrl_z_is_end_of_file() -> None:
    assert make_tokens("1\x1a2") == [(TokenKind.NUMBER, "1"), (TokenKind.EOF, "")]


def test_other_characters_are_invalid() -> None:
    assert make_tokens("#")[0] == (TokenKind.INVALID, "#")


def test_rewind_restores_previous_token_once() -> None:
    lexer = Lexer("12 D")
    first = lexer.step()
    second = lexer.step()

    lexer.rewind()

    assert lexer.token == first
    assert lexer.step() == second
    lexer.rewind()
    with pytest.raises(LexerStateError):
        lexer.rewind()


def test_rewind_without_step_raises() -> None:
    with pytest.raises(LexerStateError):
        Lexer("1").rewind()


def test_peek_next_nonspace() -> None:
    lexer = Lexer("3   ,5")
    lexer.step()

    assert lexer.peek_next_nonspace() == ","
    assert lexer.step().kind is TokenKind.COMMA
    lexer.step()
    assert lexer.peek_next_nonspace() == ""


def test_expect_raises_syntax_error_with_position() -> None:
    lexer = Lexer("5D")

    with pytest.raises(CommandSyntaxError) as info:
        lexer.expect(TokenKind.COMMA)

    assert info.value.position == 1
