"""Lexer, parser and instruction model of the editing language."""

from .instruction import THIS_LINE, Address, Command, Instruction, Marker, to_index
from .lexer import Lexer
from .parser import ParseStatus, Parser, parse_line
from .tokens import COMMAND_KEYWORDS, Token, TokenKind

__all__ = [
    "Address",
    "COMMAND_KEYWORDS",
    "Command",
    "Instruction",
    "Lexer",
    "Marker",
    "ParseStatus",
    "Parser",
    "THIS_LINE",
    "Token",
    "TokenKind",
    "parse_line",
    "to_index",
]
