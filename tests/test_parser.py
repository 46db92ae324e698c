from __future__ import annotations

import pytest

from edlin_engine.errors import (
    CommandSyntaxError,
    NumberOverflowError,
    ParserStateError,
)
from edlin_engine.language import (
    THIS_LINE,
    Command,
    Instruction,
    ParseStatus,
    Parser,
    parse_line,
)


def make_instruction(line: str) -> Instruction:
    instructions = parse_line(line)
    assert len(instructions) == 1
    return instructions[0]


def test_copy_with_trailing_repeat() -> None:
    instruction = make_instruction("3,7,12C2")

    assert instruction.command is Command.COPY
    assert (instruction.start, instruction.end) == (2, 6)
    assert instruction.target == 11
    assert instruction.repeat == 2


def test_copy_with_repeat_before_command() -> None:
    instruction = make_instruction("3,7,12,2C")

    assert instruction.command is Command.COPY
    assert instruction.target == 11
    assert instruction.repeat == 2


def test_copy_target_after_command() -> None:
    instruction = make_instruction("3,7C12")

    assert instruction.target == 11
    assert instruction.repeat == 1


def test_zero_repeat_is_syntax_error() -> None:
    with pytest.raises(CommandSyntaxError):
        parse_line("1,2,3,0C")


def test_move_target_after_command() -> None:
    instruction = make_instruction("12M20")

    assert instruction.command is Command.MOVE
    assert instruction.only == 11
    assert instruction.target == 19


def test_move_with_explicit_block() -> None:
    instruction = make_instruction("1,2,9M")

    assert instruction.command is Command.MOVE
    assert (instruction.start, instruction.end, instruction.target) == (0, 1, 8)


def test_search_on_current_line() -> None:
    instruction = make_instruction('.S"foo"')

    assert instruction.command is Command.SEARCH
    assert instruction.only is THIS_LINE
    assert instruction.search == "foo"
    assert instruction.ask is False


def test_search_without_text_keeps_search_unset() -> None:
    instruction = make_instruction("?S")

    assert instruction.command is Command.SEARCH
    assert instruction.ask is True
    assert instruction.search is None


def test_replace_with_strings() -> None:
    instruction = make_instruction('1,5R"a","b"')

    assert instruction.command is Command.REPLACE
    assert (instruction.start, instruction.end) == (0, 4)
    assert (instruction.search, instruction.replace) == ("a", "b")


def test_interactive_replace_with_bare_words() -> None:
    instruction = make_instruction("?Rold,new")

    assert instruction.command is Command.REPLACE
    assert instruction.ask is True
    assert (instruction.search, instruction.replace) == ("old", "new")


def test_replace_with_empty_search_and_replacement() -> None:
    instruction = make_instruction("R,")

    assert instruction.search == ""
    assert instruction.replace == ""


def test_bare_number_is_edit() -> None:
    instruction = make_instruction("7")

    assert instruction.command is Command.EDIT
    assert instruction.only == 6


def test_end_only_range() -> None:
    instruction = make_instruction(",5L")

    assert instruction.command is Command.LIST
    assert instruction.start is None
    assert instruction.end == 4


def test_start_only_range() -> None:
    instruction = make_instruction("3,D")

    assert instruction.command is Command.DELETE
    assert instruction.start == 2
    assert instruction.end is None


def test_current_line_as_range_end() -> None:
    instruction = make_instruction(",.L")

    assert instruction.end is THIS_LINE


def test_transfer_and_write_file_names() -> None:
    transfer = make_instruction('4T"other.txt"')
    write = make_instruction('10W"out.txt"')
    bare_write = make_instruction("W")

    assert transfer.command is Command.TRANSFER
    assert transfer.only == 3
    assert transfer.filename == "other.txt"
    assert write.only == 9
    assert write.filename == "out.txt"
    assert bare_write.filename is None


def test_transfer_requires_string() -> None:
    with pytest.raises(CommandSyntaxError):
        parse_line("Tfile")


def test_standalone_commands() -> None:
    assert make_instruction("E").command is Command.END
    assert make_instruction("q").command is Command.QUIT
    assert make_instruction("?").command is Command.ASK


def test_semicolons_separate_statements() -> None:
    instructions = parse_line("1D;;2,3L")

    assert [item.command for item in instructions] == [Command.DELETE, Command.LIST]
    assert instructions[1].start == 1


def test_leading_semicolon_does_not_swallow_next_statement() -> None:
    parser = Parser(";5D")

    assert parser.parse() is ParseStatus.MORE
    assert parser.instruction.is_empty
    assert parser.parse() is ParseStatus.DONE
    assert parser.instruction.command is Command.DELETE
    assert parser.instruction.only == 4


def test_empty_line_is_done_and_empty() -> None:
    parser = Parser("   ")

    assert parser.parse() is ParseStatus.DONE
    assert parser.instruction.is_empty


def test_number_overflow_reports_position() -> None:
    with pytest.raises(NumberOverflowError) as info:
        parse_line("99999999999D")

    assert info.value.position == 11


def test_reversed_range_is_syntax_error() -> None:
    with pytest.raises(CommandSyntaxError):
        parse_line("5,3D")


def test_garbage_after_statement_is_syntax_error() -> None:
    with pytest.raises(CommandSyntaxError) as info:
        parse_line("5D#")

    assert info.value.position == 3


def test_unknown_word_is_syntax_error() -> None:
    with pytest.raises(CommandSyntaxError):
        parse_line("5Xyz")


def test_instruction_fields_cannot_be_set_twice() -> None:
    instruction = Instruction()
    instruction.set_command(Command.LIST)
    instruction.set_target(3)
    instruction.set_repeat(2)

    with pytest.raises(ParserStateError) as info:
        instruction.set_command(Command.DELETE)
    assert info.value.field == "command"
    with pytest.raises(ParserStateError):
        instruction.set_target(4)
    with pytest.raises(ParserStateError):
        instruction.set_repeat(3)


def test_only_conflicts_with_start() -> None:
    instruction = Instruction()
    instruction.set_start(1)

    with pytest.raises(ParserStateError):
        instruction.set_only(2)


def test_reset_clears_repeat_guard() -> None:
    instruction = Instruction()
    instruction.set_repeat(4)

    instruction.reset()

    assert instruction.repeat == 1
    instruction.set_repeat(2)
    assert instruction.repeat == 2
