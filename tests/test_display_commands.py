from __future__ import annotations

from typing import List, Sequence

from edlin_engine.actions import (
    RangeShape,
    ResolvedRange,
    SessionContext,
    execute,
    format_line,
)
from edlin_engine.actions.display import HELP_TEXT, list_window, page_window
from edlin_engine.buffer import Document, EditorState
from edlin_engine.host import ScriptedConsole
from edlin_engine.language import parse_line


def make_context(
    count: int = 30, *, inputs: Sequence[str] = (), cursor: int = 0
) -> SessionContext:
    context = SessionContext(
        document=Document.from_lines(f"line {n}" for n in range(1, count + 1)),
        state=EditorState(),
        console=ScriptedConsole(inputs),
    )
    context.state.set_cursor(cursor)
    return context


def run(context: SessionContext, line: str) -> None:
    for instruction in parse_line(line):
        execute(context, instruction)


def shown_lines(context: SessionContext) -> List[str]:
    return [chunk for chunk in context.console.output if chunk[8:9] == ":"]


def test_format_line_marks_cursor() -> None:
    context = make_context(cursor=1)

    assert format_line(context, 1, "text") == "       2:*text\n"
    assert format_line(context, 0, "text") == "       1: text\n"


def test_list_window_defaults() -> None:
    none = ResolvedRange(RangeShape.NONE)

    assert list_window(none, 0) == (0, 23)
    assert list_window(none, 20) == (9, 32)


def test_list_window_end_only() -> None:
    assert list_window(ResolvedRange(RangeShape.END_ONLY, end=20), 15) == (4, 20)
    assert list_window(ResolvedRange(RangeShape.END_ONLY, end=5), 30) == (5, 42)


def test_list_window_end_only_near_top_starts_at_end() -> None:
    assert list_window(ResolvedRange(RangeShape.END_ONLY, end=2), 5) == (2, 17)
    assert list_window(ResolvedRange(RangeShape.END_ONLY, end=8), 10) == (8, 22)
    assert list_window(ResolvedRange(RangeShape.END_ONLY, end=3), 11) == (0, 3)


def test_list_end_only_near_top_runs_past_cursor() -> None:
    context = make_context(cursor=4)

    run(context, ",3L")

    shown = shown_lines(context)
    assert shown[0] == "       3: line 3\n"
    assert shown[-1] == "      17: line 17\n"


def test_page_window_starts_after_cursor() -> None:
    none = ResolvedRange(RangeShape.NONE)

    assert page_window(none, 0) == (0, 22)
    assert page_window(none, 5) == (6, 28)
    assert page_window(ResolvedRange(RangeShape.END_ONLY, end=9), 5) == (6, 9)


def test_list_without_range_shows_one_window() -> None:
    context = make_context()

    run(context, "L")

    shown = shown_lines(context)
    assert len(shown) == 24
    assert shown[0] == "       1:*line 1\n"
    assert context.console.prompts == []
    assert context.state.cursor == 0


def test_list_pauses_and_stops_on_no() -> None:
    context = make_context(inputs=["N"])

    run(context, "1,30L")

    assert len(shown_lines(context)) == 24
    assert context.console.prompts == ["Continue (Y/N)? "]


def test_list_pauses_and_continues_on_yes() -> None:
    context = make_context(inputs=["Y"])

    run(context, "1,30L")

    assert len(shown_lines(context)) == 30


def test_list_clamps_to_document_end() -> None:
    context = make_context(5)

    run(context, "3,L")

    assert len(shown_lines(context)) == 3


def test_page_moves_cursor_to_last_line_shown() -> None:
    context = make_context()

    run(context, "P")
    assert context.state.cursor == 22

    run(context, "P")
    assert context.state.cursor == 29


def test_help_lists_every_command() -> None:
    context = make_context()

    run(context, "?")

    assert context.console.output == [HELP_TEXT]
    assert "Transfer" in HELP_TEXT
