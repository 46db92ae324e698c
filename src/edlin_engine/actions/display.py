"""Handlers that show lines or help text without editing anything."""

from __future__ import annotations

from typing import Tuple

from edlin_engine.config import LIST_LEAD, LIST_WINDOW, PAGE_BREAK, PAGE_WINDOW
from edlin_engine.language import Instruction

from .base import CommandResult, SessionContext, confirm, print_line
from .resolver import RangeShape, ResolvedRange

HELP_TEXT = (
    "Edit line                   line#\n"
    "Append                      [#lines]A\n"
    "Copy                        [startline],[endline],toline[,times]C\n"
    "Delete                      [startline][,endline]D\n"
    "Quit and save changes       E\n"
    "Insert                      [line]I\n"
    "List                        [startline][,endline]L\n"
    "Move                        [startline],[endline],tolineM\n"
    "Page                        [startline][,endline]P\n"
    "Quit and discard changes    Q\n"
    "Search and replace          [startline][,endline][?]Roldtext,newtext\n"
    "Search                      [startline][,endline][?]Stext\n"
    "Transfer                    [toline]Tfilename\n"
    "Write                       [#lines]W[filename]\n"
)


def list_window(resolved: ResolvedRange, cursor: int) -> Tuple[int, int]:
    """Inclusive window shown by ``L`` before clamping to the document.

    Without a range the window starts ``LIST_LEAD`` lines above the cursor.
    With only an end, an end close to or below the cursor keeps the default
    start. An end far above the cursor, or any end while the cursor is within
    ``LIST_LEAD`` lines of the top, starts there and runs past the cursor.
    """

    lead_start = 0 if cursor <= LIST_LEAD else cursor - LIST_LEAD
    shape = resolved.shape
    if shape is RangeShape.NONE:
        return lead_start, lead_start + LIST_WINDOW - 1
    start, end = resolved.bounds(lead_start, lead_start)
    if shape in (RangeShape.SINGLE, RangeShape.START_ONLY):
        return start, start + LIST_WINDOW - 1
    if shape is RangeShape.END_ONLY:
        if cursor >= LIST_LEAD and end >= cursor - LIST_LEAD:
            return lead_start, end
        return end, cursor + LIST_LEAD + 1
    return start, end


def page_window(resolved: ResolvedRange, cursor: int) -> Tuple[int, int]:
    """Inclusive window shown by ``P`` before clamping to the document."""

    after_cursor = 0 if cursor == 0 else cursor + 1
    shape = resolved.shape
    if shape is RangeShape.NONE:
        return after_cursor, after_cursor + PAGE_WINDOW - 1
    start, end = resolved.bounds(after_cursor, after_cursor)
    if shape in (RangeShape.SINGLE, RangeShape.START_ONLY):
        return start, start + PAGE_WINDOW - 1
    return start, end


def _show(
    context: SessionContext, start: int, end: int, *, move_cursor: bool
) -> int:
    end = min(end, context.line_count - 1)
    store = context.document.lines
    shown = 0
    since_pause = 0
    for index in range(start, end + 1):
        print_line(context, index, store.get(index))
        shown += 1
        since_pause += 1
        if move_cursor:
            context.state.set_cursor(index)
        if since_pause == PAGE_BREAK and index != end:
            if not confirm(context, "Continue"):
                break
            since_pause = 0
    return shown


def list_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    start, end = list_window(resolved, context.state.cursor)
    shown = _show(context, start, end, move_cursor=False)
    return CommandResult("listed", f"{shown} line(s)")


def page_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """Like list, but starts after the cursor and leaves it on the last line shown."""

    start, end = page_window(resolved, context.state.cursor)
    shown = _show(context, start, end, move_cursor=True)
    return CommandResult("paged", f"{shown} line(s)")


def show_help(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    context.console.write(HELP_TEXT)
    return CommandResult("help")


__all__ = [
    "HELP_TEXT",
    "list_lines",
    "list_window",
    "page_lines",
    "page_window",
    "show_help",
]
