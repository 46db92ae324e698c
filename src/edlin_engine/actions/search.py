"""Search and search-and-replace handlers."""

from __future__ import annotations

from typing import Tuple

from edlin_engine.errors import CommandSyntaxError, SearchNotFoundError
from edlin_engine.language import Instruction

from .base import CommandResult, SessionContext, confirm, print_line
from .resolver import RangeShape, ResolvedRange


def scan_window(
    resolved: ResolvedRange, cursor: int, line_count: int
) -> Tuple[int, int]:
    """Inclusive lines scanned by ``S`` and ``R``, clamped to the document.

    The default range runs from the line after the cursor to the end. A single
    address scans from that line to the end, a start alone scans just that
    line, and an end written as ``.`` means the line after the cursor.
    """

    last = line_count - 1
    shape = resolved.shape
    if shape is RangeShape.NONE:
        return cursor + 1, last
    start, end = resolved.bounds(cursor + 1, cursor + 1)
    if shape is RangeShape.SINGLE:
        return start, last
    if shape is RangeShape.START_ONLY:
        end = start
    elif "end" in resolved.from_cursor:
        if shape is RangeShape.END_ONLY:
            raise CommandSyntaxError("a '.' end needs a start line")
        end = cursor + 1
    return start, min(end, last)


def _pattern(context: SessionContext, instruction: Instruction) -> str:
    pattern = context.state.remember_search(instruction.search)
    if not pattern:
        raise SearchNotFoundError("no search string given and none remembered")
    return pattern


def search_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[range][?]S[text]``: move the cursor to the next matching line."""

    pattern = _pattern(context, instruction)
    start, end = scan_window(resolved, context.state.cursor, context.line_count)
    store = context.document.lines
    for index in range(start, end + 1):
        line = store.get(index)
        if pattern not in line:
            continue
        context.state.set_cursor(index)
        print_line(context, index, line)
        if not instruction.ask or confirm(context, "O.K."):
            return CommandResult("found", f"line {index + 1}")
    raise SearchNotFoundError(f"'{pattern}' not found")


def replace_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[range][?]Rold,new``: substitute every occurrence in the range.

    Matches are found left to right without overlapping; text produced by a
    substitution is never searched again. In interactive mode each candidate
    line is shown and applied only after a yes.
    """

    replacement = instruction.replace
    if not replacement:
        raise CommandSyntaxError("replace needs a non-empty replacement")
    pattern = _pattern(context, instruction)

    start, end = scan_window(resolved, context.state.cursor, context.line_count)
    store = context.document.lines
    replaced = 0
    for index in range(start, end + 1):
        line = store.get(index)
        position = 0
        changed = False
        while True:
            found = line.find(pattern, position)
            if found < 0:
                break
            edited = line[:found] + replacement + line[found + len(pattern) :]
            print_line(context, index, edited)
            if instruction.ask and not confirm(context, "O.K."):
                position = found + len(pattern)
                continue
            line = edited
            position = found + len(replacement)
            changed = True
            replaced += 1
        if changed:
            store.set(index, line)
            context.state.set_cursor(index)

    if not replaced:
        raise SearchNotFoundError(f"'{pattern}' not found")
    return CommandResult("replaced", f"{replaced} occurrence(s)")


__all__ = ["replace_lines", "scan_window", "search_lines"]
