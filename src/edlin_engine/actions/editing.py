"""Handlers that change the document's lines."""

from __future__ import annotations

from typing import Tuple

from edlin_engine.buffer import read_lines
from edlin_engine.errors import (
    CommandSyntaxError,
    InvalidArgumentError,
    LineRangeError,
)
from edlin_engine.language import Instruction

from .base import CommandResult, SessionContext, print_line, read_text
from .resolver import RangeShape, ResolvedRange


def _reject_start_end(resolved: ResolvedRange, command: str) -> None:
    if resolved.has_start_or_end:
        raise InvalidArgumentError(f"{command} does not take a start/end range")


def _block_bounds(context: SessionContext, resolved: ResolvedRange) -> Tuple[int, int]:
    """Source block for copy and move; missing ends default to the cursor."""

    cursor = context.state.cursor
    start, end = resolved.bounds(cursor, cursor)
    count = context.line_count
    if start > end:
        raise LineRangeError(f"block start {start + 1} is after end {end + 1}")
    if start < 0 or end >= count:
        raise LineRangeError(f"block {start + 1}..{end + 1} outside 1..{count}")
    return start, end


def append_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[n]A``: read lines from the user and add them at the end."""

    _reject_start_end(resolved, "append")
    if "only" in resolved.from_cursor:
        raise InvalidArgumentError("append count cannot be the current line")
    remaining = None if resolved.only is None else resolved.only + 1

    store = context.document.lines
    added = 0
    while remaining is None or added < remaining:
        text = read_text(context, len(store) + 1)
        if text is None:
            break
        store.append(text)
        added += 1
    return CommandResult("appended", f"{added} line(s)")


def copy_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[start],[end],target[,times]C``: duplicate a block before ``target``."""

    if resolved.target is None:
        raise CommandSyntaxError("copy needs a target line")
    start, end = _block_bounds(context, resolved)
    target = resolved.target
    if start < target <= end:
        raise LineRangeError(f"copy target {target + 1} is inside {start + 1}..{end + 1}")

    store = context.document.lines
    target = min(target, len(store))
    block = list(store.slice(start, end + 1))
    inserted = store.insert_many(target, block * instruction.repeat)
    context.state.set_cursor(target)
    return CommandResult("copied", f"{inserted} line(s)")


def delete_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[start][,end]D``: remove lines; the cursor lands after the gap."""

    cursor = context.state.cursor
    last = context.line_count - 1
    if resolved.shape is RangeShape.NONE:
        start = end = cursor
    else:
        start, end = resolved.bounds(0, last)

    removed = context.document.lines.delete(start, end)
    context.state.set_cursor(start)
    context.state.clamp_cursor(context.line_count)
    return CommandResult("deleted", f"{removed} line(s)")


def edit_line(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``line#``: show one line and offer to replace it."""

    index = resolved.only
    if index is None or resolved.shape is not RangeShape.SINGLE:
        raise CommandSyntaxError("a range needs a command")
    if index < 0 or index >= context.line_count:
        return CommandResult("ignored")

    store = context.document.lines
    context.state.set_cursor(index)
    context.console.write(f"{index + 1:>8}:*{store.get(index)}\n")
    text = read_text(context, index + 1)
    if not text:
        return CommandResult("unchanged")
    store.set(index, text)
    return CommandResult("edited", f"line {index + 1}")


def insert_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[line]I``: read lines and insert them before ``line``."""

    _reject_start_end(resolved, "insert")
    store = context.document.lines
    position = context.state.cursor if resolved.only is None else resolved.only
    position = min(position, len(store))
    inserted = 0
    while True:
        text = read_text(context, position + inserted + 1)
        if text is None:
            break
        store.insert(position + inserted, text)
        inserted += 1
    context.state.set_cursor(position + inserted)
    context.state.clamp_cursor(context.line_count)
    return CommandResult("inserted", f"{inserted} line(s)")


def move_lines(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[start],[end],targetM``: relocate a block before ``target``."""

    if resolved.target is None:
        raise CommandSyntaxError("move needs a target line")
    start, end = _block_bounds(context, resolved)
    target = resolved.target
    if start <= target <= end:
        raise LineRangeError(f"move target {target + 1} is inside {start + 1}..{end + 1}")
    if target > end:
        target -= end - start + 1

    landed = context.document.lines.move(start, end, target)
    context.state.set_cursor(landed)
    return CommandResult("moved", f"{end - start + 1} line(s)")


def transfer_file(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[line]T"file"``: insert another file's lines before ``line``."""

    _reject_start_end(resolved, "transfer")
    if not instruction.filename:
        raise CommandSyntaxError("transfer needs a file name")
    position = context.state.cursor if resolved.only is None else resolved.only
    lines = read_lines(
        instruction.filename,
        encoding=context.config.encoding,
        ignore_eof=context.config.ignore_eof,
    )
    inserted = context.document.lines.insert_many(position, lines)
    return CommandResult("transferred", f"{inserted} line(s)")


__all__ = [
    "append_lines",
    "copy_lines",
    "delete_lines",
    "edit_line",
    "insert_lines",
    "move_lines",
    "transfer_file",
]
