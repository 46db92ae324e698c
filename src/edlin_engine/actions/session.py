"""Handlers that save the document or end the session."""

from __future__ import annotations

from edlin_engine.errors import InvalidArgumentError
from edlin_engine.language import Instruction

from .base import CommandResult, SessionContext, confirm
from .resolver import ResolvedRange


def _emit_saved(context: SessionContext, path: str, lines: int) -> None:
    context.bus.emit("document.saved", {"path": path, "lines": lines})


def write_document(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``[n]W["file"]``: save lines 1..n, or all, to the named or bound file.

    An explicit file name becomes the document's file name once the save
    succeeds.
    """

    if resolved.has_start_or_end:
        raise InvalidArgumentError("write does not take a start/end range")
    document = context.document
    stop = None if resolved.only is None else resolved.only + 1
    written = document.save(instruction.filename, stop=stop)
    if instruction.filename:
        document.rebind(instruction.filename)
    path = document.filename or ""
    _emit_saved(context, path, written)
    return CommandResult("written", f"{written} line(s) to {path}")


def end_session(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``E``: save everything to the bound file, then quit."""

    document = context.document
    if document.filename is None:
        raise InvalidArgumentError("document has no file name")
    written = document.save()
    _emit_saved(context, document.filename, written)
    context.state.quit = True
    return CommandResult("saved_and_quit", f"{written} line(s)")


def quit_session(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    """``Q``: leave without saving after an explicit yes."""

    if confirm(context, "Abort edit"):
        context.state.quit = True
        return CommandResult("quit")
    return CommandResult("quit_cancelled")


def no_operation(
    context: SessionContext, instruction: Instruction, resolved: ResolvedRange
) -> CommandResult:
    return CommandResult("noop")


__all__ = ["end_session", "no_operation", "quit_session", "write_document"]
