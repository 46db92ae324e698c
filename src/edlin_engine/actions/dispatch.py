"""Maps every command kind to its handler and runs instructions."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from edlin_engine.errors import AllocationError
from edlin_engine.language import Command, Instruction
from edlin_engine.runtime import telemetry

from .base import CommandResult, SessionContext
from .display import list_lines, page_lines, show_help
from .editing import (
    append_lines,
    copy_lines,
    delete_lines,
    edit_line,
    insert_lines,
    move_lines,
    transfer_file,
)
from .resolver import ResolvedRange, resolve_range
from .search import replace_lines, search_lines
from .session import end_session, no_operation, quit_session, write_document

CommandHandler = Callable[[SessionContext, Instruction, ResolvedRange], CommandResult]


_COMMAND_HANDLERS: Mapping[Command, CommandHandler] = MappingProxyType(
    {
        Command.APPEND: append_lines,
        Command.ASK: show_help,
        Command.COPY: copy_lines,
        Command.DELETE: delete_lines,
        Command.EDIT: edit_line,
        Command.END: end_session,
        Command.INSERT: insert_lines,
        Command.LIST: list_lines,
        Command.MOVE: move_lines,
        Command.PAGE: page_lines,
        Command.QUIT: quit_session,
        Command.REPLACE: replace_lines,
        Command.SEARCH: search_lines,
        Command.TRANSFER: transfer_file,
        Command.WRITE: write_document,
        Command.NONE: no_operation,
    }
)


def handler_for(command: Command) -> CommandHandler:
    return _COMMAND_HANDLERS[command]


def execute(context: SessionContext, instruction: Instruction) -> CommandResult:
    """Resolve ``instruction`` against the cursor and run its handler.

    Handler failures propagate as :class:`~edlin_engine.errors.EdlinError`;
    running out of memory is reported as an allocation error.
    """

    name = instruction.command.value
    handler = handler_for(instruction.command)
    with telemetry.span(
        f"command::{name}",
        component="executor",
        metadata={"cursor": context.state.cursor},
    ) as span:
        resolved = resolve_range(instruction, context.state.cursor)
        span.add_metadata("shape", resolved.shape.value)
        try:
            result = handler(context, instruction, resolved)
        except MemoryError as exc:
            raise AllocationError(f"out of memory while running {name}") from exc
    context.bus.emit(
        "command.executed",
        {
            "command": name,
            "status": result.status,
            "message": result.message,
            "cursor": context.state.cursor,
        },
    )
    return result


__all__ = ["CommandHandler", "execute", "handler_for"]
