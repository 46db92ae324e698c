"""Read-eval-print loop tying the parser to the command executor."""

from __future__ import annotations

from typing import Optional

from edlin_engine.actions import EventBus, SessionContext, execute
from edlin_engine.buffer import Document, EditorState
from edlin_engine.config import EditorConfig
from edlin_engine.errors import AllocationError, EdlinError, format_error
from edlin_engine.host import Console
from edlin_engine.language import ParseStatus, Parser
from edlin_engine.runtime import telemetry


class Editor:
    """Owns one editing session: document, state and console.

    :meth:`run` reads command lines until a quit command or the end of the
    input stream. A parse error drops the rest of its line; an execution
    error only drops the failing statement.
    """

    def __init__(
        self,
        document: Document,
        console: Console,
        *,
        config: Optional[EditorConfig] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        config = config or EditorConfig()
        self.context = SessionContext(
            document=document,
            state=EditorState.from_config(config),
            console=console,
            bus=bus or EventBus(),
            config=config,
        )

    @property
    def document(self) -> Document:
        return self.context.document

    @property
    def state(self) -> EditorState:
        return self.context.state

    @property
    def console(self) -> Console:
        return self.context.console

    @property
    def bus(self) -> EventBus:
        return self.context.bus

    def run(self) -> int:
        lines = 0
        while not self.state.quit:
            line = self.console.read_line(self.state.prompt)
            if line is None:
                break
            lines += 1
            self.run_line(line)
        payload = {"lines": lines, "saved_quit": self.state.quit}
        telemetry.record_event("repl.quit", data=payload)
        self.bus.emit("repl.quit", payload)
        return 0

    def run_line(self, line: str) -> None:
        parser = Parser(line)
        with telemetry.span("repl::line", component="repl", metadata={"line": line}):
            while not self.state.quit:
                try:
                    status = parser.parse()
                except MemoryError:
                    self.report(AllocationError("out of memory while parsing"))
                    return
                except EdlinError as exc:
                    self.report(exc)
                    return

                if not parser.instruction.is_empty:
                    try:
                        execute(self.context, parser.instruction)
                    except EdlinError as exc:
                        self.report(exc)

                if status is ParseStatus.DONE:
                    return

    def report(self, error: EdlinError) -> None:
        """Show ``error`` as a one-line message, with a caret when it has a column."""

        position = getattr(error, "position", None)
        if position is not None:
            column = max(len(self.state.prompt) + position - 1, 0)
            self.console.write(" " * column + "^\n")
        self.console.write_error(format_error(error) + "\n")
        payload = {"kind": error.kind.name, "detail": str(error)}
        telemetry.record_event("command.error", level="warning", data=payload)
        self.bus.emit("command.error", payload)


def run_session(
    document: Document,
    console: Console,
    *,
    config: Optional[EditorConfig] = None,
    bus: Optional[EventBus] = None,
) -> int:
    return Editor(document, console, config=config, bus=bus).run()


__all__ = ["Editor", "run_session"]
