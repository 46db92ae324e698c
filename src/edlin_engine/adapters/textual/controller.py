"""Textual adapter that runs the editor loop against UI callbacks."""

from __future__ import annotations

import queue
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from edlin_engine.buffer import Document
from edlin_engine.config import EditorConfig
from edlin_engine.repl import Editor


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    append_output: Callable[[str], None]
    append_error: Callable[[str], None] = _noop
    show_prompt: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    session_ended: Callable[[int], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualConsole:
    """Console whose input arrives from the UI thread through a queue.

    ``read_line`` blocks the editor thread until :meth:`submit` or
    :meth:`close` is called. After ``close`` every read returns ``None``.
    """

    def __init__(self, hooks: TextualUIHooks) -> None:
        self._hooks = hooks
        self._answers: "queue.Queue[Optional[str]]" = queue.Queue()
        self._closed = False

    def submit(self, text: str) -> None:
        self._answers.put(text)

    def close(self) -> None:
        self._closed = True
        self._answers.put(None)

    @property
    def closed(self) -> bool:
        return self._closed

    def read_line(self, prompt: str) -> Optional[str]:
        if self._closed and self._answers.empty():
            return None
        self._hooks.show_prompt(prompt)
        answer = self._answers.get()
        if answer is None:
            return None
        self._hooks.append_output(f"{prompt}{answer}\n")
        return answer

    def read_key(self, prompt: str) -> Optional[str]:
        answer = self.read_line(prompt)
        return None if answer is None else answer.strip()[:1]

    def write(self, text: str) -> None:
        self._hooks.append_output(text)

    def write_error(self, text: str) -> None:
        self._hooks.append_error(text)


class TextualEdlinAdapter:
    """Bridges the editor + bus events to a Textual-friendly surface."""

    def __init__(
        self,
        document: Document,
        hooks: TextualUIHooks,
        *,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.hooks = hooks
        self.console = TextualConsole(hooks)
        self.editor = Editor(document, self.console, config=config)
        self._subscribe_events()
        self._refresh_status()

    def submit(self, text: str) -> None:
        """Hand one line typed in the UI to the waiting editor."""

        self._log_state("input ->", text=text)
        self.console.submit(text)

    def close(self) -> None:
        self.console.close()

    def run(self) -> int:
        """Run the editor loop; blocks, so hosts call it from a worker thread."""

        code = self.editor.run()
        self._log_state("session <-", code=code)
        self.hooks.session_ended(code)
        return code

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in (
            "command.executed",
            "command.error",
            "document.saved",
            "repl.quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        self._refresh_status()

    def _refresh_status(self) -> None:
        self.hooks.update_status(self.status_text())

    def status_text(self) -> str:
        document = self.editor.document
        state = self.editor.state
        name = document.filename or "[no file]"
        flags = " [read-only]" if document.read_only else ""
        return f"{name}{flags}  line {state.cursor + 1} of {document.line_count}"

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.editor.state
        return {
            "cursor": state.cursor,
            "lines": self.editor.document.line_count,
            "quit": state.quit,
            "search": state.search_str,
        }


__all__ = ["TextualConsole", "TextualEdlinAdapter", "TextualUIHooks"]
