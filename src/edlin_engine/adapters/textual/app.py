"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import sys
import threading
from typing import Any, Callable, Optional, Sequence

try:  # pragma: no cover - imported only when the front end is run
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Input, RichLog, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use edlin_engine.adapters.textual.app"
    ) from exc

from edlin_engine.buffer import Document
from edlin_engine.config import EditorConfig

from .controller import TextualEdlinAdapter, TextualUIHooks


class EdlinApp(App[int]):
    """Output log, command input and status line around one editing session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#output {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-input {
		height: 3;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        document: Document,
        *,
        config: Optional[EditorConfig] = None,
        created: bool = False,
    ) -> None:
        super().__init__()
        self._document = document
        self._config = config or EditorConfig()
        self._created = created
        self.adapter: TextualEdlinAdapter | None = None
        self._output_widget: RichLog | None = None
        self._status_widget: Static | None = None
        self._input_widget: Input | None = None
        self._ui_thread: int | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._output_widget = RichLog(id="output", wrap=False, markup=False)
        yield self._output_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        self._input_widget = Input(placeholder=self._config.prompt, id="command-input")
        yield self._input_widget
        yield Footer()

    def on_mount(self) -> None:
        self._ui_thread = threading.get_ident()
        hooks = TextualUIHooks(
            append_output=lambda text: self._on_ui(self._append_output, text),
            append_error=lambda text: self._on_ui(self._append_output, text),
            show_prompt=lambda prompt: self._on_ui(self._show_prompt, prompt),
            update_status=lambda text: self._on_ui(self._update_status, text),
            session_ended=lambda code: self._on_ui(self.exit, code),
        )
        self.adapter = TextualEdlinAdapter(self._document, hooks, config=self._config)
        if self._created:
            self._append_output("New file\n")
        self.run_worker(self.adapter.run, name="edlin-repl", thread=True, exclusive=True)
        if self._input_widget:
            self._input_widget.focus()

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        self.adapter.submit(event.value)
        event.input.value = ""
        event.stop()

    def action_quit(self) -> None:  # type: ignore[override]
        if self.adapter:
            self.adapter.close()
        self.exit(0)

    def _on_ui(self, callback: Callable[..., Any], *args: Any) -> None:
        if threading.get_ident() == self._ui_thread:
            callback(*args)
        else:
            self.call_from_thread(callback, *args)

    def _append_output(self, text: str) -> None:
        if self._output_widget:
            for line in text.splitlines():
                self._output_widget.write(line)

    def _show_prompt(self, prompt: str) -> None:
        if self._input_widget:
            self._input_widget.placeholder = prompt.strip() or self._config.prompt

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def run_app(
    document: Document,
    *,
    config: Optional[EditorConfig] = None,
    created: bool = False,
) -> int:
    app = EdlinApp(document, config=config, created=created)
    result = app.run()
    return int(result or 0)


def main(argv: Optional[Sequence[str]] = None) -> int:
    from edlin_engine.cli import main as cli_main

    args = list(sys.argv[1:] if argv is None else argv)
    return cli_main(["--textual", *args])


if __name__ == "__main__":  # pragma: no cover - manual demo
    raise SystemExit(main())
