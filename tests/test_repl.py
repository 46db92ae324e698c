from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from edlin_engine.buffer import Document
from edlin_engine.config import EditorConfig
from edlin_engine.host import ScriptedConsole
from edlin_engine.repl import Editor, run_session


def make_editor(
    inputs: Sequence[str],
    *,
    lines: Sequence[str] = ("a", "b", "c"),
    filename: Optional[str] = None,
    config: Optional[EditorConfig] = None,
) -> Editor:
    document = Document.from_lines(lines, filename=filename)
    return Editor(document, ScriptedConsole(inputs), config=config)


def test_session_runs_until_input_ends() -> None:
    editor = make_editor(["2D", "1,2L"])

    code = editor.run()

    assert code == 0
    assert editor.document.snapshot() == ("a", "c")
    assert "       2:*c\n" in editor.console.output
    assert editor.console.prompts == ["*", "*", "*"]


def test_statements_share_one_line() -> None:
    editor = make_editor(["1D;1D"])

    editor.run()

    assert editor.document.snapshot() == ("c",)


def test_syntax_error_prints_caret_and_drops_line() -> None:
    editor = make_editor(["1D#;2D", "L"])

    editor.run()

    assert editor.document.snapshot() == ("a", "b", "c")
    assert "   ^\n" in editor.console.output
    assert editor.console.error_text == "edlin: Syntax error.\n"


def test_execution_error_skips_only_that_statement() -> None:
    editor = make_editor(["9,9,1C;3D"])

    editor.run()

    assert editor.document.snapshot() == ("a", "b")
    assert editor.console.error_text == "edlin: Invalid range.\n"


def test_errors_are_published_on_the_bus() -> None:
    editor = make_editor(['S"zzz"'])
    errors: List[object] = []
    editor.bus.subscribe("command.error", errors.append)

    editor.run()

    assert errors == [{"kind": "NOT_FOUND", "detail": "'zzz' not found"}]


def test_custom_prompt_shifts_caret() -> None:
    editor = make_editor(["#"], config=EditorConfig(prompt="edit> "))

    editor.run()

    assert editor.console.prompts[0] == "edit> "
    assert "      ^\n" in editor.console.output


def test_quit_confirmed_stops_reading() -> None:
    editor = make_editor(["Q", "Y", "1D"])
    ended: List[object] = []
    editor.bus.subscribe("repl.quit", ended.append)

    editor.run()

    assert editor.state.quit is True
    assert editor.console.pending == 1
    assert editor.document.line_count == 3
    assert ended == [{"lines": 1, "saved_quit": True}]


def test_quit_ignores_rest_of_line() -> None:
    editor = make_editor(["Q;1D", "Y"])

    editor.run()

    assert editor.document.line_count == 3


def test_end_writes_file(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    document = Document.from_lines(["x"], filename=str(path))
    console = ScriptedConsole(["1", "changed", "E"])

    code = run_session(document, console)

    assert code == 0
    assert path.read_text(encoding="utf-8") == "changed\n"


def test_append_then_page_through() -> None:
    editor = make_editor(["A", "d", "e", ".", "P"], lines=["a"])

    editor.run()

    assert editor.document.snapshot() == ("a", "d", "e")
    assert editor.state.cursor == 2
