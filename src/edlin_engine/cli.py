"""Command-line entry point: ``edlin-engine FILE [options]``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from edlin_engine import __version__
from edlin_engine.buffer import open_document
from edlin_engine.config import DEFAULT_CURSOR, DEFAULT_PROMPT, EditorConfig
from edlin_engine.errors import APP_NAME, DocumentIOError
from edlin_engine.host import StreamConsole
from edlin_engine.repl import run_session
from edlin_engine.runtime import telemetry

VERSION_TEXT = (
    f"{APP_NAME}, version {__version__}.\n"
    "Licensed under the terms of the GNU General Public License.\n"
    "(Version 2.0 of the license only.)"
)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="edlin-engine",
        description="Line-oriented text editor with the classic one-letter commands.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", help="File to edit; created when missing")
    parser.add_argument(
        "-b",
        dest="ignore_eof",
        action="store_true",
        help="Ignore End-of-file (CTRL-Z) characters while loading",
    )
    parser.add_argument(
        "-c",
        dest="cursor",
        default=None,
        help=f'Change the cursor marker (default: "{DEFAULT_CURSOR}")',
    )
    parser.add_argument(
        "-p",
        dest="prompt",
        default=None,
        help=f'Change the prompt (default: "{DEFAULT_PROMPT}")',
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=VERSION_TEXT,
        help="Print version and licensing information",
    )
    parser.add_argument(
        "--textual",
        action="store_true",
        help="Run inside the Textual front end instead of the terminal",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset to apply before starting",
    )
    return parser.parse_args(argv)


def _use_raw_bytes() -> None:
    for stream in (sys.stdin, sys.stdout):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="surrogateescape")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    config = EditorConfig.from_env().merged(
        prompt=args.prompt,
        cursor_marker=args.cursor,
        ignore_eof=True if args.ignore_eof else None,
    )
    try:
        document, created = open_document(
            args.file, encoding=config.encoding, ignore_eof=config.ignore_eof
        )
    except DocumentIOError:
        sys.stderr.write(f"Couldn't open file '{args.file}'.\n")
        return 1

    if args.textual:
        from edlin_engine.adapters.textual.app import run_app

        return run_app(document, config=config, created=created)

    _use_raw_bytes()
    console = StreamConsole()
    if created:
        console.write("New file\n")
    return run_session(document, console, config=config)


if __name__ == "__main__":  # pragma: no cover - manual entry
    raise SystemExit(main())
