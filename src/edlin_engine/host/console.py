"""Interactive input and output collaborators used by the executor.

Every command talks to the user through a :class:`Console`. The terminal
host wraps text streams; tests and the Textual front end provide their own.
"""

from __future__ import annotations

import sys
from collections import deque
from typing import Deque, Iterable, List, Optional, Protocol, TextIO, runtime_checkable


@runtime_checkable
class Console(Protocol):
    """Synchronous line and key input plus plain and error output."""

    def read_line(self, prompt: str) -> Optional[str]:
        """Show ``prompt`` and return one line without its newline.

        ``None`` means the input stream is exhausted.
        """

    def read_key(self, prompt: str) -> Optional[str]:
        """Show ``prompt`` and return a single answer character, or ``None``."""

    def write(self, text: str) -> None:
        ...

    def write_error(self, text: str) -> None:
        ...


class StreamConsole:
    """Console over text streams, ``sys.stdin``/``sys.stdout`` by default."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr

    def read_line(self, prompt: str) -> Optional[str]:
        self.write(prompt)
        self._stdout.flush()
        raw = self._stdin.readline()
        if raw == "":
            return None
        return raw.rstrip("\r\n")

    def read_key(self, prompt: str) -> Optional[str]:
        line = self.read_line(prompt)
        if line is None:
            return None
        return line.strip()[:1]

    def write(self, text: str) -> None:
        self._stdout.write(text)

    def write_error(self, text: str) -> None:
        self._stdout.flush()
        self._stderr.write(text)
        self._stderr.flush()


class ScriptedConsole:
    """Console fed from a script of answers that records everything shown.

    ``read_line`` and ``read_key`` share one queue, in the order the editor
    asks for input. Prompts are echoed into :attr:`output` followed by the
    answer, so a transcript reads like a terminal session.
    """

    def __init__(self, inputs: Iterable[str] = ()) -> None:
        self._inputs: Deque[str] = deque(inputs)
        self.output: List[str] = []
        self.errors: List[str] = []
        self.prompts: List[str] = []

    def feed(self, *inputs: str) -> None:
        self._inputs.extend(inputs)

    @property
    def pending(self) -> int:
        return len(self._inputs)

    def read_line(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        if not self._inputs:
            return None
        answer = self._inputs.popleft()
        self.output.append(f"{prompt}{answer}\n")
        return answer

    def read_key(self, prompt: str) -> Optional[str]:
        answer = self.read_line(prompt)
        return None if answer is None else answer[:1]

    def write(self, text: str) -> None:
        self.output.append(text)

    def write_error(self, text: str) -> None:
        self.errors.append(text)

    @property
    def text(self) -> str:
        return "".join(self.output)

    @property
    def error_text(self) -> str:
        return "".join(self.errors)


__all__ = ["Console", "ScriptedConsole", "StreamConsole"]
