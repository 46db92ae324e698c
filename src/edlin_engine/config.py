"""Editor configuration and the fixed display conventions."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "EDLIN_ENGINE_"

DEFAULT_PROMPT = "*"
DEFAULT_CURSOR = "*"
DEFAULT_ENCODING = "utf-8"

# Historical window sizes of the editing language.
LIST_WINDOW = 24
LIST_LEAD = 11
PAGE_WINDOW = 23
PAGE_BREAK = 24

INT32_MAX = 2**31 - 1
EOF_CHARACTERS = ("\x1a", "\x04")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """User-tunable settings for a session."""

    prompt: str = DEFAULT_PROMPT
    cursor_marker: str = DEFAULT_CURSOR
    ignore_eof: bool = False
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def from_env(cls) -> "EditorConfig":
        return cls(
            prompt=_env("PROMPT") or DEFAULT_PROMPT,
            cursor_marker=_env("CURSOR") or DEFAULT_CURSOR,
            ignore_eof=_env_flag("IGNORE_EOF", False),
            encoding=_env("ENCODING") or DEFAULT_ENCODING,
        )

    def merged(
        self,
        *,
        prompt: str | None = None,
        cursor_marker: str | None = None,
        ignore_eof: bool | None = None,
    ) -> "EditorConfig":
        """Return a copy with every non-``None`` override applied."""

        overrides = {
            "prompt": prompt,
            "cursor_marker": cursor_marker,
            "ignore_eof": ignore_eof,
        }
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_PROMPT",
    "DEFAULT_CURSOR",
    "DEFAULT_ENCODING",
    "LIST_WINDOW",
    "LIST_LEAD",
    "PAGE_WINDOW",
    "PAGE_BREAK",
    "INT32_MAX",
    "EOF_CHARACTERS",
    "EditorConfig",
]
