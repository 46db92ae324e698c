"""Input/output hosts the editor can run against."""

from .console import Console, ScriptedConsole, StreamConsole

__all__ = ["Console", "ScriptedConsole", "StreamConsole"]
