"""Turns an instruction's addresses into concrete line indices."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from edlin_engine.errors import CommandSyntaxError
from edlin_engine.language import THIS_LINE, Address, Instruction, Marker


class RangeShape(Enum):
    NONE = "none"
    SINGLE = "single"
    START_ONLY = "start_only"
    END_ONLY = "end_only"
    START_AND_END = "start_and_end"


@dataclass(frozen=True, slots=True)
class ResolvedRange:
    """Addresses with the current-line marker replaced by the cursor.

    ``from_cursor`` names the fields that were written as ``.``.
    """

    shape: RangeShape
    start: Optional[int] = None
    end: Optional[int] = None
    only: Optional[int] = None
    target: Optional[int] = None
    from_cursor: FrozenSet[str] = frozenset()

    @property
    def has_start_or_end(self) -> bool:
        return self.start is not None or self.end is not None

    def bounds(self, start: int, end: int) -> Tuple[int, int]:
        """Inclusive block for this range, filling absent ends with the defaults.

        A single address is a one-line block.
        """

        if self.only is not None:
            return self.only, self.only
        return (
            start if self.start is None else self.start,
            end if self.end is None else self.end,
        )


def _substitute(address: Address, cursor: int) -> Optional[int]:
    if isinstance(address, Marker):
        return cursor
    return address


def classify(start: object, end: object, only: object) -> RangeShape:
    if only is not None:
        return RangeShape.SINGLE
    if start is not None and end is not None:
        return RangeShape.START_AND_END
    if start is not None:
        return RangeShape.START_ONLY
    if end is not None:
        return RangeShape.END_ONLY
    return RangeShape.NONE


def resolve_range(instruction: Instruction, cursor: int) -> ResolvedRange:
    """Substitute the cursor and classify the range of ``instruction``.

    Raises :class:`CommandSyntaxError` when the resolved end precedes the
    resolved start.
    """

    fields = {
        "start": instruction.start,
        "end": instruction.end,
        "only": instruction.only,
        "target": instruction.target,
    }
    from_cursor = frozenset(name for name, value in fields.items() if value is THIS_LINE)
    start = _substitute(instruction.start, cursor)
    end = _substitute(instruction.end, cursor)
    only = _substitute(instruction.only, cursor)
    target = _substitute(instruction.target, cursor)

    if start is not None and end is not None and end < start:
        raise CommandSyntaxError(f"range end {end + 1} precedes start {start + 1}")

    return ResolvedRange(
        shape=classify(start, end, only),
        start=start,
        end=end,
        only=only,
        target=target,
        from_cursor=from_cursor,
    )


__all__ = ["RangeShape", "ResolvedRange", "classify", "resolve_range"]
