"""Data models for journal input parsing and duration computation.

This module defines the value types exchanged between the parsers and the
command layer:
- ``Input``: what a user-typed string means (date, offset, weekday, memo)
- ``TimeToken``: a clock time normalized to 24-hour form
- ``TextPosition`` / ``ClassifiedSelection``: cursor positions in a document
- ``DurationResult``: ordered start/end times and the elapsed hours

All models are immutable once constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class InputKind(Enum):
    """Which interpretation the parser chose for a raw string."""

    EXPLICIT_DATE = "explicit_date"
    OFFSET = "offset"
    WEEKDAY = "weekday"
    MEMO = "memo"


class WeekdayDirection(Enum):
    """Direction of a weekday phrase ("next friday", "last monday")."""

    NEXT = "next"
    LAST = "last"


class SameWeekdayPolicy(Enum):
    """How "next <weekday>" resolves when today already is that weekday."""

    SKIP = "skip"      # move a full week (+7 / -7)
    TODAY = "today"    # stay on today (offset 0)


class SelectionRole(Enum):
    """Inferred role of a cursor position in a duration command."""

    TIME = "time"
    TARGET = "target"


# ---------------------------------------------------------------------------
# Journal input
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WeekdayTarget:
    """A weekday phrase resolved against a reference date."""

    weekday: int                    # Monday=0 ... Sunday=6
    direction: WeekdayDirection
    offset: int                     # days from the reference date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekday": self.weekday,
            "direction": self.direction.value,
            "offset": self.offset,
        }


@dataclass(frozen=True)
class Input:
    """Parsed journal command input.

    Exactly one interpretation is recorded. ``offset`` is ``None`` only when
    an explicit date was given; for weekday phrases it carries the offset
    already resolved from ``weekday``.
    """

    raw_text: str
    kind: InputKind = InputKind.MEMO
    offset: Optional[int] = 0
    explicit_date: Optional[date] = None
    weekday: Optional[WeekdayTarget] = None
    memo: str = ""
    flags: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def has_memo(self) -> bool:
        return bool(self.memo)

    def resolve(self, today: date) -> date:
        """Return the calendar date this input addresses."""
        if self.explicit_date is not None:
            return self.explicit_date
        return today + timedelta(days=self.offset or 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "raw_text": self.raw_text,
            "kind": self.kind.value,
            "offset": self.offset,
            "explicit_date": self.explicit_date.isoformat() if self.explicit_date else None,
            "weekday": self.weekday.to_dict() if self.weekday else None,
            "memo": self.memo,
            "flags": sorted(self.flags),
        }


# ---------------------------------------------------------------------------
# Time tokens and selections
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class TimeToken:
    """A clock time in 24-hour form; ordering is chronological."""

    hour: int
    minute: int
    source_span: Optional[Tuple[int, int]] = field(default=None, compare=False)
    line: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValueError(f"Invalid time {self.hour}:{self.minute}")

    def as_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def as_hours(self) -> Decimal:
        return Decimal(self.as_minutes()) / Decimal(60)

    def isoformat(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class TextPosition:
    """Zero-based cursor position in a document."""

    line: int
    character: int

    @classmethod
    def parse(cls, value: str) -> "TextPosition":
        """Parse ``"LINE:CHARACTER"`` (both zero-based)."""
        line, sep, character = value.partition(":")
        if not sep:
            raise ValueError(f"Expected LINE:CHARACTER, got {value!r}")
        return cls(int(line), int(character))

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True)
class ClassifiedSelection:
    """A selection after its surrounding word has been inspected."""

    position: TextPosition
    role: SelectionRole
    word: Optional[str] = None
    token: Optional[TimeToken] = None


@dataclass(frozen=True)
class DurationResult:
    """Elapsed time between two selected clock times."""

    start: TimeToken
    end: TimeToken
    hours: Decimal
    target: TextPosition

    @property
    def formatted(self) -> str:
        """Hours with two fractional digits, e.g. ``"4.50"``."""
        return f"{self.hours:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "hours": self.formatted,
            "target": self.target.to_dict(),
        }


__all__ = [
    "InputKind",
    "WeekdayDirection",
    "SameWeekdayPolicy",
    "SelectionRole",
    "WeekdayTarget",
    "Input",
    "TimeToken",
    "TextPosition",
    "ClassifiedSelection",
    "DurationResult",
]
