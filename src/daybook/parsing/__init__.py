"""Journal input and duration parsing.

- ``InputParser``: free-form text to an ``Input`` (date, offset, weekday, memo)
- ``DurationCalculator``: three cursor selections to a ``DurationResult``
- ``timetoken``: clock-time word parsing shared by both command paths
"""

from daybook.parsing.models import (
    ClassifiedSelection,
    DurationResult,
    Input,
    InputKind,
    SameWeekdayPolicy,
    SelectionRole,
    TextPosition,
    TimeToken,
    WeekdayDirection,
    WeekdayTarget,
)
from daybook.parsing.input_parser import InputParser, entry_input, parse_input
from daybook.parsing.duration import DurationCalculator, compute_duration
from daybook.parsing.timetoken import format_time, parse_time_word

__all__ = [
    # Models
    "ClassifiedSelection",
    "DurationResult",
    "Input",
    "InputKind",
    "SameWeekdayPolicy",
    "SelectionRole",
    "TextPosition",
    "TimeToken",
    "WeekdayDirection",
    "WeekdayTarget",
    # Parsers
    "InputParser",
    "parse_input",
    "entry_input",
    "DurationCalculator",
    "compute_duration",
    "parse_time_word",
    "format_time",
]
