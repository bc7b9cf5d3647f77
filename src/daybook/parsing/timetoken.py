"""Clock-time token parsing shared by the duration command and ``daybook time``.

A time word is decoded in two stages:
1. the canonical format from configuration (strftime syntax, e.g. ``%H:%M``);
   a trailing ``am``/``pm`` is honoured even when the format has no ``%p``
2. the "glued digits" format ``hmm`` (``930`` -> 09:30, ``1223`` -> 12:23)

Whatever the input style, the resulting ``TimeToken`` is in 24-hour form.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Optional, Tuple

from daybook.parsing.models import TimeToken

logger = logging.getLogger(__name__)


DEFAULT_TIME_FORMAT = "%H:%M"

# Word surrounding a cursor: clock-like digits with optional meridiem, or
# a single whitespace character (which marks a blank target position).
TIME_WORD_PATTERN = re.compile(r"\d{1,2}:?\d{0,2}(?:\s?(?:am|pm))?|\s", re.IGNORECASE)

_MERIDIEM_PATTERN = re.compile(r"^(?P<clock>.*?)\s?(?P<meridiem>am|pm)$", re.IGNORECASE)
_GLUED_PATTERN = re.compile(r"^(\d{1,2}):?(\d{2})?$")


def find_time_word(line_text: str, character: int) -> Optional[Tuple[int, int, str]]:
    """Return ``(start, end, word)`` of the time-shaped word at ``character``.

    A match contains the position when ``start <= character <= end``.
    Whitespace-only matches are reported as ``None``: they mark a target,
    not a time.
    """
    for match in TIME_WORD_PATTERN.finditer(line_text):
        if match.start() <= character <= match.end():
            if not match.group(0).strip():
                continue
            return match.start(), match.end(), match.group(0)
        if match.start() > character:
            break
    return None


def split_meridiem(word: str) -> Tuple[str, Optional[str]]:
    """Split ``"9:30 pm"`` into ``("9:30", "pm")``."""
    match = _MERIDIEM_PATTERN.match(word)
    if not match:
        return word, None
    return match.group("clock").strip(), match.group("meridiem").lower()


def apply_meridiem(hour: int, meridiem: Optional[str]) -> Optional[int]:
    """Convert a 12-hour clock hour to 24-hour form; ``None`` if invalid."""
    if meridiem is None:
        return hour
    if not 1 <= hour <= 12:
        return None
    if meridiem == "pm" and hour != 12:
        return hour + 12
    if meridiem == "am" and hour == 12:
        return 0
    return hour


def parse_with_format(word: str, time_format: str) -> Optional[Tuple[int, int]]:
    """Parse ``word`` with a strftime-style format; ``None`` when it does not fit."""
    try:
        parsed = datetime.strptime(word, time_format)
        return parsed.hour, parsed.minute
    except ValueError:
        pass

    clock, meridiem = split_meridiem(word)
    if meridiem is None or "%p" in time_format:
        return None
    try:
        parsed = datetime.strptime(clock, time_format)
    except ValueError:
        return None
    hour = apply_meridiem(parsed.hour, meridiem)
    if hour is None:
        return None
    return hour, parsed.minute


def parse_glued(word: str) -> Optional[Tuple[int, int]]:
    """Parse the ``hmm`` format: hour digits followed by two minute digits."""
    clock, meridiem = split_meridiem(word)
    match = _GLUED_PATTERN.match(clock)
    if not match:
        return None
    hour = apply_meridiem(int(match.group(1)), meridiem)
    minute = int(match.group(2) or 0)
    if hour is None or not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def parse_time_word(
    word: str,
    time_format: str = DEFAULT_TIME_FORMAT,
    *,
    span: Optional[Tuple[int, int]] = None,
    line: Optional[int] = None,
) -> Optional[TimeToken]:
    """Decode a time word into a ``TimeToken``; ``None`` if both stages fail."""
    text = word.strip()
    if not text:
        return None

    parsed = parse_with_format(text, time_format)
    if parsed is None:
        parsed = parse_glued(text)
        if parsed is not None:
            logger.debug(f"Parsed {text!r} with glued format")
    if parsed is None:
        logger.debug(f"Could not parse {text!r} with {time_format!r} or glued format")
        return None

    hour, minute = parsed
    return TimeToken(hour=hour, minute=minute, source_span=span, line=line)


def format_time(moment: datetime, template: str = DEFAULT_TIME_FORMAT) -> str:
    """Render ``moment`` with a strftime template for insertion into a page."""
    return moment.strftime(template)


__all__ = [
    "DEFAULT_TIME_FORMAT",
    "TIME_WORD_PATTERN",
    "find_time_word",
    "split_meridiem",
    "apply_meridiem",
    "parse_with_format",
    "parse_glued",
    "parse_time_word",
    "format_time",
]
