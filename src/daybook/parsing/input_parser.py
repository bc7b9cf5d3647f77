"""Journal input parsing.

Turns the text typed into the "open journal page" prompt into an ``Input``:
- explicit dates (ISO ``2024-03-05`` and locale numeric variants)
- signed day offsets (``+3``, ``-1``, ``0``) and relative day words
- weekday phrases (``next wednesday``, ``last fri``)
- everything else becomes the memo, with ``#flags`` split out

Parsing never fails. Text without a recognisable date addresses today.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Collection, List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta, weekday as rd_weekday

from daybook.parsing.locales import LocaleVocabulary, vocabulary_for
from daybook.parsing.models import (
    Input,
    InputKind,
    SameWeekdayPolicy,
    WeekdayDirection,
    WeekdayTarget,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Regular Expression Patterns
# ---------------------------------------------------------------------------

ISO_DATE_PATTERN = re.compile(r"^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})$")
COMPACT_DATE_PATTERN = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
NUMERIC_DATE_PATTERN = re.compile(r"^(\d{1,2})([./])(\d{1,2})\2(\d{4})$")
OFFSET_PATTERN = re.compile(r"^[+-]?\d+$")
WORD_PATTERN = re.compile(r"\S+")

# Offsets beyond this are not day counts (and would overflow ``date``)
MAX_OFFSET_DAYS = 36500

DEFAULT_FLAG_MARKERS: Tuple[str, ...] = ("#",)


class InputParser:
    """Parse free-form journal input into an ``Input`` descriptor.

    The date-like token is looked for at the start of the text and then at
    its end ("team sync +2"). At each position the kinds are tried in order:
    explicit date, signed offset, weekday phrase. Only the first recognised
    token is honoured; any other date-like text stays in the memo.

    Example:
        >>> parser = InputParser()
        >>> parser.parse("+3", today=date(2024, 3, 4)).offset
        3
    """

    def __init__(
        self,
        locale: str = "en-US",
        flag_markers: Sequence[str] = DEFAULT_FLAG_MARKERS,
        same_weekday_policy: SameWeekdayPolicy = SameWeekdayPolicy.SKIP,
    ):
        self.locale = locale
        self.flag_markers = tuple(flag_markers)
        self.same_weekday_policy = same_weekday_policy

    @classmethod
    def from_settings(cls, settings) -> "InputParser":
        journal = settings.journal
        return cls(
            locale=journal.locale,
            flag_markers=journal.flag_markers,
            same_weekday_policy=journal.same_weekday_policy,
        )

    def parse(
        self,
        raw: Optional[str],
        today: Optional[date] = None,
        locale: Optional[str] = None,
    ) -> Input:
        """Parse ``raw`` relative to ``today`` (defaults to the current date)."""
        raw_text = raw or ""
        today = today or date.today()
        vocabulary = vocabulary_for(locale or self.locale)
        words = list(WORD_PATTERN.finditer(raw_text))

        if not words:
            return Input(raw_text=raw_text, kind=InputKind.MEMO, offset=0)

        for index, width in self._candidate_positions(len(words)):
            phrase = [word.group() for word in words[index:index + width]]
            fields = self._recognize(phrase, today, vocabulary)
            if fields is None:
                continue
            memo, flags = self.split_flags(words, skip=range(index, index + width))
            logger.debug(f"Recognized {' '.join(phrase)!r} as {fields['kind'].value}")
            return Input(raw_text=raw_text, memo=memo, flags=flags, **fields)

        memo, flags = self.split_flags(words)
        return Input(raw_text=raw_text, kind=InputKind.MEMO, offset=0, memo=memo, flags=flags)

    def split_flags(
        self, words: Sequence[re.Match], skip: Collection[int] = ()
    ) -> Tuple[str, frozenset]:
        """Separate flag tokens (``#tag``) from the memo.

        ``words`` are the ``WORD_PATTERN`` matches of one input and ``skip``
        the indices of the recognised date token. Adjacent memo words keep
        the spacing they were typed with; a removed token between them
        leaves a single space.
        """
        runs: List[Tuple[int, int]] = []
        flags = set()
        joined = False
        for index, word in enumerate(words):
            if index in skip:
                joined = False
                continue
            marker = self._flag_marker(word.group())
            if marker:
                flags.add(word.group()[len(marker):])
                joined = False
                continue
            if joined:
                runs[-1] = (runs[-1][0], word.end())
            else:
                runs.append((word.start(), word.end()))
            joined = True
        text = words[0].string if words else ""
        return " ".join(text[start:end] for start, end in runs), frozenset(flags)

    # -----------------------------------------------------------------------
    # Private: Recognition
    # -----------------------------------------------------------------------

    @staticmethod
    def _candidate_positions(count: int) -> List[Tuple[int, int]]:
        """(index, width) pairs: leading single token, leading pair, then trailing."""
        positions = [(0, 1)]
        if count >= 2:
            positions.append((0, 2))
            positions.append((count - 1, 1))
        if count >= 3:
            positions.append((count - 2, 2))
        return positions

    def _recognize(self, phrase: Sequence[str], today: date, vocabulary: LocaleVocabulary):
        if len(phrase) == 1:
            token = phrase[0]
            explicit = parse_explicit_date(token, vocabulary.numeric_date_order)
            if explicit is not None:
                return {"kind": InputKind.EXPLICIT_DATE, "offset": None, "explicit_date": explicit}
            offset = parse_offset(token, vocabulary)
            if offset is not None:
                return {"kind": InputKind.OFFSET, "offset": offset}
            return None

        target = parse_weekday_phrase(
            phrase[0], phrase[1], today, vocabulary, self.same_weekday_policy
        )
        if target is not None:
            return {"kind": InputKind.WEEKDAY, "offset": target.offset, "weekday": target}
        return None

    def _flag_marker(self, token: str) -> Optional[str]:
        for marker in self.flag_markers:
            if marker and token.startswith(marker) and len(token) > len(marker):
                return marker
        return None


# ---------------------------------------------------------------------------
# Token Parsers
# ---------------------------------------------------------------------------


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_explicit_date(token: str, numeric_order: str = "mdy") -> Optional[date]:
    """Parse ISO-like or locale numeric dates; ``None`` if not a valid date."""
    match = ISO_DATE_PATTERN.match(token) or COMPACT_DATE_PATTERN.match(token)
    if match:
        year, month, day = (int(group) for group in match.groups())
        return _safe_date(year, month, day)

    match = NUMERIC_DATE_PATTERN.match(token)
    if match:
        first, separator, second, year = match.groups()
        # A dotted date is day-first everywhere it is used
        if separator == "/" and numeric_order == "mdy":
            return _safe_date(int(year), int(first), int(second))
        return _safe_date(int(year), int(second), int(first))
    return None


def parse_offset(token: str, vocabulary: LocaleVocabulary) -> Optional[int]:
    """Parse ``+N``, ``-N``, ``N`` or a relative day word into a day offset."""
    if OFFSET_PATTERN.match(token):
        value = int(token)
        if abs(value) > MAX_OFFSET_DAYS:
            logger.warning(f"Ignoring out-of-range offset {token!r}")
            return None
        return value
    return vocabulary.relative_days.get(token.lower())


def parse_weekday_phrase(
    direction_word: str,
    weekday_word: str,
    today: date,
    vocabulary: LocaleVocabulary,
    policy: SameWeekdayPolicy = SameWeekdayPolicy.SKIP,
) -> Optional[WeekdayTarget]:
    """Resolve ``next <weekday>`` / ``last <weekday>`` against ``today``."""
    direction_word = direction_word.lower()
    if direction_word in vocabulary.next_words:
        direction = WeekdayDirection.NEXT
    elif direction_word in vocabulary.last_words:
        direction = WeekdayDirection.LAST
    else:
        return None

    weekday = vocabulary.weekdays.get(weekday_word.lower().rstrip(".,"))
    if weekday is None:
        return None

    offset = weekday_offset(today, weekday, direction, policy)
    return WeekdayTarget(weekday=weekday, direction=direction, offset=offset)


def weekday_offset(
    today: date,
    weekday: int,
    direction: WeekdayDirection,
    policy: SameWeekdayPolicy = SameWeekdayPolicy.SKIP,
) -> int:
    """Days from ``today`` to the nearest ``weekday`` in ``direction``."""
    step = 1 if direction is WeekdayDirection.NEXT else -1
    skip_today = policy is SameWeekdayPolicy.SKIP
    delta = relativedelta(days=step if skip_today else 0, weekday=rd_weekday(weekday, step))
    return ((today + delta) - today).days


def parse_input(raw: Optional[str], today: Optional[date] = None, locale: str = "en-US") -> Input:
    """Parse ``raw`` with a default-configured ``InputParser``."""
    return InputParser(locale=locale).parse(raw, today=today)


def entry_input(offset: int) -> Input:
    """Input for the fixed "today" / "yesterday" / "tomorrow" commands."""
    return Input(raw_text=f"{offset:+d}", kind=InputKind.OFFSET, offset=offset)


__all__ = [
    "InputParser",
    "parse_input",
    "entry_input",
    "parse_explicit_date",
    "parse_offset",
    "parse_weekday_phrase",
    "weekday_offset",
    "MAX_OFFSET_DAYS",
]
