"""Duration computation from three cursor selections.

The user places three cursors in a document: two on clock times and one on
blank space. Roles are inferred from the word under each cursor; selection
order carries no meaning, only chronological order does. The result is the
elapsed time in decimal hours, to be written at the blank position by the
caller.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from daybook.errors import (
    AmbiguousSelectionError,
    InvalidSelectionCountError,
    MissingEndError,
    MissingStartError,
    MissingTargetError,
)
from daybook.parsing.models import (
    ClassifiedSelection,
    DurationResult,
    SelectionRole,
    TextPosition,
    TimeToken,
)
from daybook.parsing.timetoken import DEFAULT_TIME_FORMAT, find_time_word, parse_time_word

logger = logging.getLogger(__name__)

REQUIRED_SELECTIONS = 3
_CENTS = Decimal("0.01")


class DurationCalculator:
    """Classify three selections and compute the hours between two times.

    The calculator holds only the canonical time format and is safe to share
    between callers.

    Example:
        >>> calc = DurationCalculator()
        >>> text = "14:00 - 09:30 = "
        >>> result = calc.compute(
        ...     [TextPosition(0, 0), TextPosition(0, 8), TextPosition(0, 16)], text
        ... )
        >>> result.formatted
        '4.50'
    """

    def __init__(self, time_format: str = DEFAULT_TIME_FORMAT):
        self.time_format = time_format

    @classmethod
    def from_settings(cls, settings) -> "DurationCalculator":
        return cls(time_format=settings.journal.time_format)

    def classify(
        self,
        position: TextPosition,
        lines: Sequence[str],
        time_format: Optional[str] = None,
    ) -> ClassifiedSelection:
        """Decide whether ``position`` points at a time or at the target.

        Raises:
            AmbiguousSelectionError: the word looks like a time but neither
                the canonical nor the glued format can decode it.
        """
        if not 0 <= position.line < len(lines):
            return ClassifiedSelection(position=position, role=SelectionRole.TARGET)

        found = find_time_word(lines[position.line], position.character)
        if found is None:
            return ClassifiedSelection(position=position, role=SelectionRole.TARGET)

        start, end, word = found
        token = parse_time_word(
            word,
            time_format or self.time_format,
            span=(start, end),
            line=position.line,
        )
        if token is None:
            raise AmbiguousSelectionError(word)
        return ClassifiedSelection(
            position=position, role=SelectionRole.TIME, word=word, token=token
        )

    def compute(
        self,
        selections: Sequence[TextPosition],
        document_text: str,
        time_format: Optional[str] = None,
    ) -> DurationResult:
        """Compute the duration between the two selected times.

        Args:
            selections: Exactly three cursor positions
            document_text: Full text of the document the positions refer to
            time_format: Override of the canonical time format

        Returns:
            DurationResult with ``start <= end``

        Raises:
            InvalidSelectionCountError: not exactly three selections
            AmbiguousSelectionError: a time-shaped word cannot be parsed
            MissingStartError / MissingEndError / MissingTargetError:
                the selections do not contain two times and one target
        """
        if len(selections) != REQUIRED_SELECTIONS:
            raise InvalidSelectionCountError(len(selections))

        lines = document_lines(document_text)
        start: Optional[TimeToken] = None
        end: Optional[TimeToken] = None
        target: Optional[TextPosition] = None

        for selection in selections:
            classified = self.classify(selection, lines, time_format)
            if classified.role is SelectionRole.TARGET:
                target = selection
                continue

            token = classified.token
            if start is None:
                start = token
            elif token < start:
                end = start
                start = token
            else:
                end = token

        if start is None:
            raise MissingStartError(details={"selections": len(selections)})
        if end is None:
            raise MissingEndError(details={"start": start.isoformat()})
        if target is None:
            raise MissingTargetError(
                details={"start": start.isoformat(), "end": end.isoformat()}
            )

        hours = hours_between(start, end)
        logger.debug(f"Duration {start} -> {end}: {hours} h")
        return DurationResult(start=start, end=end, hours=hours, target=target)


def hours_between(start: TimeToken, end: TimeToken) -> Decimal:
    """Absolute difference in hours, two decimals, never negative zero."""
    minutes = abs(end.as_minutes() - start.as_minutes())
    hours = (Decimal(minutes) / Decimal(60)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return abs(hours)


def compute_duration(
    selections: Sequence[TextPosition],
    document_text: str,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> DurationResult:
    """Convenience wrapper around ``DurationCalculator.compute``."""
    return DurationCalculator(time_format).compute(selections, document_text)


def document_lines(text: str) -> List[str]:
    """Split ``text`` into the lines ``TextPosition.line`` indexes.

    Only ``"\\n"`` ends a line; ``"\\r"`` and form feeds stay in the line text.
    """
    return text.split("\n")


def selections_from_strings(values: Sequence[str]) -> List[TextPosition]:
    """Parse ``"LINE:CHARACTER"`` strings into positions."""
    return [TextPosition.parse(value) for value in values]


__all__ = [
    "DurationCalculator",
    "REQUIRED_SELECTIONS",
    "compute_duration",
    "document_lines",
    "hours_between",
    "selections_from_strings",
]
