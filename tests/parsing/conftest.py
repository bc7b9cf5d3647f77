"""Fixtures for input parsing and duration tests.

Reference dates:
- 2024-03-04 is a Monday
- 2024-03-06 is a Wednesday
- 2024-03-10 is a Sunday
"""

from datetime import date

import pytest

from daybook.parsing.duration import DurationCalculator
from daybook.parsing.input_parser import InputParser
from daybook.parsing.models import TextPosition


@pytest.fixture
def monday() -> date:
    return date(2024, 3, 4)


@pytest.fixture
def wednesday() -> date:
    return date(2024, 3, 6)


@pytest.fixture
def sunday() -> date:
    return date(2024, 3, 10)


@pytest.fixture
def parser() -> InputParser:
    return InputParser(locale="en-US")


@pytest.fixture
def calculator() -> DurationCalculator:
    return DurationCalculator()


@pytest.fixture
def one_line_document():
    """Two times and a blank target on one line.

    ``from 14:00 to 09:30 = `` with cursors inside both times and at the end.
    """
    text = "from 14:00 to 09:30 = "
    later = TextPosition(0, 6)     # inside "14:00"
    earlier = TextPosition(0, 15)  # inside "09:30"
    target = TextPosition(0, 22)   # end of line, after the blank
    return text, later, earlier, target
