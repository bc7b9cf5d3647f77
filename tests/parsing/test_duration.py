"""Tests for duration computation from three selections."""

from decimal import Decimal

import pytest

from daybook.configuration.settings import JournalSettings, Settings
from daybook.errors import (
    AmbiguousSelectionError,
    InvalidSelectionCountError,
    MissingEndError,
    MissingStartError,
    MissingTargetError,
)
from daybook.parsing.duration import (
    DurationCalculator,
    compute_duration,
    document_lines,
    hours_between,
    selections_from_strings,
)
from daybook.parsing.models import SelectionRole, TextPosition, TimeToken


class TestCompute:
    def test_hours_between_selected_times(self, calculator, one_line_document):
        text, later, earlier, target = one_line_document

        result = calculator.compute([later, earlier, target], text)

        assert result.start.isoformat() == "09:30"
        assert result.end.isoformat() == "14:00"
        assert result.hours == Decimal("4.50")
        assert result.formatted == "4.50"
        assert result.target == target

    def test_selection_order_does_not_matter(self, calculator, one_line_document):
        text, later, earlier, target = one_line_document

        orders = [
            [later, earlier, target],
            [earlier, later, target],
            [target, later, earlier],
            [earlier, target, later],
        ]
        results = [calculator.compute(order, text) for order in orders]

        assert {r.formatted for r in results} == {"4.50"}
        assert all(r.start <= r.end for r in results)
        assert all(r.target == target for r in results)

    def test_glued_times(self, calculator):
        text = "from 930 to 1400 = "
        selections = [TextPosition(0, 6), TextPosition(0, 13), TextPosition(0, 19)]

        result = calculator.compute(selections, text)

        assert result.start == TimeToken(9, 30)
        assert result.end == TimeToken(14, 0)
        assert result.formatted == "4.50"

    def test_meridiem_times(self, calculator):
        text = "from 9:30 am to 2 pm = "
        selections = [TextPosition(0, 6), TextPosition(0, 17), TextPosition(0, 23)]

        assert calculator.compute(selections, text).formatted == "4.50"

    def test_times_on_separate_lines(self, calculator):
        text = "start 08:15\nend 17:45\ntotal: \n"
        selections = [TextPosition(1, 5), TextPosition(0, 7), TextPosition(2, 7)]

        result = calculator.compute(selections, text)

        assert result.formatted == "9.50"
        assert result.start.line == 0
        assert result.end.line == 1

    def test_target_beyond_end_of_document(self, calculator):
        text = "09:00 10:00"
        selections = [TextPosition(0, 1), TextPosition(0, 7), TextPosition(5, 0)]

        result = calculator.compute(selections, text)

        assert result.formatted == "1.00"
        assert result.target == TextPosition(5, 0)

    def test_equal_times_give_zero(self, calculator):
        text = "09:00 09:00 "
        selections = [TextPosition(0, 1), TextPosition(0, 7), TextPosition(0, 12)]

        assert calculator.compute(selections, text).formatted == "0.00"

    def test_rounds_to_two_decimals(self, calculator):
        text = "09:00 09:10 "
        selections = [TextPosition(0, 1), TextPosition(0, 7), TextPosition(0, 12)]

        assert calculator.compute(selections, text).formatted == "0.17"

    def test_time_format_override(self, calculator):
        text = "30:09 00:14 "
        selections = [TextPosition(0, 1), TextPosition(0, 7), TextPosition(0, 12)]

        result = calculator.compute(selections, text, time_format="%M:%H")
        assert (result.start.isoformat(), result.end.isoformat()) == ("09:30", "14:00")

        with pytest.raises(AmbiguousSelectionError):
            calculator.compute(selections, text)

    def test_only_newlines_separate_lines(self, calculator):
        text = "page\x0cbreak\r\n09:00 10:30 = "
        selections = [TextPosition(1, 1), TextPosition(1, 7), TextPosition(1, 14)]

        result = calculator.compute(selections, text)

        assert result.formatted == "1.50"
        assert result.start.line == 1
        assert result.target == TextPosition(1, 14)

    def test_from_settings(self):
        settings = Settings(journal=JournalSettings(time_format="%I:%M %p"))
        assert DurationCalculator.from_settings(settings).time_format == "%I:%M %p"


class TestSelectionErrors:
    @pytest.mark.parametrize("count", [0, 2, 4])
    def test_wrong_selection_count(self, calculator, one_line_document, count):
        text, later, earlier, target = one_line_document
        selections = [later, earlier, target, target][:count]

        with pytest.raises(InvalidSelectionCountError) as exc_info:
            calculator.compute(selections, text)

        assert exc_info.value.count == count
        assert exc_info.value.details == {"count": count}

    def test_three_blanks_missing_start(self, calculator):
        text = "\n\n\n"
        selections = [TextPosition(0, 0), TextPosition(1, 0), TextPosition(2, 0)]

        with pytest.raises(MissingStartError):
            calculator.compute(selections, text)

    def test_one_time_missing_end(self, calculator):
        text = "09:30\n\n"
        selections = [TextPosition(0, 2), TextPosition(1, 0), TextPosition(2, 0)]

        with pytest.raises(MissingEndError) as exc_info:
            calculator.compute(selections, text)

        assert exc_info.value.details == {"start": "09:30"}

    def test_three_times_missing_target(self, calculator):
        text = "09:00 10:00 11:00"
        selections = [TextPosition(0, 1), TextPosition(0, 7), TextPosition(0, 13)]

        with pytest.raises(MissingTargetError):
            calculator.compute(selections, text)

    def test_unparsable_time_is_ambiguous(self, calculator):
        text = "from 99:99 to 10:00 = "
        selections = [TextPosition(0, 6), TextPosition(0, 15), TextPosition(0, 22)]

        with pytest.raises(AmbiguousSelectionError) as exc_info:
            calculator.compute(selections, text)

        assert exc_info.value.word == "99:99"


class TestClassify:
    def test_time_selection(self, calculator):
        classified = calculator.classify(TextPosition(0, 6), ["from 14:00 to"])

        assert classified.role is SelectionRole.TIME
        assert classified.word == "14:00"
        assert classified.token.source_span == (5, 10)

    def test_word_without_digits_is_target(self, calculator):
        classified = calculator.classify(TextPosition(0, 1), ["hello world"])

        assert classified.role is SelectionRole.TARGET
        assert classified.token is None

    def test_negative_line_is_target(self, calculator):
        classified = calculator.classify(TextPosition(-1, 0), ["09:00"])
        assert classified.role is SelectionRole.TARGET


def test_hours_between_is_absolute():
    assert hours_between(TimeToken(14, 0), TimeToken(9, 30)) == Decimal("4.50")
    assert hours_between(TimeToken(0, 0), TimeToken(23, 59)) == Decimal("23.98")


def test_compute_duration_helper():
    text = "14:00 - 09:30 = "
    result = compute_duration(
        [TextPosition(0, 0), TextPosition(0, 8), TextPosition(0, 16)], text
    )
    assert result.to_dict() == {
        "start": "09:30",
        "end": "14:00",
        "hours": "4.50",
        "target": {"line": 0, "character": 16},
    }


def test_selections_from_strings():
    assert selections_from_strings(["0:6", "2:0"]) == [TextPosition(0, 6), TextPosition(2, 0)]
    with pytest.raises(ValueError):
        selections_from_strings(["06"])


def test_document_lines_split_on_newline_only():
    assert document_lines("a\rb\x0cc d\ne") == ["a\rb\x0cc d", "e"]
    assert document_lines("a\n") == ["a", ""]
