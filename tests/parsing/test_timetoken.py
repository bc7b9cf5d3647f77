"""Tests for clock-time word location and parsing."""

from datetime import datetime

import pytest

from daybook.parsing.models import TimeToken
from daybook.parsing.timetoken import (
    apply_meridiem,
    find_time_word,
    format_time,
    parse_time_word,
    split_meridiem,
)


class TestFindTimeWord:
    def test_cursor_inside_time(self):
        assert find_time_word("from 14:00 to 09:30 = ", 6) == (5, 10, "14:00")

    def test_cursor_at_word_edges(self):
        line = "from 14:00 to 09:30 = "
        assert find_time_word(line, 10) == (5, 10, "14:00")
        assert find_time_word(line, 14) == (14, 19, "09:30")

    def test_blank_position_is_not_a_time(self):
        assert find_time_word("from 14:00 to 09:30 = ", 22) is None
        assert find_time_word("", 0) is None

    def test_meridiem_is_part_of_the_word(self):
        assert find_time_word("at 9:30 pm we left", 4) == (3, 10, "9:30 pm")

    def test_glued_digits(self):
        assert find_time_word("930 - 1223", 8) == (6, 10, "1223")


class TestParseTimeWord:
    @pytest.mark.parametrize(
        "word,expected",
        [
            ("14:00", (14, 0)),
            ("09:30", (9, 30)),
            ("9:30", (9, 30)),
            ("930", (9, 30)),
            ("1223", (12, 23)),
            ("7", (7, 0)),
            ("9:30 pm", (21, 30)),
            ("9:30am", (9, 30)),
            ("2 PM", (14, 0)),
            ("12am", (0, 0)),
            ("12pm", (12, 0)),
        ],
    )
    def test_accepted_words(self, word, expected):
        token = parse_time_word(word)

        assert token is not None
        assert (token.hour, token.minute) == expected

    @pytest.mark.parametrize("word", ["99:99", "25", "13pm", "0am", "", "   "])
    def test_rejected_words(self, word):
        assert parse_time_word(word) is None

    def test_configured_format_is_tried_first(self):
        token = parse_time_word("9.30", "%H.%M")
        assert (token.hour, token.minute) == (9, 30)

    def test_twelve_hour_format(self):
        token = parse_time_word("09:30 PM", "%I:%M %p")
        assert token.isoformat() == "21:30"

    def test_span_and_line_are_carried(self):
        token = parse_time_word("14:00", span=(5, 10), line=3)

        assert token.source_span == (5, 10)
        assert token.line == 3

    def test_tokens_order_chronologically(self):
        early = parse_time_word("930", span=(0, 3))
        late = parse_time_word("14:00", span=(8, 13))

        assert early < late
        assert early == TimeToken(9, 30)


class TestMeridiem:
    def test_split(self):
        assert split_meridiem("9:30 PM") == ("9:30", "pm")
        assert split_meridiem("14:00") == ("14:00", None)

    def test_apply(self):
        assert apply_meridiem(12, "am") == 0
        assert apply_meridiem(12, "pm") == 12
        assert apply_meridiem(1, "pm") == 13
        assert apply_meridiem(15, None) == 15
        assert apply_meridiem(15, "pm") is None


class TestTimeToken:
    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            TimeToken(24, 0)

    def test_isoformat_and_str(self):
        assert TimeToken(9, 5).isoformat() == "09:05"
        assert str(TimeToken(23, 59)) == "23:59"


def test_format_time():
    moment = datetime(2024, 3, 4, 9, 5)

    assert format_time(moment) == "09:05"
    assert format_time(moment, "%I:%M %p") == "09:05 AM"
