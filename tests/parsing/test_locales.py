"""Tests for locale vocabularies."""

import pytest

from daybook.parsing.locales import ENGLISH, language_of, numeric_date_order, vocabulary_for


@pytest.mark.parametrize(
    "locale,language",
    [("de-AT", "de"), ("pt_BR", "pt"), ("EN", "en"), ("", "en"), (None, "en")],
)
def test_language_of(locale, language):
    assert language_of(locale) == language


@pytest.mark.parametrize(
    "locale,order",
    [("en-US", "mdy"), ("en", "mdy"), ("en_CA", "mdy"), ("en-GB", "dmy"), ("de-DE", "dmy")],
)
def test_numeric_date_order(locale, order):
    assert numeric_date_order(locale) == order


def test_native_words_merge_with_english():
    vocabulary = vocabulary_for("nl-NL")

    assert vocabulary.weekdays["vrijdag"] == 4
    assert vocabulary.weekdays["friday"] == 4
    assert {"next", "volgende"} <= vocabulary.next_words
    assert vocabulary.relative_days["gisteren"] == -1
    assert vocabulary.numeric_date_order == "dmy"


def test_english_vocabulary_is_not_mutated():
    vocabulary_for("de-DE").weekdays["extra"] = 0
    assert "extra" not in ENGLISH.weekdays
