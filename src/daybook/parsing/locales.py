"""Locale vocabularies for journal input parsing.

Weekday names, weekday-phrase direction words, relative day words and the
numeric date order accepted for a locale tag such as ``"de-DE"``. English
words are always accepted in addition to the locale's own vocabulary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet


@dataclass(frozen=True)
class LocaleVocabulary:
    """Words a locale uses for weekday phrases and relative days."""

    weekdays: Dict[str, int]
    next_words: FrozenSet[str]
    last_words: FrozenSet[str]
    relative_days: Dict[str, int]
    # Order of a numeric ``a/b/yyyy`` or ``a.b.yyyy`` date: "dmy" or "mdy"
    numeric_date_order: str = "dmy"


def _names(*groups: tuple) -> Dict[str, int]:
    mapping: Dict[str, int] = {}
    for index, names in enumerate(groups):
        for name in names:
            mapping[name] = index
    return mapping


ENGLISH = LocaleVocabulary(
    weekdays=_names(
        ("monday", "mon"),
        ("tuesday", "tue", "tues"),
        ("wednesday", "wed"),
        ("thursday", "thu", "thur", "thurs"),
        ("friday", "fri"),
        ("saturday", "sat"),
        ("sunday", "sun"),
    ),
    next_words=frozenset({"next"}),
    last_words=frozenset({"last"}),
    relative_days={"today": 0, "tomorrow": 1, "yesterday": -1},
    numeric_date_order="dmy",
)

_VOCABULARIES: Dict[str, LocaleVocabulary] = {
    "en": ENGLISH,
    "de": LocaleVocabulary(
        weekdays=_names(
            ("montag", "mo"),
            ("dienstag", "di"),
            ("mittwoch", "mi"),
            ("donnerstag", "do"),
            ("freitag", "fr"),
            ("samstag", "sonnabend", "sa"),
            ("sonntag", "so"),
        ),
        next_words=frozenset({"nächster", "nächsten", "nächste", "naechster", "naechsten"}),
        last_words=frozenset({"letzter", "letzten", "letzte", "vergangenen"}),
        relative_days={"heute": 0, "morgen": 1, "gestern": -1},
    ),
    "fr": LocaleVocabulary(
        weekdays=_names(
            ("lundi",),
            ("mardi",),
            ("mercredi",),
            ("jeudi",),
            ("vendredi",),
            ("samedi",),
            ("dimanche",),
        ),
        next_words=frozenset({"prochain"}),
        last_words=frozenset({"dernier"}),
        relative_days={"aujourd'hui": 0, "demain": 1, "hier": -1},
    ),
    "es": LocaleVocabulary(
        weekdays=_names(
            ("lunes",),
            ("martes",),
            ("miércoles", "miercoles"),
            ("jueves",),
            ("viernes",),
            ("sábado", "sabado"),
            ("domingo",),
        ),
        next_words=frozenset({"próximo", "proximo"}),
        last_words=frozenset({"último", "ultimo", "pasado"}),
        relative_days={"hoy": 0, "mañana": 1, "manana": 1, "ayer": -1},
    ),
    "it": LocaleVocabulary(
        weekdays=_names(
            ("lunedì", "lunedi"),
            ("martedì", "martedi"),
            ("mercoledì", "mercoledi"),
            ("giovedì", "giovedi"),
            ("venerdì", "venerdi"),
            ("sabato",),
            ("domenica",),
        ),
        next_words=frozenset({"prossimo", "prossima"}),
        last_words=frozenset({"scorso", "scorsa"}),
        relative_days={"oggi": 0, "domani": 1, "ieri": -1},
    ),
    "nl": LocaleVocabulary(
        weekdays=_names(
            ("maandag", "ma"),
            ("dinsdag", "di"),
            ("woensdag", "wo"),
            ("donderdag", "do"),
            ("vrijdag", "vr"),
            ("zaterdag", "za"),
            ("zondag", "zo"),
        ),
        next_words=frozenset({"volgende"}),
        last_words=frozenset({"vorige", "afgelopen"}),
        relative_days={"vandaag": 0, "morgen": 1, "gisteren": -1},
    ),
}

# Region tags that write numeric dates month-first
_MONTH_FIRST_TAGS = frozenset({"en-us", "en-ph", "en-ca"})


def language_of(locale: str | None) -> str:
    """Primary language subtag of a locale tag ("de-AT" -> "de")."""
    if not locale:
        return "en"
    return locale.replace("_", "-").split("-", 1)[0].lower() or "en"


def numeric_date_order(locale: str | None) -> str:
    """Return ``"mdy"`` for month-first locales, ``"dmy"`` otherwise."""
    tag = (locale or "en-US").replace("_", "-").lower()
    if tag in _MONTH_FIRST_TAGS or tag == "en":
        return "mdy"
    return "dmy"


def vocabulary_for(locale: str | None) -> LocaleVocabulary:
    """Merged vocabulary for ``locale``; English words are always included."""
    language = language_of(locale)
    native = _VOCABULARIES.get(language)
    order = numeric_date_order(locale)
    if native is None or native is ENGLISH:
        return LocaleVocabulary(
            weekdays=dict(ENGLISH.weekdays),
            next_words=ENGLISH.next_words,
            last_words=ENGLISH.last_words,
            relative_days=dict(ENGLISH.relative_days),
            numeric_date_order=order,
        )
    return LocaleVocabulary(
        weekdays={**ENGLISH.weekdays, **native.weekdays},
        next_words=ENGLISH.next_words | native.next_words,
        last_words=ENGLISH.last_words | native.last_words,
        relative_days={**ENGLISH.relative_days, **native.relative_days},
        numeric_date_order=order,
    )


__all__ = [
    "LocaleVocabulary",
    "ENGLISH",
    "language_of",
    "numeric_date_order",
    "vocabulary_for",
]
