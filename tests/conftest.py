"""Shared test configuration."""

from __future__ import annotations

import pytest


_ENV_VARS = (
    "DAYBOOK_LOCALE",
    "DAYBOOK_TIME_FORMAT",
    "DAYBOOK_TIME_TEMPLATE",
    "DAYBOOK_SAME_WEEKDAY_POLICY",
    "DAYBOOK_FLAG_MARKERS",
)


@pytest.fixture(autouse=True)
def _clean_daybook_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment overrides out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
