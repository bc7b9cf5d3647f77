"""Typed settings for daybook.

The settings file is JSON validated by Pydantic models, so the parsers and
the CLI only ever see checked values: the locale tag used for weekday names
and numeric dates, the canonical time format read by the duration command,
the template used to print the current time, and the flag markers split from
memos. ``DAYBOOK_*`` environment variables override the file.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from daybook.errors import InvalidConfigError
from daybook.parsing.models import SameWeekdayPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".daybook" / "config.json"

_LOCALE_TAG = re.compile(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$")

# Environment variable -> journal setting; list settings are comma-separated
ENV_OVERRIDES: Dict[str, str] = {
    "DAYBOOK_LOCALE": "locale",
    "DAYBOOK_TIME_FORMAT": "time_format",
    "DAYBOOK_TIME_TEMPLATE": "time_template",
    "DAYBOOK_SAME_WEEKDAY_POLICY": "same_weekday_policy",
    "DAYBOOK_FLAG_MARKERS": "flag_markers",
}
LIST_SETTINGS = frozenset({"flag_markers"})


class JournalSettings(BaseModel):
    """Options for journal input and durations."""

    locale: str = Field("en-US", description="Locale tag for weekday names and numeric dates")
    time_format: str = Field("%H:%M", description="Canonical strftime format of times in pages")
    time_template: str = Field("%H:%M", description="Template used when printing the current time")
    flag_markers: List[str] = Field(default_factory=lambda: ["#"], description="Memo flag prefixes")
    same_weekday_policy: SameWeekdayPolicy = Field(
        SameWeekdayPolicy.SKIP,
        description="'skip' moves a week when today is the named weekday; 'today' stays",
    )

    @field_validator("locale")
    def _validate_locale(cls, value: str) -> str:
        if not _LOCALE_TAG.match(value):
            raise ValueError(f"locale must be a tag like en-US, got {value!r}")
        return value

    @field_validator("time_format", "time_template")
    def _validate_format(cls, value: str) -> str:
        if "%" not in value:
            raise ValueError("format must contain at least one strftime directive")
        return value

    @field_validator("flag_markers")
    def _validate_markers(cls, value: List[str]) -> List[str]:
        markers = [marker for marker in value if marker and not marker.isspace()]
        if not markers:
            raise ValueError("flag_markers must contain at least one non-blank marker")
        return markers


class Settings(BaseModel):
    """Contents of the settings file."""

    journal: JournalSettings = Field(default_factory=JournalSettings)


def validate_settings(payload: Mapping[str, Any], source: Optional[Path] = None) -> Settings:
    """Build ``Settings`` from raw data, raising ``InvalidConfigError``."""
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        details = {"path": str(source)} if source else {}
        raise InvalidConfigError(f"Invalid settings: {exc}", details=details) from exc


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Read the settings file; ``FileNotFoundError`` when it does not exist."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"No settings file at {path}") from None
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(
            f"Settings at {path} are not valid JSON: {exc}", details={"path": str(path)}
        ) from exc
    return validate_settings(payload, path)


def save_settings(settings: Settings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.model_dump(mode="json"), indent=2), encoding="utf-8")
    logger.debug(f"Saved settings to {path}")


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Load (or create) the settings file, apply overrides and persist the result.

    Precedence, lowest first: file contents, ``overrides``, environment.
    """
    current = load_settings(path) if path.exists() else Settings()
    payload = merge_settings(current.model_dump(mode="json"), overrides or {})
    payload = merge_settings(payload, {"journal": env_overrides()})
    resolved = validate_settings(payload, path)
    save_settings(resolved, path)
    return resolved


def effective_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Stored settings (defaults when absent) with the environment applied.

    Unlike ``bootstrap_settings`` nothing is written back to ``path``.
    """
    stored = load_settings(path) if path.exists() else Settings()
    payload = merge_settings(stored.model_dump(mode="json"), {"journal": env_overrides()})
    return validate_settings(payload, path)


def merge_settings(base: Dict[str, Any], changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``changes`` onto a copy of ``base``."""
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Journal settings taken from ``DAYBOOK_*`` environment variables."""
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for variable, name in ENV_OVERRIDES.items():
        raw = environ.get(variable)
        if raw is None:
            continue
        values[name] = split_list(raw) if name in LIST_SETTINGS else raw
        logger.debug(f"{variable} overrides journal.{name}")
    return values


def split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]
