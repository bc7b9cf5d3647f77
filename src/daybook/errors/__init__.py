"""Error types raised by daybook.

Every failure the core reports is its own ``DaybookError`` subclass with a
stable ``code``. The command layer turns the code into a specific message
instead of showing a traceback:

    try:
        result = calculator.compute(selections, text)
    except DaybookError as e:
        ui.show_error(format_error_for_user(e))
"""

from __future__ import annotations

from daybook.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)


class DaybookError(Exception):
    """Base class of all daybook errors.

    ``code`` selects the user-facing message; ``details`` carries the values
    that explain this particular failure (selection count, offending word).
    """

    code: str = "DAYBOOK_ERROR"
    default_message: str = "daybook failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.message = str(self)
        self.details = dict(details or {})
        self._user_message = user_message

    @property
    def user_message(self) -> str:
        return self._user_message or get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
        }


# ---------------------------------------------------------------------------
# Duration
# ---------------------------------------------------------------------------


class DurationError(DaybookError):
    code = "DURATION_ERROR"
    default_message = "Duration computation failed"


class InvalidSelectionCountError(DurationError):
    """Other than exactly three selections were supplied."""

    code = "INVALID_SELECTION_COUNT"

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Expected 3 selections, got {count}", details={"count": count})


class AmbiguousSelectionError(DurationError):
    """The selections are not two readable times and one target.

    Raised directly with ``word`` when a time-shaped word cannot be decoded;
    the ``Missing*`` subclasses name the piece that is absent.
    """

    code = "AMBIGUOUS_SELECTION"
    default_message = "Selections are not two times and one target"

    def __init__(self, word: str | None = None, *, details: dict | None = None) -> None:
        self.word = word
        if word is None:
            super().__init__(details=details)
        else:
            super().__init__(f"Cannot parse {word!r} as a time", details={"word": word})


class MissingStartError(AmbiguousSelectionError):
    code = "MISSING_START"
    default_message = "No valid start time selected"


class MissingEndError(AmbiguousSelectionError):
    code = "MISSING_END"
    default_message = "No valid end time selected"


class MissingTargetError(AmbiguousSelectionError):
    """Every selection is a time, so there is nowhere to print the result."""

    code = "MISSING_TARGET"
    default_message = "No valid target selected for printing the duration"


# ---------------------------------------------------------------------------
# Commands and settings
# ---------------------------------------------------------------------------


class CommandError(DaybookError):
    """An editor collaborator (page store, injector, writer) failed."""

    code = "COMMAND_ERROR"
    default_message = "Journal command failed"


class ConfigurationError(DaybookError):
    code = "CONFIGURATION_ERROR"
    default_message = "Settings error"


class InvalidConfigError(ConfigurationError):
    """The settings file is unreadable or fails validation."""

    code = "INVALID_CONFIG"
    default_message = "Invalid settings"


__all__ = [
    "DaybookError",
    "DurationError",
    "InvalidSelectionCountError",
    "AmbiguousSelectionError",
    "MissingStartError",
    "MissingEndError",
    "MissingTargetError",
    "CommandError",
    "ConfigurationError",
    "InvalidConfigError",
    "format_error_for_cli",
    "format_error_for_user",
]
