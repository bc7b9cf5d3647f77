"""Messages shown to the journal user when a command fails.

Each error code maps to one sentence describing what went wrong and one
hint on how to fix it. Editor integrations show ``format_error_for_user``;
the CLI prints ``format_error_for_cli``.
"""

from __future__ import annotations

from typing import Any, Tuple


ERROR_MESSAGES: dict[str, str] = {
    # Duration
    "DURATION_ERROR": "The duration couldn't be computed.",
    "INVALID_SELECTION_COUNT": (
        "To compute a duration, select the two times as well as the location "
        "where to print it."
    ),
    "AMBIGUOUS_SELECTION": "One of the selected times couldn't be read.",
    "MISSING_START": "No valid start time selected.",
    "MISSING_END": "No valid end time selected.",
    "MISSING_TARGET": "No valid target selected for printing the duration.",
    # Journal commands
    "COMMAND_ERROR": "The journal page couldn't be opened or updated.",
    # Settings
    "CONFIGURATION_ERROR": "The daybook settings couldn't be used.",
    "INVALID_CONFIG": "The daybook settings file is invalid.",
    "DAYBOOK_ERROR": "Something went wrong in daybook.",
}

RECOVERY_SUGGESTIONS: dict[str, str] = {
    "DURATION_ERROR": "Select two times and one empty location, then retry.",
    "INVALID_SELECTION_COUNT": "Use exactly three cursors: start, end and target.",
    "AMBIGUOUS_SELECTION": "Write times like 09:30, 930 or 9:30 pm.",
    "MISSING_START": "Place two of the cursors on times.",
    "MISSING_END": "Place a second cursor on the end time.",
    "MISSING_TARGET": "Place one cursor on blank space where the duration should go.",
    "COMMAND_ERROR": "Check that the journal directory exists and is writable.",
    "CONFIGURATION_ERROR": "Inspect the settings with: daybook config show",
    "INVALID_CONFIG": "Fix the value with 'daybook config set' or recreate it with 'daybook config init'.",
    "DAYBOOK_ERROR": "Run the command again with --verbose and report the log.",
}

# Built-in exceptions that can escape an editor collaborator
_BUILTIN_MESSAGES: dict[type, str] = {
    FileNotFoundError: "The journal file wasn't found.",
    PermissionError: "The journal file couldn't be accessed.",
    UnicodeDecodeError: "The document isn't valid UTF-8 text.",
    ValueError: "The input couldn't be understood.",
}


def _code(error: Any) -> str:
    if isinstance(error, str):
        return error
    return getattr(error, "code", "DAYBOOK_ERROR")


def get_user_message(error: Any) -> str:
    """Message for an error or an error code string."""
    return ERROR_MESSAGES.get(_code(error), ERROR_MESSAGES["DAYBOOK_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    return RECOVERY_SUGGESTIONS.get(_code(error), RECOVERY_SUGGESTIONS["DAYBOOK_ERROR"])


def describe(error: Any) -> Tuple[str, str]:
    """``(message, suggestion)`` pair for ``error``."""
    return get_user_message(error), get_recovery_suggestion(error)


def describe_exception(exception: BaseException, action: str | None = None) -> str:
    """One-line message for an exception that carries no error code."""
    message = next(
        (text for kind, text in _BUILTIN_MESSAGES.items() if isinstance(exception, kind)),
        "An unexpected error occurred.",
    )
    return f"{message} ({action} failed)" if action else message


def format_error_for_user(error: Any) -> str:
    """Message and suggestion separated by a blank line."""
    if isinstance(error, BaseException) and not hasattr(error, "code"):
        return describe_exception(error)
    message, suggestion = describe(error)
    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Multi-line rendering with the error code and any details."""
    message, suggestion = describe(error)
    text = f"Error [{_code(error)}]: {message}\n\nSuggestion: {suggestion}"
    details = getattr(error, "details", None)
    if details:
        text += "\n\nDetails:\n" + "\n".join(f"  {key}: {value}" for key, value in details.items())
    return text


__all__ = [
    "ERROR_MESSAGES",
    "RECOVERY_SUGGESTIONS",
    "describe",
    "describe_exception",
    "format_error_for_cli",
    "format_error_for_user",
    "get_recovery_suggestion",
    "get_user_message",
]
