"""Command layer composing the parsers with editor-side collaborators."""

from daybook.commands.pipeline import CANCELLED, Outcome, OutcomeStatus, run_pipeline
from daybook.commands.journal import (
    ContentInjector,
    DocumentWriter,
    EditorSnapshot,
    JournalCommands,
    PageStore,
    UserInterface,
)

__all__ = [
    "CANCELLED",
    "Outcome",
    "OutcomeStatus",
    "run_pipeline",
    "ContentInjector",
    "DocumentWriter",
    "EditorSnapshot",
    "JournalCommands",
    "PageStore",
    "UserInterface",
]
