"""Journal commands wired to editor-side collaborators.

The commands compose the pure parsers with the collaborators that own the
user interface, the journal pages on disk and the document being edited.
Those collaborators are injected as ``Protocol`` implementations; the
commands never reach for ambient editor state. The active document and its
cursors are passed in explicitly as an ``EditorSnapshot``.

Every command returns an ``Outcome``. Failures are shown to the user through
``UserInterface.show_error``; cancelled prompts end the command silently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional, Protocol, Sequence

from daybook.commands.pipeline import Outcome, run_pipeline
from daybook.configuration.settings import Settings
from daybook.errors import format_error_for_user
from daybook.parsing.duration import DurationCalculator
from daybook.parsing.input_parser import InputParser, entry_input
from daybook.parsing.models import DurationResult, Input, TextPosition
from daybook.parsing.timetoken import format_time

logger = logging.getLogger(__name__)

PROMPT_DAY = "Enter day or memo (with flags)"
PROMPT_NOTE = "Enter title for new note"


# ---------------------------------------------------------------------------
# Collaborator Protocols
# ---------------------------------------------------------------------------


class UserInterface(Protocol):
    """Prompts and document display."""

    async def get_user_input(self, prompt: str) -> Any:
        """Return the typed text, or ``CANCELLED`` when dismissed."""
        ...

    async def show_document(self, document: Any) -> Any:
        """Open ``document`` in an editor and return the editor."""
        ...

    def show_error(self, message: str) -> None:
        ...


class PageStore(Protocol):
    """Locates and loads journal pages; owns path construction."""

    async def load_entry(self, parsed: Input, day: date) -> Any:
        ...

    async def load_note(self, parsed: Input, day: date, content: str) -> Any:
        ...


class ContentInjector(Protocol):
    """Writes parsed input into pages."""

    async def inject_input(self, document: Any, parsed: Input) -> Any:
        ...

    async def build_note_content(self, parsed: Input) -> str:
        ...


class DocumentWriter(Protocol):
    """Inserts text into an open document."""

    async def insert_text(self, document: Any, text: str, position: TextPosition) -> Any:
        ...


@dataclass(frozen=True)
class EditorSnapshot:
    """The active document and its cursors at command time."""

    document: Any
    text: str
    selections: Sequence[TextPosition]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class JournalCommands:
    """Journal commands: open pages, create notes, print times and durations."""

    def __init__(
        self,
        ui: UserInterface,
        store: PageStore,
        injector: ContentInjector,
        writer: DocumentWriter,
        *,
        settings: Optional[Settings] = None,
        parser: Optional[InputParser] = None,
        calculator: Optional[DurationCalculator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.ui = ui
        self.store = store
        self.injector = injector
        self.writer = writer
        self.settings = settings or Settings()
        self.parser = parser or InputParser.from_settings(self.settings)
        self.calculator = calculator or DurationCalculator.from_settings(self.settings)
        self.clock = clock

    async def process_input(self, today: Optional[date] = None) -> Outcome:
        """Prompt for a day or memo and open the matching journal page.

        Supported values are explicit dates (ISO format), offsets (``+``/``-``
        prefix and ``0``) and weekdays (``next wednesday``).
        """
        logger.debug("Entering process_input()")
        today = today or self.clock().date()

        def parse(text: str) -> Input:
            return self.parser.parse(text, today=today)

        async def load_page(parsed: Input) -> Any:
            return await self._load_page(parsed, today)

        outcome = await run_pipeline(
            PROMPT_DAY,
            self.ui.get_user_input,
            parse,
            load_page,
            self.ui.show_document,
            name="process_input",
        )
        return self._report(outcome)

    async def show_entry(self, offset: int, today: Optional[date] = None) -> Outcome:
        """Open the page ``offset`` days from today without prompting."""
        logger.debug(f"Entering show_entry({offset})")
        today = today or self.clock().date()

        async def load_page(parsed: Input) -> Any:
            return await self._load_page(parsed, today)

        outcome = await run_pipeline(
            entry_input(offset),
            load_page,
            self.ui.show_document,
            name="show_entry",
        )
        return self._report(outcome)

    async def show_note(self, today: Optional[date] = None) -> Outcome:
        """Prompt for a title and open a new note for the addressed day."""
        logger.debug("Entering show_note()")
        today = today or self.clock().date()

        def parse(text: str) -> Input:
            return self.parser.parse(text, today=today)

        async def load_note(parsed: Input) -> Any:
            content = await self.injector.build_note_content(parsed)
            return await self.store.load_note(parsed, parsed.resolve(today), content)

        outcome = await run_pipeline(
            PROMPT_NOTE,
            self.ui.get_user_input,
            parse,
            load_note,
            self.ui.show_document,
            name="show_note",
        )
        return self._report(outcome)

    async def compute_and_print_duration(self, snapshot: EditorSnapshot) -> Outcome:
        """Compute the hours between two selected times and print them.

        Requires three selections: two times (``hh:mm`` or glued like
        ``1223``) and the blank location where the duration is written.
        """
        logger.debug("Entering compute_and_print_duration()")

        def compute(current: EditorSnapshot) -> DurationResult:
            return self.calculator.compute(current.selections, current.text)

        async def write(result: DurationResult) -> DurationResult:
            await self.writer.insert_text(snapshot.document, result.formatted, result.target)
            return result

        outcome = await run_pipeline(snapshot, compute, write, name="compute_and_print_duration")
        return self._report(outcome)

    async def print_time(
        self,
        document: Any,
        position: TextPosition,
        now: Optional[datetime] = None,
    ) -> Outcome:
        """Insert the current time, formatted with the time template."""
        logger.debug("Entering print_time()")
        template = self.settings.journal.time_template

        def render(moment: datetime) -> str:
            return format_time(moment, template)

        async def write(text: str) -> str:
            await self.writer.insert_text(document, text, position)
            return text

        outcome = await run_pipeline(now or self.clock(), render, write, name="print_time")
        return self._report(outcome)

    # -----------------------------------------------------------------------
    # Private
    # -----------------------------------------------------------------------

    async def _load_page(self, parsed: Input, today: date) -> Any:
        document = await self.store.load_entry(parsed, parsed.resolve(today))
        return await self.injector.inject_input(document, parsed)

    def _report(self, outcome: Outcome) -> Outcome:
        if outcome.is_failed:
            logger.error(f"Command failed: {outcome.error}")
            self.ui.show_error(format_error_for_user(outcome.error))
        return outcome


__all__ = [
    "UserInterface",
    "PageStore",
    "ContentInjector",
    "DocumentWriter",
    "EditorSnapshot",
    "JournalCommands",
    "PROMPT_DAY",
    "PROMPT_NOTE",
]
