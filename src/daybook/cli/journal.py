"""Journal CLI commands.

Commands:
    daybook journal parse "next wednesday standup #work" --today 2024-03-04
    daybook journal duration notes.md -s 0:0 -s 0:8 -s 0:16 --write
    daybook journal time --template "%H:%M"
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from daybook.configuration.settings import DEFAULT_CONFIG_PATH, Settings, effective_settings
from daybook.errors import DaybookError, InvalidConfigError, format_error_for_cli
from daybook.parsing.duration import DurationCalculator, document_lines, selections_from_strings
from daybook.parsing.input_parser import InputParser
from daybook.parsing.models import TextPosition
from daybook.parsing.timetoken import format_time

logger = logging.getLogger(__name__)

console = Console()
journal_app = typer.Typer(help="Journal input and duration commands")


def _get_settings(config_path: Path) -> Settings:
    """Settings from ``config_path`` (defaults when missing) plus ``DAYBOOK_*`` overrides."""
    return effective_settings(config_path)


def insert_text(text: str, addition: str, position: TextPosition) -> str:
    """Return ``text`` with ``addition`` inserted at ``position``."""
    lines = document_lines(text)
    while len(lines) <= position.line:
        lines.append("")
    line = lines[position.line]
    column = min(position.character, len(line))
    lines[position.line] = line[:column] + addition + line[column:]
    return "\n".join(lines)


class FileDocumentWriter:
    """Document writer that inserts text into a file on disk."""

    async def insert_text(self, document: Path, text: str, position: TextPosition) -> Path:
        content = document.read_text(encoding="utf-8")
        document.write_text(insert_text(content, text, position), encoding="utf-8")
        logger.debug(f"Inserted {text!r} into {document} at {position}")
        return document


@journal_app.command("parse")
def parse_command(
    text: str = typer.Argument("", help="Day, offset, weekday phrase and/or memo"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Locale tag, e.g. de-DE"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config"),
) -> None:
    """Show how journal input is interpreted and which day it addresses."""
    try:
        settings = _get_settings(config_path)
    except InvalidConfigError as e:
        typer.echo(format_error_for_cli(e), err=True)
        raise typer.Exit(1)

    try:
        reference = date.fromisoformat(today) if today else date.today()
    except ValueError:
        typer.echo(f"Error: --today must be YYYY-MM-DD, got {today!r}", err=True)
        raise typer.Exit(1)

    parser = InputParser.from_settings(settings)
    parsed = parser.parse(text, today=reference, locale=locale)
    resolved = parsed.resolve(reference)

    if output_json:
        payload = parsed.to_dict()
        payload["date"] = resolved.isoformat()
        print(json.dumps(payload))
        return

    table = Table(title="Journal input")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Kind", parsed.kind.value)
    table.add_row("Date", resolved.isoformat())
    table.add_row("Offset", "" if parsed.offset is None else f"{parsed.offset:+d}")
    table.add_row("Memo", parsed.memo)
    table.add_row("Flags", ", ".join(sorted(parsed.flags)))
    console.print(table)


@journal_app.command("duration")
def duration_command(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to read"),
    selections: List[str] = typer.Option(
        ..., "--select", "-s", help="Cursor position LINE:CHARACTER (zero-based), three times"
    ),
    time_format: Optional[str] = typer.Option(None, "--time-format", help="Canonical time format"),
    write: bool = typer.Option(False, "--write", "-w", help="Insert the duration at the target"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config"),
) -> None:
    """Compute the hours between two selected times in a document."""
    try:
        positions = selections_from_strings(selections)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    try:
        settings = _get_settings(config_path)
        calculator = DurationCalculator.from_settings(settings)
        result = calculator.compute(
            positions, document.read_text(encoding="utf-8"), time_format=time_format
        )
    except DaybookError as e:
        if output_json:
            print(json.dumps({"error": e.to_dict()}))
        else:
            typer.echo(format_error_for_cli(e), err=True)
        raise typer.Exit(1)

    if write:
        asyncio.run(FileDocumentWriter().insert_text(document, result.formatted, result.target))

    if output_json:
        print(json.dumps(result.to_dict()))
    else:
        typer.echo(f"{result.start} -> {result.end}: {result.formatted} h")


@journal_app.command("time")
def time_command(
    template: Optional[str] = typer.Option(None, "--template", "-t", help="strftime template"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config"),
) -> None:
    """Print the current time formatted with the configured template."""
    try:
        settings = _get_settings(config_path)
    except InvalidConfigError as e:
        typer.echo(format_error_for_cli(e), err=True)
        raise typer.Exit(1)
    typer.echo(format_time(datetime.now(), template or settings.journal.time_template))
