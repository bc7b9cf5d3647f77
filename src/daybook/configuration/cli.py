"""``daybook config`` commands: create, inspect and edit the settings file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from daybook.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    LIST_SETTINGS,
    JournalSettings,
    Settings,
    bootstrap_settings,
    load_settings,
    merge_settings,
    save_settings,
    split_list,
    validate_settings,
)
from daybook.errors import DaybookError, format_error_for_cli
from daybook.parsing.models import SameWeekdayPolicy

console = Console()
config_app = typer.Typer(help="Manage daybook settings")


def _fail(error: DaybookError) -> NoReturn:
    typer.echo(format_error_for_cli(error), err=True)
    raise typer.Exit(1)


def _setting_name(key: str) -> str:
    """Accept ``locale`` as well as ``journal.locale``."""
    name = key.split(".", 1)[1] if key.startswith("journal.") else key
    if name not in JournalSettings.model_fields:
        known = ", ".join(sorted(JournalSettings.model_fields))
        typer.echo(f"Unknown setting {key!r}; expected one of: {known}", err=True)
        raise typer.Exit(2)
    return name


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Settings file"),
    locale: Optional[str] = typer.Option(None, help="Locale tag, e.g. de-DE"),
    time_format: Optional[str] = typer.Option(None, help="Canonical time format, e.g. %H:%M"),
    same_weekday_policy: Optional[SameWeekdayPolicy] = typer.Option(
        None, help="Resolution of 'next <weekday>' on that weekday"
    ),
) -> None:
    """Create the settings file, or update it with the given values."""
    journal = {
        name: value
        for name, value in (
            ("locale", locale),
            ("time_format", time_format),
            ("same_weekday_policy", same_weekday_policy.value if same_weekday_policy else None),
        )
        if value is not None
    }
    try:
        settings = bootstrap_settings(path=config_path, overrides={"journal": journal})
    except DaybookError as e:
        _fail(e)
    typer.echo(f"Settings written to {config_path}")
    typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2))


@config_app.command("show")
def show_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Settings file"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print the stored settings."""
    try:
        settings = load_settings(config_path)
    except FileNotFoundError:
        typer.echo(f"No settings at {config_path}; create them with 'daybook config init'", err=True)
        raise typer.Exit(1)
    except DaybookError as e:
        _fail(e)

    if output_json:
        print(json.dumps(settings.model_dump(mode="json")))
        return

    table = Table(title=str(config_path))
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in settings.journal.model_dump(mode="json").items():
        shown = ", ".join(value) if isinstance(value, list) else str(value)
        table.add_row(f"journal.{name}", shown)
    console.print(table)


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Setting name, e.g. locale or journal.locale"),
    value: str = typer.Argument(..., help="New value; comma-separated for flag_markers"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Settings file"),
) -> None:
    """Change one journal setting."""
    name = _setting_name(key)
    try:
        current = load_settings(config_path) if config_path.exists() else Settings()
        new_value = split_list(value) if name in LIST_SETTINGS else value
        payload = merge_settings(current.model_dump(mode="json"), {"journal": {name: new_value}})
        updated = validate_settings(payload, config_path)
    except DaybookError as e:
        _fail(e)
    save_settings(updated, config_path)
    typer.echo(f"journal.{name} = {json.dumps(new_value)}")


@config_app.command("validate")
def validate_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Settings file"),
) -> None:
    """Check that the settings file exists and is valid."""
    try:
        settings = load_settings(config_path)
    except FileNotFoundError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)
    except DaybookError as e:
        _fail(e)
    typer.echo(f"✅ Settings valid ({settings.journal.locale}, {settings.journal.time_format})")
