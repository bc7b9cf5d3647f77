"""Command line entry points for daybook."""

import logging

from typer import Option, Typer

from .journal import journal_app
from ..configuration.cli import config_app


cli = Typer(help="daybook command line tools")
cli.add_typer(journal_app, name="journal")
cli.add_typer(config_app, name="config")


@cli.callback()
def main(
    verbose: bool = Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Journal page addressing and duration tools."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


__all__ = ["cli", "journal_app", "config_app"]


if __name__ == "__main__":
    cli()
