"""Main Typer application: imports and registers all CLI commands.

Entry point: ``caryatid`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer

from caryatid import __version__
from caryatid.cli.commands.add import add_cmd
from caryatid.cli.commands.create_test_box import create_test_box_cmd
from caryatid.cli.commands.delete import delete_cmd
from caryatid.cli.commands.query import query_cmd
from caryatid.cli.commands.show import show_cmd
from caryatid.config import config

app = typer.Typer(
    name="caryatid",
    help="Caryatid: manage Vagrant box catalogs on local disks and S3.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="show", help="Show every box in a catalog.")(show_cmd)
app.command(name="query", help="Show boxes matching a version/provider query.")(query_cmd)
app.command(name="add", help="Add a .box file to a catalog.")(add_cmd)
app.command(name="delete", help="Delete boxes matching a version/provider query.")(delete_cmd)
app.command(name="create-test-box", help="Write a minimal box file for testing.")(create_test_box_cmd)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"caryatid {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level; defaults to CARYATID_LOG_LEVEL."
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    logging.basicConfig(
        level=(log_level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
