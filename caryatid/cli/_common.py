"""Helpers shared by the CLI commands."""

from __future__ import annotations

import re
from pathlib import Path

import typer
from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from caryatid.core.manager import BackendManager
from caryatid.errors import CaryatidError
from caryatid.models.catalog import Catalog

console = Console()

_URI = re.compile(r"^[a-zA-Z0-9]+://")

CatalogOption = typer.Option(
    ...,
    "--catalog",
    "-c",
    help="URI of the Vagrant catalog, e.g. s3://bucket/box.json. A plain path is treated as a local file.",
)


def resolve_catalog_uri(catalog: str) -> str:
    """Return ``catalog`` unchanged if it is a URI, else an absolute ``file://`` URI."""
    if _URI.match(catalog):
        return catalog
    return Path(catalog).resolve().as_uri()


def get_manager(catalog: str) -> BackendManager:
    return BackendManager(resolve_catalog_uri(catalog))


def render_catalog(catalog: Catalog, title: str | None = None) -> Table:
    """One row per provider per version."""
    table = Table(title=title or f"{catalog.name or '(unnamed)'}: {catalog.description}")
    table.add_column("Version", style="green", no_wrap=True)
    table.add_column("Provider", style="cyan", no_wrap=True)
    table.add_column("Checksum", overflow="fold")
    table.add_column("URL", style="dim", overflow="fold")

    for entry in catalog.versions:
        for provider in entry.providers:
            table.add_row(
                entry.version,
                provider.name,
                f"{provider.checksum_type}:{provider.checksum}",
                provider.url,
            )
    return table


# Errors reported to the user instead of as a traceback.
CLI_ERRORS: tuple[type[Exception], ...] = (
    CaryatidError,
    OSError,
    Boto3Error,
    BotoCoreError,
    ClientError,
)


def fail(action: str, exc: Exception) -> typer.Exit:
    console.print(f"[bold red]{action} failed:[/bold red] {escape(str(exc))}")
    return typer.Exit(code=1)
