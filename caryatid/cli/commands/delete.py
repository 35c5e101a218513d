"""``caryatid delete``: remove matching boxes from a catalog and its storage."""

from __future__ import annotations

import typer

from caryatid.cli._common import CLI_ERRORS, CatalogOption, console, fail, get_manager
from caryatid.cli.commands.query import ProviderQueryOption, VersionQueryOption
from caryatid.models.catalog import CatalogQueryParams


def delete_cmd(
    catalog: str = CatalogOption,
    version: str = VersionQueryOption,
    provider: str = ProviderQueryOption,
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Delete without asking for confirmation."
    ),
) -> None:
    """Delete every box matching a query. Empty queries match everything."""
    params = CatalogQueryParams(version=version, provider=provider)
    try:
        manager = get_manager(catalog)
        matched = manager.query_box(params)
        if not matched.versions:
            console.print("[dim]No matching boxes.[/dim]")
            return
        if not yes:
            count = sum(len(entry.providers) for entry in matched.versions)
            typer.confirm(f"Delete {count} box(es) from {manager.catalog_uri}?", abort=True)
        refs = manager.delete_box(params)
    except CLI_ERRORS as exc:
        raise fail("Delete", exc)

    for ref in refs:
        console.print(f"[red]-[/red] {ref.version} {ref.provider_name}  [dim]{ref.uri}[/dim]")
    console.print(f"[bold]Deleted {len(refs)} box(es).[/bold]")
