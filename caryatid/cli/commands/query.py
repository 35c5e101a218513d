"""``caryatid query``: show the boxes matching a version and provider query."""

from __future__ import annotations

import typer

from caryatid.cli._common import (
    CLI_ERRORS,
    CatalogOption,
    console,
    fail,
    get_manager,
    render_catalog,
)
from caryatid.models.catalog import CatalogQueryParams

VersionQueryOption = typer.Option(
    "",
    "--version",
    "-v",
    help=(
        "Version query: a version optionally prefixed by <, <=, >, >= or =. "
        "Only '=' requires prerelease tags to match, so '<=1.0.0' and '1.0.0' "
        "both match 1.0.0-BETA but '=1.0.0' does not."
    ),
)
ProviderQueryOption = typer.Option(
    "",
    "--provider",
    "-p",
    help="Regular expression matched anywhere in the provider name, e.g. '^virtualbox'.",
)


def query_cmd(
    catalog: str = CatalogOption,
    version: str = VersionQueryOption,
    provider: str = ProviderQueryOption,
) -> None:
    """Show the boxes in a catalog matching a query."""
    params = CatalogQueryParams(version=version, provider=provider)
    try:
        result = get_manager(catalog).query_box(params)
    except CLI_ERRORS as exc:
        raise fail("Query", exc)

    if not result.versions:
        console.print("[dim]No matching boxes.[/dim]")
        return
    console.print(render_catalog(result))
