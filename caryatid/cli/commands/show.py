"""``caryatid show``: print the whole catalog."""

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


def show_cmd(
    catalog: str = CatalogOption,
    as_json: bool = typer.Option(
        False, "--json", help="Print the raw catalog JSON instead of a table."
    ),
) -> None:
    """Show every version and provider in a catalog."""
    try:
        result = get_manager(catalog).get_catalog()
    except CLI_ERRORS as exc:
        raise fail("Reading catalog", exc)

    if as_json:
        console.print_json(result.to_json_bytes().decode("utf-8"))
    else:
        console.print(render_catalog(result))
