"""``caryatid add``: publish a local .box file to a catalog.

The checksum and provider are read from the box file itself.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.panel import Panel

from caryatid.backends import catalog_root_uri
from caryatid.cli._common import CLI_ERRORS, CatalogOption, console, fail, get_manager
from caryatid.core.boxfile import derive_artifact_info
from caryatid.models.catalog import BoxArtifact


def add_cmd(
    catalog: str = CatalogOption,
    box: Path = typer.Option(
        ..., "--box", "-b", exists=True, dir_okay=False, help="Local path to a .box file."
    ),
    name: str = typer.Option(..., "--name", "-n", help="Box name, e.g. 'win10x64'."),
    description: str = typer.Option(
        ..., "--description", "-d", help="Box description; replaces the catalog's."
    ),
    version: str = typer.Option(
        ..., "--version", "-v", help="Exact version, e.g. '1.2.5' or '1.2.5-BETA'."
    ),
) -> None:
    """Add a box file to a catalog and copy it next to the catalog."""
    try:
        checksum_type, checksum, provider = derive_artifact_info(box)
        manager = get_manager(catalog)
        artifact = BoxArtifact(
            path=str(box),
            name=name,
            description=description,
            version=version,
            provider=provider,
            catalog_root_uri=catalog_root_uri(manager.catalog_uri),
            checksum_type=checksum_type,
            checksum=checksum,
        )
        manager.add_artifact(artifact)
    except CLI_ERRORS as exc:
        raise fail("Add", exc)

    console.print(
        Panel(
            "\n".join([
                f"[bold green]Added {artifact.artifact_id}[/bold green]",
                "",
                f"[bold]Catalog:[/bold]  {manager.catalog_uri}",
                f"[bold]Box URL:[/bold]  {artifact.uri}",
                f"[bold]Checksum:[/bold] {checksum_type}:{checksum}",
            ]),
            title="[bold]Caryatid[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
