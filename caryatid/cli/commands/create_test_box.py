"""``caryatid create-test-box``: write a minimal box file for testing."""

from __future__ import annotations

from pathlib import Path

import typer

from caryatid.cli._common import CLI_ERRORS, console, fail
from caryatid.core.boxfile import create_test_box_file


def create_test_box_cmd(
    path: Path = typer.Argument(..., help="Where to write the box file."),
    provider: str = typer.Option(..., "--provider", "-p", help="Provider named in metadata.json."),
    compress: bool = typer.Option(True, "--compress/--no-compress", help="Gzip the tarball."),
) -> None:
    """Create a box containing only metadata.json."""
    try:
        create_test_box_file(path, provider, compress=compress)
    except CLI_ERRORS as exc:
        raise fail("Creating test box", exc)
    console.print(f"Box file created at [bold]{path}[/bold]")
