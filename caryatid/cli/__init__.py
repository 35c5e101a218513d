"""Caryatid CLI: Typer-based command-line interface.

Provides the ``caryatid`` command with subcommands for showing, querying,
adding to and deleting from a Vagrant catalog.

All output uses Rich for formatted terminal display.
"""
