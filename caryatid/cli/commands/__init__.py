"""Caryatid CLI subcommands."""
