"""Subcommand modules for shapecheck.

Provides register_commands() which uses deferred imports to keep
``shapecheck --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from shapecheck.commands.check import check
    from shapecheck.commands.patterns import patterns
    from shapecheck.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(check)
    cli.add_command(patterns)
