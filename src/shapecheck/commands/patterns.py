"""Command: list the named regular-expression patterns."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shapecheck.commands._base import ShapecheckCommand

if TYPE_CHECKING:
    from shapecheck.commands._context import AppContext


@click.command(cls=ShapecheckCommand)
@click.pass_obj
def patterns(app: AppContext) -> None:
    """List the named patterns used in pattern violation messages."""
    app.emit(app.service.patterns())
