"""Command: self-check a schema's rule set."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shapecheck.commands._base import ShapecheckCommand

if TYPE_CHECKING:
    from shapecheck.commands._context import AppContext


@click.command(
    cls=ShapecheckCommand,
    examples="""\
  shapecheck check myapp.schemas:user
  shapecheck check user --deep
  shapecheck --json check schemas.py:order --no-deep""",
)
@click.argument("schema")
@click.option(
    "--deep/--no-deep",
    default=None,
    help="Also check nested rule sets (default from [check] deep).",
)
@click.pass_obj
def check(app: AppContext, schema: str, deep: bool | None) -> None:
    """Check that SCHEMA is a well-formed rule set."""
    app.emit(app.service.check(schema, deep=deep))
