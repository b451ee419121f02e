"""Command: validate a document against a schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shapecheck.commands._base import ShapecheckCommand

if TYPE_CHECKING:
    from shapecheck.commands._context import AppContext


@click.command(
    cls=ShapecheckCommand,
    examples="""\
  shapecheck validate myapp.schemas:user user.json
  shapecheck validate schemas.py:order order.yaml
  shapecheck validate user payload.json        # alias from [schemas]
  cat payload.json | shapecheck validate user -
  shapecheck --json validate user payload.json""",
)
@click.argument("schema")
@click.argument("document")
@click.pass_obj
def validate(app: AppContext, schema: str, document: str) -> None:
    """Validate DOCUMENT (JSON or YAML file, or - for stdin) against SCHEMA."""
    app.emit(app.service.validate(schema, document))
