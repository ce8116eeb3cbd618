"""Command: list registered constraints and declared concepts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from littag.commands._base import LittagCommand

if TYPE_CHECKING:
    from littag.commands._context import AppContext


@click.command(
    cls=LittagCommand,
    examples="""\
  littag constraints
  littag --json constraints""",
)
@click.pass_obj
def constraints(app: AppContext) -> None:
    """List registered constraints and declared concepts."""
    from littag.services.constraints import ConstraintService

    app.emit(ConstraintService(app.runtime.boundary).list_constraints())
