"""Command: show the evaluation plan for a concept."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from littag.commands._base import LittagCommand

if TYPE_CHECKING:
    from littag.commands._context import AppContext


@click.command(
    cls=LittagCommand,
    examples="""\
  littag plan Positive Nonnegative
  littag plan Integer "Unit<year>"
  littag plan Age""",
)
@click.argument("identifiers", nargs=-1, required=True)
@click.pass_obj
def plan(app: AppContext, identifiers: tuple[str, ...]) -> None:
    """Resolve IDENTIFIERS (or one concept name) and show the checks to run."""
    from littag.services.constraints import ConstraintService

    app.emit(ConstraintService(app.runtime.boundary).explain(list(identifiers)))
