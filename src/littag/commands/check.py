"""Command: validate a literal value against a concept."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from littag.commands._base import LittagCommand
from littag.domain.results import EvaluationMode

if TYPE_CHECKING:
    from littag.commands._context import AppContext


@click.command(
    cls=LittagCommand,
    examples="""\
  littag check Integer Nonnegative --value 42
  littag check Age --value -3.5
  littag check Positive --value 0 --fast""",
)
@click.argument("identifiers", nargs=-1, required=True)
@click.option("--value", "raw", required=True, help="Literal to check (parsed as JSON scalar).")
@click.option("--fast", is_flag=True, help="Stop at the first failing constraint.")
@click.option(
    "--all", "collect_all", is_flag=True, help="Report every failing constraint."
)
@click.pass_obj
def check(
    app: AppContext,
    identifiers: tuple[str, ...],
    raw: str,
    fast: bool,
    collect_all: bool,
) -> None:
    """Check --value against IDENTIFIERS (or one concept name)."""
    from littag.services.constraints import ConstraintService

    if fast and collect_all:
        raise click.UsageError("--fast and --all are mutually exclusive")
    mode: EvaluationMode | None = None
    if fast:
        mode = EvaluationMode.FAST
    elif collect_all:
        mode = EvaluationMode.COLLECT_ALL

    app.emit(ConstraintService(app.runtime.boundary).check(list(identifiers), raw, mode=mode))
