"""Subcommand modules for littag.

Provides register_commands() which uses deferred imports to keep
``littag --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from littag.commands.check import check
    from littag.commands.constraints import constraints
    from littag.commands.plan import plan

    cli.add_command(constraints)
    cli.add_command(plan)
    cli.add_command(check)
