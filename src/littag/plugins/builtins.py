"""Built-in constraint pack exposed as a plugin."""

from __future__ import annotations

from collections.abc import Sequence

from littag.builtins import register_builtins, register_units
from littag.engine.registry import ConstraintRegistry
from littag.plugins.hookspecs import hookimpl


class BuiltinsPlugin:
    """Registers the standard numeric/string constraints plus configured units."""

    def __init__(self, units: Sequence[str] = ()) -> None:
        self._units = tuple(units)

    @hookimpl
    def register_constraints(self, registry: ConstraintRegistry) -> None:
        register_builtins(registry)
        register_units(registry, *self._units)
