"""Built-in constraint pack.

Numeric constraints require ``Number``, so their predicates only ever see
``int``/``float`` values (``bool`` is not a number here). String
constraints require ``String``.

Implications:
- ``Integer`` -> ``Finite``
- ``Positive`` -> ``Nonnegative``, ``Nonzero``
- ``Negative`` -> ``Nonpositive``, ``Nonzero``
"""

from __future__ import annotations

import math
from typing import Any

from littag.domain.constraints import Constraint
from littag.domain.identifiers import parameterized
from littag.engine.registry import ConstraintRegistry

UNIT_FAMILY = "Unit"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    # Arbitrary-precision ints are finite but may overflow a float.
    return isinstance(value, int) or math.isfinite(value)


def _is_integer(value: Any) -> bool:
    if isinstance(value, int):
        return True
    return float(value).is_integer()


def register_builtins(registry: ConstraintRegistry) -> None:
    """Register the built-in constraints on *registry*, weakest first."""
    registry.register(
        "Number",
        _is_number,
        reason=lambda v: f"expected number, got {type(v).__name__}",
        description="int or float (bool excluded)",
    )
    registry.register(
        "Finite",
        _is_finite,
        requires=["Number"],
        reason=lambda v: f"expected finite number, got {v!r}",
        description="Not NaN or infinite",
    )
    registry.register(
        "Integer",
        _is_integer,
        implies=["Finite"],
        requires=["Number"],
        reason=lambda v: f"expected integer, got {v!r}",
        description="Whole number",
    )
    registry.register(
        "Nonnegative",
        lambda v: v >= 0,
        requires=["Number"],
        reason=lambda v: f"expected >= 0, got {v!r}",
    )
    registry.register(
        "Nonpositive",
        lambda v: v <= 0,
        requires=["Number"],
        reason=lambda v: f"expected <= 0, got {v!r}",
    )
    registry.register(
        "Nonzero",
        lambda v: v != 0,
        requires=["Number"],
        reason=lambda v: f"expected != 0, got {v!r}",
    )
    registry.register(
        "Positive",
        lambda v: v > 0,
        implies=["Nonnegative", "Nonzero"],
        requires=["Number"],
        reason=lambda v: f"expected > 0, got {v!r}",
    )
    registry.register(
        "Negative",
        lambda v: v < 0,
        implies=["Nonpositive", "Nonzero"],
        requires=["Number"],
        reason=lambda v: f"expected < 0, got {v!r}",
    )
    registry.register(
        "String",
        lambda v: isinstance(v, str),
        reason=lambda v: f"expected string, got {type(v).__name__}",
    )
    registry.register(
        "NonEmpty",
        lambda v: len(v) > 0,
        requires=["String"],
        reason=lambda v: "expected non-empty string",
    )
    registry.register(
        "Trimmed",
        lambda v: v == v.strip(),
        requires=["String"],
        reason=lambda v: f"expected no surrounding whitespace, got {v!r}",
    )
    registry.register(
        "Boolean",
        lambda v: isinstance(v, bool),
        reason=lambda v: f"expected boolean, got {type(v).__name__}",
    )


def unit(parameter: str) -> Constraint:
    """Build the ``Unit<parameter>`` tag.

    Units are phantom tags: the predicate always holds for a number. A
    concept may carry at most one unit.
    """
    return Constraint.define(
        parameterized(UNIT_FAMILY, parameter),
        lambda v: True,
        requires=["Number"],
        description=f"Measured in {parameter}",
    )


def register_units(registry: ConstraintRegistry, *parameters: str) -> None:
    for parameter in parameters:
        registry.add(unit(parameter))
