"""Constraint definitions.

A constraint is a named, reusable predicate over a base literal value.
Two relations connect constraints:

- ``implies``: whenever this constraint holds, the target holds too
  (``Positive`` implies ``Nonnegative``). The resolver drops implied
  targets from the evaluation plan.
- ``requires``: the predicate assumes the target already holds
  (``Integer`` requires ``Number``). Required targets stay in the plan and
  are checked first.

INVARIANT: Predicates are pure. A predicate that raises is a broken
definition and the exception propagates.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from littag.domain.identifiers import ConstraintKey, normalize_identifier, parse_identifier

Predicate = Callable[[Any], bool]
ReasonFn = Callable[[Any], str]


@dataclass(frozen=True)
class Constraint:
    """A registered constraint definition.

    Attributes:
        identifier: Canonical identifier, e.g. ``"Integer"`` or ``"Unit<year>"``.
        predicate: Pure ``(value) -> bool`` check.
        reason: Produces a human-readable explanation for a failing value.
            When None, the identifier itself is the reason.
        implies: Identifiers guaranteed whenever this constraint holds.
        requires: Identifiers the predicate assumes already hold.
        description: Free-form documentation shown by ``littag constraints``.
    """

    identifier: str
    predicate: Predicate = field(compare=False)
    reason: ReasonFn | None = field(default=None, compare=False)
    implies: frozenset[str] = frozenset()
    requires: frozenset[str] = frozenset()
    description: str = ""

    @classmethod
    def define(
        cls,
        identifier: str,
        predicate: Predicate,
        *,
        implies: Iterable[str] = (),
        requires: Iterable[str] = (),
        reason: ReasonFn | None = None,
        description: str = "",
    ) -> Constraint:
        """Build a constraint, canonicalizing every identifier involved."""
        return cls(
            identifier=normalize_identifier(identifier),
            predicate=predicate,
            reason=reason,
            implies=frozenset(normalize_identifier(i) for i in implies),
            requires=frozenset(normalize_identifier(i) for i in requires),
            description=description,
        )

    @property
    def key(self) -> ConstraintKey:
        return parse_identifier(self.identifier)

    @property
    def family(self) -> str:
        return self.key.family

    @property
    def parameter(self) -> str | None:
        return self.key.parameter

    @property
    def references(self) -> frozenset[str]:
        """Every identifier this constraint points at."""
        return self.implies | self.requires

    def check(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def explain(self, value: Any) -> str:
        """Reason *value* fails this constraint."""
        if self.reason is None:
            return self.identifier
        return self.reason(value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.identifier,
            "implies": sorted(self.implies),
            "requires": sorted(self.requires),
            "description": self.description,
        }
