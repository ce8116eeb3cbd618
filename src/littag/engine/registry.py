"""ConstraintRegistry — named constraint definitions and their relation graph.

Constraints and their ``implies``/``requires`` edges live in a NetworkX
DiGraph. An edge ``A -> B`` means A implies B (``kind="implies"``) or A's
predicate assumes B (``kind="requires"``).

INVARIANT: Every edge points at a constraint registered earlier, so the
graph is acyclic by construction.

Lifecycle: populate during initialization, then freeze. The first plan
resolution freezes the registry; registering afterwards is a
configuration error. Writers are serialized by a lock; reads take none.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from typing import Any, TypeAlias

import networkx as nx

from littag.domain.constraints import Constraint, Predicate, ReasonFn
from littag.domain.errors import (
    DuplicateConstraintError,
    OverlappingRelationError,
    RegistryFrozenError,
    UnknownConstraintError,
    UnknownImplicationError,
)
from littag.domain.identifiers import normalize_identifier

logger = logging.getLogger(__name__)

_Graph: TypeAlias = nx.DiGraph

IMPLIES = "implies"
REQUIRES = "requires"


class ConstraintRegistry:
    """Write-once registry of constraint definitions.

    Usage::

        registry = ConstraintRegistry()
        registry.register("Nonnegative", lambda v: v >= 0)
        registry.register("Positive", lambda v: v > 0, implies=["Nonnegative"])
    """

    def __init__(self) -> None:
        self._constraints: dict[str, Constraint] = {}
        self._graph: _Graph = nx.DiGraph()
        self._lock = threading.Lock()
        self._frozen = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        identifier: str,
        predicate: Predicate,
        implies: Iterable[str] = (),
        *,
        requires: Iterable[str] = (),
        reason: ReasonFn | None = None,
        description: str = "",
    ) -> Constraint:
        """Define and register a constraint.

        Raises:
            DuplicateConstraintError: *identifier* is already registered.
            UnknownImplicationError: an ``implies``/``requires`` entry is unknown.
            OverlappingRelationError: a target is both implied and required.
            RegistryFrozenError: the registry has been frozen.
        """
        constraint = Constraint.define(
            identifier,
            predicate,
            implies=implies,
            requires=requires,
            reason=reason,
            description=description,
        )
        return self.add(constraint)

    def add(self, constraint: Constraint) -> Constraint:
        """Register a prebuilt :class:`Constraint`."""
        with self._lock:
            ident = constraint.identifier
            if self._frozen:
                raise RegistryFrozenError(ident)
            if ident in self._constraints:
                raise DuplicateConstraintError(ident)
            missing = [ref for ref in constraint.references if ref not in self._constraints]
            if missing:
                raise UnknownImplicationError(ident, missing)
            overlap = constraint.implies & constraint.requires
            if overlap:
                raise OverlappingRelationError(ident, overlap)

            self._graph.add_node(ident)
            for target in sorted(constraint.implies):
                self._graph.add_edge(ident, target, kind=IMPLIES)
            for target in sorted(constraint.requires):
                self._graph.add_edge(ident, target, kind=REQUIRES)
            self._constraints[ident] = constraint

        logger.debug(
            "Registered constraint %s (implies=%s, requires=%s)",
            ident,
            sorted(constraint.implies),
            sorted(constraint.requires),
        )
        return constraint

    def freeze(self) -> None:
        """Reject any further registration."""
        with self._lock:
            if not self._frozen:
                logger.debug("Registry frozen with %d constraints", len(self._constraints))
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, identifier: str) -> Constraint:
        """Return the constraint registered under *identifier*.

        Raises:
            UnknownConstraintError: nothing is registered under *identifier*.
        """
        ident = normalize_identifier(identifier)
        try:
            return self._constraints[ident]
        except KeyError:
            raise UnknownConstraintError(ident) from None

    def identifiers(self) -> list[str]:
        """Registered identifiers in registration order."""
        return list(self._constraints)

    @property
    def graph(self) -> _Graph:
        """The relation graph (read-only view)."""
        return self._graph.copy(as_view=True)

    def implications(self) -> Iterator[tuple[str, str]]:
        """Every declared ``(source, target)`` implication pair."""
        for source, target, kind in self._graph.edges(data="kind"):
            if kind == IMPLIES:
                yield source, target

    def to_dict(self) -> dict[str, Any]:
        return {"constraints": [c.to_dict() for c in self._constraints.values()]}

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, str):
            return False
        return identifier.strip() in self._constraints

    def __len__(self) -> int:
        return len(self._constraints)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(list(self._constraints.values()))
