"""Boundary — the public entry point where untrusted values become trusted.

Combines registry lookup, cached resolution, and validation::

    boundary = Boundary(registry)
    age = boundary.declare_concept(["Integer", "Nonnegative"], name="Age")
    boundary.narrow(age, 42)          # True
    boundary.from_value(age, -3.5)    # ValidationResult(ok=False, failures=[...])

Per value the state machine is ``Unvalidated -> {Trusted, Rejected}``.
Rejection is not sticky: predicates are pure, so re-validating the same raw
input yields the same result.

INVARIANT: ``narrow`` and ``from_value`` never raise for invalid input.
Only configuration defects and broken predicates raise.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from littag.domain.errors import DuplicateConceptError, UnknownConceptError
from littag.domain.results import EvaluationMode, ValidationResult
from littag.engine.registry import ConstraintRegistry
from littag.engine.resolver import CompositionResolver, EvaluationPlan
from littag.engine.validator import Validator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ConceptHandle:
    """A declared concept: a name (optional) bound to a cached plan.

    Equality follows the concept signature, never the name.
    """

    plan: EvaluationPlan
    name: str | None = None

    @property
    def signature(self) -> tuple[str, ...]:
        return self.plan.signature

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConceptHandle):
            return NotImplemented
        return self.plan is other.plan

    def __hash__(self) -> int:
        return hash(self.plan.signature)

    def __str__(self) -> str:
        label = "{" + ", ".join(self.signature) + "}"
        return f"{self.name} = {label}" if self.name else label


class Boundary:
    """Declare concepts and validate raw input against them.

    Args:
        registry: A fully populated registry. It is frozen on first use.
        boundary_mode: Mode used by :meth:`from_value`.
        verify_implications: Debug mode, see :class:`Validator`.
    """

    def __init__(
        self,
        registry: ConstraintRegistry,
        *,
        boundary_mode: EvaluationMode | str = EvaluationMode.COLLECT_ALL,
        verify_implications: bool = False,
    ) -> None:
        self._registry = registry
        self._resolver = CompositionResolver(registry)
        self._validator = Validator(verify_implications=verify_implications)
        self._boundary_mode = EvaluationMode(boundary_mode)
        self._concepts: dict[str, ConceptHandle] = {}
        self._lock = threading.Lock()

    @property
    def registry(self) -> ConstraintRegistry:
        return self._registry

    @property
    def resolver(self) -> CompositionResolver:
        return self._resolver

    @property
    def validator(self) -> Validator:
        return self._validator

    # ------------------------------------------------------------------
    # Concepts
    # ------------------------------------------------------------------

    def declare_concept(
        self,
        identifiers: Iterable[str],
        *,
        name: str | None = None,
    ) -> ConceptHandle:
        """Resolve *identifiers* once and return a handle to the cached plan.

        Raises:
            DuplicateConceptError: *name* is already bound to another set.
        """
        handle = ConceptHandle(plan=self._resolver.resolve(identifiers), name=name)
        if name is None:
            return handle
        with self._lock:
            existing = self._concepts.get(name)
            if existing is not None:
                if existing.plan is not handle.plan:
                    raise DuplicateConceptError(name)
                return existing
            self._concepts[name] = handle
        logger.debug("Declared concept %s", handle)
        return handle

    def concept(self, name: str) -> ConceptHandle:
        """Return the handle declared under *name*."""
        try:
            return self._concepts[name]
        except KeyError:
            raise UnknownConceptError(name) from None

    def concepts(self) -> dict[str, ConceptHandle]:
        return dict(self._concepts)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def narrow(self, handle: ConceptHandle, value: Any) -> bool:
        """Boolean gate: fast mode, diagnostics discarded."""
        return self._validator.passes(handle.plan, value)

    def from_value(self, handle: ConceptHandle, value: Any) -> ValidationResult:
        """Validate *value* at a boundary with full diagnostics.

        On ``ok``, the result's value is trusted for *handle*; downstream code
        is not expected to re-check it.
        """
        return self._validator.evaluate(handle.plan, value, self._boundary_mode)

    def evaluate(
        self,
        handle: ConceptHandle,
        value: Any,
        mode: EvaluationMode | str = EvaluationMode.FAST,
    ) -> ValidationResult:
        """Validate *value* with an explicit *mode*."""
        return self._validator.evaluate(handle.plan, value, mode)

    @staticmethod
    def assert_trusted(handle: ConceptHandle, value: Any) -> Any:
        """Declare *value* trusted for *handle* without checking it.

        An escape hatch for values known valid by other means (literal
        constants, values read back from trusted storage). Nothing is
        evaluated; asserting an invalid value breaks the trust contract and
        is the caller's responsibility.
        """
        return value
