"""BaseService — abstract foundation for littag services.

Every service receives a :class:`Boundary` at construction time. The
boundary is already initialized: its registry is frozen and configured
concepts are declared.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from littag.engine.boundary import Boundary, ConceptHandle


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class ConstraintService(BaseService):
            def explain(self, identifiers: list[str]) -> ServiceResult:
                handle = self._concept(identifiers)
                ...
    """

    def __init__(self, boundary: Boundary) -> None:
        self._boundary = boundary

    def _concept(self, identifiers: Sequence[str]) -> ConceptHandle:
        """Resolve CLI-style input: one declared concept name, or identifiers."""
        if len(identifiers) == 1 and identifiers[0] in self._boundary.concepts():
            return self._boundary.concept(identifiers[0])
        return self._boundary.declare_concept(identifiers)
