"""ValidationResult and Failure — the boundary contract.

INVARIANT: Validation failures are values, never exceptions.
``ok=True`` means the carried value is trusted for the concept and is not
re-checked downstream. Trust is a call-site discipline: once the value
leaves the result, nothing mechanically tracks it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from littag.domain.errors import RejectedValueError


class EvaluationMode(StrEnum):
    """How the validator walks an evaluation plan."""

    FAST = "fast"
    COLLECT_ALL = "collect_all"


class Failure(BaseModel):
    """One failed constraint and why it failed."""

    model_config = {"frozen": True}

    constraint: str
    reason: str


class ValidationResult(BaseModel):
    """Outcome of evaluating a value against a concept.

    Attributes:
        ok: Whether every planned check passed.
        value: The original input, untouched.
        concept: Signature of the concept the value was checked against.
        mode: Evaluation mode that produced this result.
        failures: Failed checks in plan order (at most one in fast mode).
        skipped: Checks not run because a prerequisite failed (collect-all only).
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    ok: bool
    value: Any = None
    concept: tuple[str, ...] = ()
    mode: EvaluationMode = EvaluationMode.FAST
    failures: list[Failure] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

    @property
    def failed_constraints(self) -> list[str]:
        return [f.constraint for f in self.failures]

    def unwrap(self) -> Any:
        """Return the trusted value, or raise :class:`RejectedValueError`."""
        if not self.ok:
            raise RejectedValueError(self.concept, self.failures)
        return self.value
