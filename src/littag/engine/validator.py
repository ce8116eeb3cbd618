"""Validator — execute an evaluation plan against a candidate value.

Two modes:
- ``fast``: stop at the first failing check (one failure reported).
- ``collect_all``: run every check and report each failure in plan order.
  A check whose prerequisite failed is skipped, not run.

Predicate exceptions propagate. They indicate a broken constraint
definition, never an invalid value.
"""

from __future__ import annotations

from typing import Any

import structlog

from littag.domain.errors import ImplicationViolationError
from littag.domain.results import EvaluationMode, Failure, ValidationResult
from littag.engine.resolver import EvaluationPlan, PlanStep

logger = structlog.get_logger(__name__)


class Validator:
    """Stateless plan executor.

    Args:
        verify_implications: Debug mode. After a check passes, also evaluate
            every constraint it implies and raise
            :class:`ImplicationViolationError` if one does not hold.
    """

    def __init__(self, *, verify_implications: bool = False) -> None:
        self._verify = verify_implications

    @property
    def verify_implications(self) -> bool:
        return self._verify

    def evaluate(
        self,
        plan: EvaluationPlan,
        value: Any,
        mode: EvaluationMode | str = EvaluationMode.FAST,
    ) -> ValidationResult:
        """Evaluate *value* against *plan* in the given *mode*."""
        mode = EvaluationMode(mode)
        if mode is EvaluationMode.FAST:
            return self._evaluate_fast(plan, value)
        return self._evaluate_all(plan, value)

    def passes(self, plan: EvaluationPlan, value: Any) -> bool:
        """Fast-mode boolean gate; builds no result object."""
        for step in plan.steps:
            if not step.constraint.check(value):
                return False
            if self._verify:
                self._verify_entailed(step, value)
        return True

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def _evaluate_fast(self, plan: EvaluationPlan, value: Any) -> ValidationResult:
        for step in plan.steps:
            constraint = step.constraint
            if not constraint.check(value):
                return ValidationResult(
                    ok=False,
                    value=value,
                    concept=plan.signature,
                    mode=EvaluationMode.FAST,
                    failures=[
                        Failure(constraint=constraint.identifier, reason=constraint.explain(value))
                    ],
                )
            if self._verify:
                self._verify_entailed(step, value)
        return ValidationResult(
            ok=True, value=value, concept=plan.signature, mode=EvaluationMode.FAST
        )

    def _evaluate_all(self, plan: EvaluationPlan, value: Any) -> ValidationResult:
        failures: list[Failure] = []
        skipped: list[str] = []
        blocked: set[str] = set()

        for step in plan.steps:
            constraint = step.constraint
            if step.prerequisites & blocked:
                skipped.append(constraint.identifier)
                blocked.add(constraint.identifier)
                continue
            if not constraint.check(value):
                failures.append(
                    Failure(constraint=constraint.identifier, reason=constraint.explain(value))
                )
                blocked.add(constraint.identifier)
            elif self._verify:
                self._verify_entailed(step, value)

        return ValidationResult(
            ok=not failures,
            value=value,
            concept=plan.signature,
            mode=EvaluationMode.COLLECT_ALL,
            failures=failures,
            skipped=skipped,
        )

    @staticmethod
    def _verify_entailed(step: PlanStep, value: Any) -> None:
        for implied in step.entails:
            if not implied.check(value):
                logger.error(
                    "implication.violated",
                    source=step.identifier,
                    target=implied.identifier,
                    value=value,
                )
                raise ImplicationViolationError(step.identifier, implied.identifier, value)
