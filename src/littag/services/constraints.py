"""ConstraintService — inspect the registry, explain plans, check raw values.

Backs the ``littag constraints``, ``littag plan`` and ``littag check``
commands. Configuration errors become ``ok=False`` results.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from littag.domain.errors import ConfigurationError
from littag.domain.results import EvaluationMode
from littag.services.base import BaseService
from littag.services.result import ServiceError, ServiceResult
from littag.services.telemetry import trace_span, traced


def parse_raw(text: str) -> Any:
    """Interpret CLI input as a JSON scalar, falling back to the literal string.

    Examples:
        >>> parse_raw("42"), parse_raw("3.5"), parse_raw("true"), parse_raw("abc")
        (42, 3.5, True, 'abc')
    """
    try:
        value = json.loads(text)
    except ValueError:
        return text
    if isinstance(value, (dict, list)):
        return text
    return value


class ConstraintService(BaseService):
    """Read-only operations over an initialized boundary."""

    @traced
    def list_constraints(self) -> ServiceResult:
        registry = self._boundary.registry
        items = [c.to_dict() for c in registry]
        concepts = {
            name: list(handle.signature) for name, handle in sorted(self._boundary.concepts().items())
        }
        return ServiceResult(
            ok=True,
            op="constraints",
            data={"count": len(items), "items": items, "concepts": concepts},
        )

    @traced
    def explain(self, identifiers: Sequence[str]) -> ServiceResult:
        """Resolve *identifiers* (or a concept name) and describe the plan."""
        try:
            with trace_span("resolve") as span:
                handle = self._concept(identifiers)
                if span is not None:
                    span.annotate("checks", len(handle.plan))
        except ConfigurationError as exc:
            return ServiceResult(ok=False, op="plan", error=ServiceError.from_exception(exc))

        data = handle.plan.to_dict()
        if handle.name:
            data["concept"] = handle.name
        return ServiceResult(ok=True, op="plan", data=data)

    @traced
    def check(
        self,
        identifiers: Sequence[str],
        raw: str,
        *,
        mode: EvaluationMode | str | None = None,
    ) -> ServiceResult:
        """Validate the CLI literal *raw* against *identifiers*.

        Without *mode*, uses the boundary's configured mode (``from_value``).
        """
        try:
            handle = self._concept(identifiers)
        except ConfigurationError as exc:
            return ServiceResult(ok=False, op="check", error=ServiceError.from_exception(exc))

        value = parse_raw(raw)
        try:
            with trace_span("evaluate"):
                if mode is None:
                    result = self._boundary.from_value(handle, value)
                else:
                    result = self._boundary.evaluate(handle, value, mode)
        except ConfigurationError as exc:
            return ServiceResult(ok=False, op="check", error=ServiceError.from_exception(exc))

        data: dict[str, Any] = {
            "value": value,
            "concept": list(result.concept),
            "mode": str(result.mode),
            "trusted": result.ok,
            "failures": [f.model_dump() for f in result.failures],
        }
        if result.skipped:
            data["skipped"] = list(result.skipped)
        if result.ok:
            return ServiceResult(ok=True, op="check", data=data)

        message = "; ".join(f"{f.constraint}: {f.reason}" for f in result.failures)
        return ServiceResult(
            ok=False,
            op="check",
            data=data,
            error=ServiceError(code="REJECTED", message=message, detail={"failures": data["failures"]}),
        )
