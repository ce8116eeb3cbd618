"""Pydantic adapter — use a concept as a field type.

Pydantic parses and coerces the raw input to the base type first; the
concept then validates the parsed literal in collect-all mode. Rejections
surface as ordinary pydantic validation errors::

    Age = concept_type(boundary, boundary.concept("Age"), int)

    class Person(BaseModel):
        age: Age
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator

from littag.domain.results import EvaluationMode
from littag.engine.boundary import Boundary, ConceptHandle


def concept_validator(boundary: Boundary, handle: ConceptHandle) -> AfterValidator:
    """Return an ``AfterValidator`` that checks values against *handle*."""

    def _validate(value: Any) -> Any:
        result = boundary.evaluate(handle, value, EvaluationMode.COLLECT_ALL)
        if not result.ok:
            detail = "; ".join(f"{f.constraint}: {f.reason}" for f in result.failures)
            raise ValueError(f"not a valid {handle.name or 'value'} ({detail})")
        return result.value

    return AfterValidator(_validate)


def concept_type(boundary: Boundary, handle: ConceptHandle, base: type = float) -> Any:
    """``Annotated[base, ...]`` type validated against *handle*."""
    return Annotated[base, concept_validator(boundary, handle)]
