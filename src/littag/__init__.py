"""littag — compose constraint tags on literal values and validate them once."""

from littag.domain.errors import (
    ConfigurationError,
    DuplicateConstraintError,
    ImplicationCycleError,
    UnknownConstraintError,
    UnknownImplicationError,
)
from littag.domain.results import EvaluationMode, Failure, ValidationResult
from littag.engine.boundary import Boundary, ConceptHandle
from littag.engine.registry import ConstraintRegistry

__version__ = "0.1.0"

__all__ = [
    "Boundary",
    "ConceptHandle",
    "ConfigurationError",
    "ConstraintRegistry",
    "DuplicateConstraintError",
    "EvaluationMode",
    "Failure",
    "ImplicationCycleError",
    "UnknownConstraintError",
    "UnknownImplicationError",
    "ValidationResult",
    "__version__",
]
