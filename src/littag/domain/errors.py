"""Configuration error taxonomy.

Every exception here signals a programming or setup defect, never bad
input. They abort initialization and are not meant to be caught on the
validation path. Ordinary validation failures are values
(:class:`~littag.domain.results.ValidationResult`), not exceptions.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from littag.domain.results import Failure


class ConfigurationError(Exception):
    """Base class for fatal constraint-configuration defects."""

    code = "CONFIGURATION_ERROR"


class InvalidIdentifierError(ConfigurationError):
    """An identifier does not follow the ``Name`` / ``Name<param>`` grammar."""

    code = "INVALID_IDENTIFIER"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Invalid constraint identifier: {identifier!r}")
        self.identifier = identifier


class DuplicateConstraintError(ConfigurationError):
    code = "DUPLICATE_CONSTRAINT"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Constraint '{identifier}' is already registered")
        self.identifier = identifier


class UnknownConstraintError(ConfigurationError):
    code = "UNKNOWN_CONSTRAINT"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Constraint '{identifier}' is not registered")
        self.identifier = identifier


class UnknownImplicationError(ConfigurationError):
    """An ``implies``/``requires`` entry names a constraint not yet registered."""

    code = "UNKNOWN_IMPLICATION"

    def __init__(self, identifier: str, missing: Sequence[str]) -> None:
        super().__init__(
            f"Constraint '{identifier}' references unregistered constraints: {sorted(missing)}"
        )
        self.identifier = identifier
        self.missing = tuple(sorted(missing))


class OverlappingRelationError(ConfigurationError):
    """A target is listed under both ``implies`` and ``requires``.

    An implied target is dropped from plans while a required one must run
    first, so one constraint cannot be both for the same dependent.
    """

    code = "OVERLAPPING_RELATION"

    def __init__(self, identifier: str, targets: Iterable[str]) -> None:
        super().__init__(
            f"Constraint '{identifier}' both implies and requires: {sorted(targets)}"
        )
        self.identifier = identifier
        self.targets = tuple(sorted(targets))


class ImplicationCycleError(ConfigurationError):
    code = "IMPLICATION_CYCLE"

    def __init__(self, cycle: Sequence[str]) -> None:
        super().__init__(f"Implication cycle detected: {' -> '.join(cycle)}")
        self.cycle = tuple(cycle)


class RegistryFrozenError(ConfigurationError):
    """Registration attempted after plans were resolved against the registry."""

    code = "REGISTRY_FROZEN"

    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"Cannot register '{identifier}': the registry is frozen after first resolution"
        )
        self.identifier = identifier


class ConflictingParameterError(ConfigurationError):
    """A concept carries more than one parameter of the same family."""

    code = "CONFLICTING_PARAMETER"

    def __init__(self, family: str, identifiers: Sequence[str]) -> None:
        super().__init__(
            f"Concept combines conflicting '{family}' constraints: {sorted(identifiers)}"
        )
        self.family = family
        self.identifiers = tuple(sorted(identifiers))


class DuplicateConceptError(ConfigurationError):
    """A concept name was re-declared with a different constraint set."""

    code = "DUPLICATE_CONCEPT"

    def __init__(self, name: str) -> None:
        super().__init__(f"Concept '{name}' is already declared with different constraints")
        self.name = name


class UnknownConceptError(ConfigurationError):
    code = "UNKNOWN_CONCEPT"

    def __init__(self, name: str) -> None:
        super().__init__(f"Concept '{name}' is not declared")
        self.name = name


class ImplicationViolationError(ConfigurationError):
    """A declared implication did not hold for an observed value."""

    code = "IMPLICATION_VIOLATION"

    def __init__(self, source: str, target: str, value: object) -> None:
        super().__init__(
            f"'{source}' implies '{target}', but {value!r} satisfies '{source}' only"
        )
        self.source = source
        self.target = target
        self.value = value


class RejectedValueError(ValueError):
    """Raised by :meth:`ValidationResult.unwrap` on a rejected value.

    Not a configuration error: it only exists for callers that opt into
    exception-style handling of an ordinary validation failure.
    """

    def __init__(self, concept: Sequence[str], failures: Sequence[Failure]) -> None:
        detail = "; ".join(f"{f.constraint}: {f.reason}" for f in failures)
        super().__init__(f"Value rejected by {{{', '.join(concept)}}}: {detail}")
        self.concept = tuple(concept)
        self.failures = tuple(failures)
