"""Constraint identifier grammar and concept signatures.

An identifier is a bare name (``Integer``) or a parameterized name
(``Unit<celsius>``). The parameter participates in identity, so
``Unit<celsius>`` and ``Unit<kelvin>`` are distinct constraints of the
same family. Whitespace around a parameter is not significant:
``Unit< year >`` is ``Unit<year>``.

INVARIANT: A concept signature is the sorted, deduplicated tuple of its
identifiers. Declaration order and repetition never change a signature.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from littag.domain.errors import InvalidIdentifierError

IDENTIFIER_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<family>[A-Za-z_][A-Za-z0-9_]*)(?:<(?P<parameter>[A-Za-z0-9_.\-/ ]+)>)?$"
)


@dataclass(frozen=True)
class ConstraintKey:
    """Parsed form of a constraint identifier."""

    family: str
    parameter: str | None = None

    @property
    def is_parameterized(self) -> bool:
        return self.parameter is not None

    def __str__(self) -> str:
        if self.parameter is None:
            return self.family
        return f"{self.family}<{self.parameter}>"


def parse_identifier(identifier: str) -> ConstraintKey:
    """Split *identifier* into family and optional parameter.

    Examples:
        >>> parse_identifier("Integer")
        ConstraintKey(family='Integer', parameter=None)
        >>> parse_identifier("Unit<celsius>")
        ConstraintKey(family='Unit', parameter='celsius')

    Raises:
        InvalidIdentifierError: if *identifier* does not match the grammar.
    """
    if not isinstance(identifier, str):
        raise InvalidIdentifierError(repr(identifier))
    match = IDENTIFIER_PATTERN.match(identifier.strip())
    if match is None:
        raise InvalidIdentifierError(identifier)
    parameter = match["parameter"]
    if parameter is not None:
        parameter = parameter.strip()
        if not parameter:
            raise InvalidIdentifierError(identifier)
    return ConstraintKey(family=match["family"], parameter=parameter)


def parameterized(family: str, parameter: str) -> str:
    """Format a parameterized identifier, e.g. ``Unit<year>``."""
    return str(parse_identifier(f"{family}<{parameter}>"))


def normalize_identifier(identifier: str) -> str:
    """Return the canonical spelling of *identifier* (surrounding whitespace dropped)."""
    return str(parse_identifier(identifier))


def normalize_signature(identifiers: Iterable[str]) -> tuple[str, ...]:
    """Sorted, deduplicated, canonical identifiers."""
    return tuple(sorted({normalize_identifier(i) for i in identifiers}))
