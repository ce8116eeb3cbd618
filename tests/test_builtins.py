"""Tests for the built-in constraint pack."""

from __future__ import annotations

import math

import pytest

from littag.builtins import UNIT_FAMILY, register_builtins, register_units, unit
from littag.domain.errors import ConflictingParameterError, DuplicateConstraintError
from littag.engine.boundary import Boundary
from littag.engine.registry import ConstraintRegistry

BUILTINS = {
    "Number",
    "Finite",
    "Integer",
    "Nonnegative",
    "Nonpositive",
    "Nonzero",
    "Positive",
    "Negative",
    "String",
    "NonEmpty",
    "Trimmed",
    "Boolean",
}


class TestRegisterBuiltins:
    def test_registers_all(self, registry: ConstraintRegistry) -> None:
        register_builtins(registry)
        assert set(registry.identifiers()) == BUILTINS

    def test_twice_is_duplicate(self, registry: ConstraintRegistry) -> None:
        register_builtins(registry)
        with pytest.raises(DuplicateConstraintError):
            register_builtins(registry)

    def test_implications(self, registry: ConstraintRegistry) -> None:
        register_builtins(registry)
        assert sorted(registry.implications()) == [
            ("Integer", "Finite"),
            ("Negative", "Nonpositive"),
            ("Negative", "Nonzero"),
            ("Positive", "Nonnegative"),
            ("Positive", "Nonzero"),
        ]


class TestPredicates:
    @pytest.mark.parametrize(
        ("identifier", "value", "expected"),
        [
            ("Number", 1, True),
            ("Number", 1.5, True),
            ("Number", True, False),
            ("Number", "1", False),
            ("Finite", 1.0, True),
            ("Finite", math.inf, False),
            ("Finite", math.nan, False),
            ("Integer", 3, True),
            ("Integer", 3.0, True),
            ("Integer", 3.5, False),
            ("Integer", math.inf, False),
            ("Nonnegative", 0, True),
            ("Nonnegative", -1, False),
            ("Positive", 0, False),
            ("Negative", -0.5, True),
            ("Nonzero", 0.0, False),
            ("String", "", True),
            ("String", b"x", False),
            ("NonEmpty", "", False),
            ("Trimmed", "a b", True),
            ("Trimmed", " a", False),
            ("Boolean", False, True),
            ("Boolean", 0, False),
        ],
    )
    def test_predicate(
        self, builtin_registry: ConstraintRegistry, identifier: str, value: object, expected: bool
    ) -> None:
        assert builtin_registry.lookup(identifier).check(value) is expected

    def test_reason_format(self, builtin_registry: ConstraintRegistry) -> None:
        assert builtin_registry.lookup("Nonnegative").explain(-3) == "expected >= 0, got -3"
        assert builtin_registry.lookup("String").explain(3) == "expected string, got int"


class TestUnits:
    def test_unit_constraint(self) -> None:
        constraint = unit("celsius")
        assert constraint.identifier == "Unit<celsius>"
        assert constraint.family == UNIT_FAMILY
        assert constraint.parameter == "celsius"
        assert constraint.requires == frozenset({"Number"})

    def test_phantom_tag_always_holds(self, boundary: Boundary) -> None:
        temp = boundary.declare_concept(["Unit<celsius>"])
        assert boundary.narrow(temp, -273.15)
        assert not boundary.narrow(temp, "hot")

    def test_parameter_is_identity(self, boundary: Boundary) -> None:
        celsius = boundary.declare_concept(["Nonnegative", "Unit<celsius>"])
        kelvin = boundary.declare_concept(["Nonnegative", "Unit<kelvin>"])
        assert celsius != kelvin

    def test_two_units_conflict(self, boundary: Boundary) -> None:
        with pytest.raises(ConflictingParameterError) as exc_info:
            boundary.declare_concept(["Unit<celsius>", "Unit<kelvin>"])
        assert exc_info.value.identifiers == ("Unit<celsius>", "Unit<kelvin>")

    def test_spacing_does_not_create_a_second_unit(self, boundary: Boundary) -> None:
        spaced = boundary.declare_concept(["Unit< year>", "Unit<year>"])
        assert spaced == boundary.declare_concept(["Unit<year>"])

    def test_register_units_requires_number(self, registry: ConstraintRegistry) -> None:
        from littag.domain.errors import UnknownImplicationError

        with pytest.raises(UnknownImplicationError):
            register_units(registry, "year")
