"""Tests for the Constraint definition type."""

from littag.domain.constraints import Constraint


class TestConstraint:
    def test_define_canonicalizes(self) -> None:
        c = Constraint.define(" Positive ", lambda v: v > 0, implies=[" Nonnegative"])
        assert c.identifier == "Positive"
        assert c.implies == frozenset({"Nonnegative"})

    def test_family_and_parameter(self) -> None:
        c = Constraint.define("Unit<year>", lambda v: True)
        assert c.family == "Unit"
        assert c.parameter == "year"

    def test_explain_defaults_to_identifier(self) -> None:
        c = Constraint.define("Even", lambda v: v % 2 == 0)
        assert c.explain(3) == "Even"

    def test_explain_uses_reason(self) -> None:
        c = Constraint.define("Even", lambda v: v % 2 == 0, reason=lambda v: f"{v} is odd")
        assert c.explain(3) == "3 is odd"

    def test_check_coerces_to_bool(self) -> None:
        c = Constraint.define("Truthy", lambda v: v)
        assert c.check(1) is True
        assert c.check(0) is False

    def test_references(self) -> None:
        c = Constraint.define("X", lambda v: True, implies=["A"], requires=["B"])
        assert c.references == frozenset({"A", "B"})

    def test_to_dict(self) -> None:
        c = Constraint.define(
            "Integer", lambda v: True, implies=["Finite"], requires=["Number"], description="whole"
        )
        assert c.to_dict() == {
            "id": "Integer",
            "implies": ["Finite"],
            "requires": ["Number"],
            "description": "whole",
        }

    def test_equality_ignores_callables(self) -> None:
        a = Constraint.define("X", lambda v: True)
        b = Constraint.define("X", lambda v: False)
        assert a == b
