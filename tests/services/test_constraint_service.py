"""Tests for ConstraintService — list, explain, check."""

from __future__ import annotations

import pytest

from littag.engine.boundary import Boundary
from littag.engine.registry import ConstraintRegistry
from littag.services.constraints import ConstraintService, parse_raw
from littag.services.telemetry import enable_telemetry


@pytest.fixture
def service(boundary: Boundary) -> ConstraintService:
    boundary.declare_concept(["Integer", "Nonnegative", "Unit<year>"], name="Age")
    return ConstraintService(boundary)


class TestParseRaw:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("42", 42),
            ("-3.5", -3.5),
            ("true", True),
            ("null", None),
            ('"42"', "42"),
            ("abc", "abc"),
            ("[1, 2]", "[1, 2]"),
            ('{"a": 1}', '{"a": 1}'),
        ],
    )
    def test_parse(self, text: str, expected: object) -> None:
        assert parse_raw(text) == expected


class TestListConstraints:
    def test_lists_registry_and_concepts(self, service: ConstraintService) -> None:
        result = service.list_constraints()
        assert result.ok
        assert result.op == "constraints"
        ids = [item["id"] for item in result.data["items"]]
        assert "Integer" in ids
        assert "Unit<year>" in ids
        assert result.data["count"] == len(ids)
        assert result.data["concepts"]["Age"] == [
            "Finite",
            "Integer",
            "Nonnegative",
            "Number",
            "Unit<year>",
        ]


class TestExplain:
    def test_identifiers(self, service: ConstraintService) -> None:
        result = service.explain(["Positive", "Nonnegative"])
        assert result.ok
        assert result.data["checks"] == ["Number", "Positive"]
        assert result.data["implied"] == ["Nonnegative", "Nonzero"]
        assert result.data["prerequisites"] == {"Positive": ["Number"]}
        assert "concept" not in result.data

    def test_concept_name(self, service: ConstraintService) -> None:
        result = service.explain(["Age"])
        assert result.data["concept"] == "Age"
        assert result.data["checks"] == ["Number", "Integer", "Nonnegative", "Unit<year>"]

    def test_unknown_identifier(self, service: ConstraintService) -> None:
        result = service.explain(["Prime"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_CONSTRAINT"

    def test_conflicting_units(self, service: ConstraintService) -> None:
        result = service.explain(["Unit<celsius>", "Unit<kelvin>"])
        assert result.error is not None
        assert result.error.code == "CONFLICTING_PARAMETER"

    def test_telemetry_meta(self, service: ConstraintService) -> None:
        enable_telemetry()
        result = service.explain(["Positive"])
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "ConstraintService.explain"
        assert telemetry["children"][0]["annotations"] == {"checks": 2}


class TestCheck:
    def test_trusted(self, service: ConstraintService) -> None:
        result = service.check(["Age"], "42")
        assert result.ok
        assert result.data["value"] == 42
        assert result.data["trusted"] is True
        assert result.data["mode"] == "collect_all"
        assert result.data["failures"] == []

    def test_rejected_lists_all(self, service: ConstraintService) -> None:
        result = service.check(["Integer", "Nonnegative"], "-3.5")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "REJECTED"
        assert [f["constraint"] for f in result.error.detail["failures"]] == [
            "Integer",
            "Nonnegative",
        ]
        assert result.error.message == (
            "Integer: expected integer, got -3.5; Nonnegative: expected >= 0, got -3.5"
        )

    def test_fast_mode(self, service: ConstraintService) -> None:
        result = service.check(["Integer", "Nonnegative"], "-3.5", mode="fast")
        assert result.data["mode"] == "fast"
        assert len(result.data["failures"]) == 1

    def test_skipped_reported(self, service: ConstraintService) -> None:
        result = service.check(["Age"], "abc")
        assert result.data["value"] == "abc"
        assert result.data["skipped"] == ["Integer", "Nonnegative", "Unit<year>"]
        assert [f["constraint"] for f in result.data["failures"]] == ["Number"]

    def test_configuration_error(self, service: ConstraintService) -> None:
        result = service.check(["Prime"], "1")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_CONSTRAINT"
        assert result.data == {}


class TestVerifiedImplications:
    @pytest.fixture
    def unsound_service(self, registry: ConstraintRegistry) -> ConstraintService:
        registry.register("Big", lambda v: v > 100)
        registry.register("Huge", lambda v: v > 10, implies=["Big"])
        return ConstraintService(Boundary(registry, verify_implications=True))

    def test_violation_becomes_error_result(self, unsound_service: ConstraintService) -> None:
        result = unsound_service.check(["Huge"], "50")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IMPLICATION_VIOLATION"
        assert "'Huge' implies 'Big'" in result.error.message

    def test_fast_mode_violation(self, unsound_service: ConstraintService) -> None:
        result = unsound_service.check(["Huge"], "50", mode="fast")
        assert result.error is not None
        assert result.error.code == "IMPLICATION_VIOLATION"

    def test_sound_value_passes(self, unsound_service: ConstraintService) -> None:
        assert unsound_service.check(["Huge"], "500").ok
