"""Tests for identifier parsing and concept signatures."""

import pytest

from littag.domain.errors import ConfigurationError, InvalidIdentifierError
from littag.domain.identifiers import (
    ConstraintKey,
    normalize_identifier,
    normalize_signature,
    parameterized,
    parse_identifier,
)


class TestParseIdentifier:
    def test_bare_name(self) -> None:
        assert parse_identifier("Integer") == ConstraintKey("Integer")

    def test_parameterized(self) -> None:
        key = parse_identifier("Unit<celsius>")
        assert key.family == "Unit"
        assert key.parameter == "celsius"
        assert key.is_parameterized

    def test_surrounding_whitespace_ignored(self) -> None:
        assert parse_identifier("  Positive ") == ConstraintKey("Positive")

    def test_parameter_whitespace_ignored(self) -> None:
        assert parse_identifier("Unit< year >") == ConstraintKey("Unit", "year")
        assert normalize_identifier("Unit< m/s>") == "Unit<m/s>"
        assert normalize_signature(["Unit< year>", "Unit<year>"]) == ("Unit<year>",)

    def test_blank_parameter_invalid(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            parse_identifier("Unit<   >")

    def test_round_trip_str(self) -> None:
        assert str(parse_identifier("Unit<m/s>")) == "Unit<m/s>"

    @pytest.mark.parametrize(
        "bad",
        ["", "1Integer", "Unit<>", "Unit<a<b>>", "has space", "Unit<celsius", 42],
    )
    def test_invalid(self, bad: object) -> None:
        with pytest.raises(InvalidIdentifierError):
            parse_identifier(bad)  # type: ignore[arg-type]

    def test_invalid_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_identifier("not valid!")


class TestParameterized:
    def test_formats(self) -> None:
        assert parameterized("Unit", "year") == "Unit<year>"

    def test_rejects_bad_parameter(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            parameterized("Unit", "a>b")


class TestNormalizeSignature:
    def test_sorted_and_deduplicated(self) -> None:
        assert normalize_signature(["Positive", "Integer", "Positive"]) == (
            "Integer",
            "Positive",
        )

    def test_order_independent(self) -> None:
        assert normalize_signature(["B", "A"]) == normalize_signature(["A", "B"])

    def test_parameter_participates_in_identity(self) -> None:
        sig = normalize_signature(["Unit<kelvin>", "Unit<celsius>"])
        assert sig == ("Unit<celsius>", "Unit<kelvin>")

    def test_canonical_spelling(self) -> None:
        assert normalize_identifier(" Integer") == "Integer"
        assert normalize_signature([" Integer", "Integer "]) == ("Integer",)

    def test_empty(self) -> None:
        assert normalize_signature([]) == ()
