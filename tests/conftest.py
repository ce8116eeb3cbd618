"""Shared pytest fixtures for littag tests."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from littag.builtins import register_builtins, register_units
from littag.engine.boundary import Boundary
from littag.engine.registry import ConstraintRegistry
from littag.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _restore_global_state() -> Iterator[None]:
    """Undo logging and telemetry changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg_level = logging.getLogger("littag").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("littag").setLevel(pkg_level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def registry() -> ConstraintRegistry:
    """Empty, isolated registry."""
    return ConstraintRegistry()


@pytest.fixture
def example_registry() -> ConstraintRegistry:
    """The three-constraint registry from the Age walkthrough.

    Integer(v) = v == floor(v); Nonnegative(v) = v >= 0;
    Positive(v) = v > 0, implying Nonnegative.
    """
    reg = ConstraintRegistry()
    reg.register(
        "Integer",
        lambda v: v == math.floor(v),
        reason=lambda v: f"expected integer, got {v}",
    )
    reg.register(
        "Nonnegative",
        lambda v: v >= 0,
        reason=lambda v: f"expected >= 0, got {v}",
    )
    reg.register(
        "Positive",
        lambda v: v > 0,
        implies=["Nonnegative"],
        reason=lambda v: f"expected > 0, got {v}",
    )
    return reg


@pytest.fixture
def builtin_registry() -> ConstraintRegistry:
    """Built-in pack plus a few units."""
    reg = ConstraintRegistry()
    register_builtins(reg)
    register_units(reg, "year", "celsius", "kelvin")
    return reg


@pytest.fixture
def boundary(builtin_registry: ConstraintRegistry) -> Boundary:
    return Boundary(builtin_registry)


@pytest.fixture
def _isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no LITTAG_* overrides.

    Entry-point plugins are disabled so results don't depend on the
    environment's installed packages.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LITTAG_CONFIG", raising=False)
    monkeypatch.setenv("LITTAG_PLUGINS__ENABLED", "false")
