"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, littag.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from littag.domain.results import EvaluationMode


class EngineConfig(BaseModel):
    """[engine] section."""

    model_config = {"frozen": True}

    boundary_mode: EvaluationMode = EvaluationMode.COLLECT_ALL
    verify_implications: bool = False
    builtins: bool = True
    units: list[str] = Field(default_factory=list)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class LittagConfig(BaseModel):
    """Root configuration composing all sections.

    ``concepts`` maps a concept name to its constraint identifiers, e.g.
    ``Age = ["Integer", "Nonnegative", "Unit<year>"]``.
    """

    model_config = {"frozen": True}

    engine: EngineConfig = Field(default_factory=EngineConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    concepts: dict[str, list[str]] = Field(default_factory=dict)
