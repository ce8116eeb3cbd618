"""Pluggy hook specifications for littag constraint packs.

Both hooks run once, during initialization, before the registry freezes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from littag.engine.registry import ConstraintRegistry

hookspec = pluggy.HookspecMarker("littag")
hookimpl = pluggy.HookimplMarker("littag")


class LittagHookSpec:
    """Hook specifications for the littag plugin system."""

    @hookspec
    def register_constraints(self, registry: ConstraintRegistry) -> None:
        """Register additional constraints on *registry*."""

    @hookspec
    def declare_concepts(self) -> dict[str, list[str]] | None:
        """Return concept name -> constraint identifiers to declare at startup."""
