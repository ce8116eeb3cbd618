"""Initialization phase — build a frozen registry and a ready Boundary.

Order:
  1. Built-in pack (unless ``[engine] builtins = false``)
  2. Entry-point plugins (unless ``[plugins] enabled = false``)
  3. Caller-supplied plugins
  4. Concepts from ``[concepts]``, then plugin-declared concepts
  5. Freeze the registry

After this returns, the registry and plan cache are read-only and safe for
concurrent validation traffic.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from littag.config.settings import LittagSettings
from littag.engine.boundary import Boundary
from littag.engine.registry import ConstraintRegistry
from littag.plugins.builtins import BuiltinsPlugin
from littag.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    """Everything the initialization phase produced."""

    boundary: Boundary
    plugins: PluginManager
    warnings: list[str] = field(default_factory=list)

    @property
    def registry(self) -> ConstraintRegistry:
        return self.boundary.registry


def build_runtime(
    settings: LittagSettings | None = None,
    *,
    extra_plugins: Sequence[object] = (),
) -> Runtime:
    """Populate a registry from *settings* and plugins, declare concepts, freeze.

    Raises:
        ConfigurationError: any registration or concept declaration defect.
    """
    config = (settings or LittagSettings()).to_config()
    engine = config.engine
    warnings: list[str] = []

    pm = PluginManager()
    if engine.builtins:
        pm.register_plugin(BuiltinsPlugin(engine.units), name="builtins")
    elif engine.units:
        warnings.append("[engine] units ignored: built-in constraints are disabled")
    if config.plugins.enabled:
        pm.discover_and_load()
    for plugin in extra_plugins:
        pm.register_plugin(plugin)

    registry = ConstraintRegistry()
    warnings.extend(pm.register_constraints(registry))

    boundary = Boundary(
        registry,
        boundary_mode=engine.boundary_mode,
        verify_implications=engine.verify_implications,
    )

    for name, identifiers in config.concepts.items():
        boundary.declare_concept(identifiers, name=name)

    plugin_concepts, concept_warnings = pm.collect_concepts()
    warnings.extend(concept_warnings)
    for name, identifiers in plugin_concepts.items():
        if name in config.concepts:
            warnings.append(f"Concept {name!r} from a plugin is overridden by configuration")
            continue
        boundary.declare_concept(identifiers, name=name)

    registry.freeze()
    logger.debug(
        "Runtime ready: %d constraints, %d concepts, plugins=%s",
        len(registry),
        len(boundary.concepts()),
        pm.list_plugin_names(),
    )
    return Runtime(boundary=boundary, plugins=pm, warnings=warnings)


def build_boundary(
    settings: LittagSettings | None = None,
    *,
    extra_plugins: Sequence[object] = (),
) -> Boundary:
    """Shortcut for :func:`build_runtime` when only the boundary is needed."""
    return build_runtime(settings, extra_plugins=extra_plugins).boundary
