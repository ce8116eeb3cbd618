"""Plugin discovery and constraint-pack loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
Plugins run in registration order, so a pack may reference constraints
registered by an earlier one (the built-in pack is always first).
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from littag.domain.errors import ConfigurationError
from littag.plugins.hookspecs import LittagHookSpec

if TYPE_CHECKING:
    from littag.engine.registry import ConstraintRegistry

PROJECT_NAME = "littag"
ENTRY_POINT_GROUP = "littag.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and setup-time hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LittagHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``littag.plugins`` entry point group.

        Returns a list of registered plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. the built-in pack)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        """Names of registered plugins, in registration order."""
        return [name for name, _plugin in self._pm.list_name_plugin()]

    # ------------------------------------------------------------------
    # Setup hooks
    # ------------------------------------------------------------------

    def register_constraints(self, registry: ConstraintRegistry) -> list[str]:
        """Let every plugin register constraints, in registration order.

        Returns warnings for plugins that crashed. Configuration errors
        (duplicate or dangling identifiers) propagate.
        """
        warnings: list[str] = []
        for impl in self._pm.hook.register_constraints.get_hookimpls():
            try:
                impl.function(registry=registry)
            except ConfigurationError:
                raise
            except Exception:
                logger.warning(
                    "Plugin %s failed to register constraints", impl.plugin_name, exc_info=True
                )
                warnings.append(f"Plugin {impl.plugin_name} failed to register constraints")
        return warnings

    def collect_concepts(self) -> tuple[dict[str, list[str]], list[str]]:
        """Gather concept declarations from all plugins.

        Returns ``(concepts, warnings)``. Later plugins cannot silently
        override an earlier plugin's concept name; the clash is a warning
        and the first declaration wins.
        """
        concepts: dict[str, list[str]] = {}
        warnings: list[str] = []
        for impl in self._pm.hook.declare_concepts.get_hookimpls():
            try:
                declared = impl.function()
            except Exception:
                logger.warning(
                    "Plugin %s failed to declare concepts", impl.plugin_name, exc_info=True
                )
                warnings.append(f"Plugin {impl.plugin_name} failed to declare concepts")
                continue
            if declared is None:
                continue
            if not isinstance(declared, dict):
                warnings.append(f"Plugin {impl.plugin_name} returned non-dict concepts")
                continue
            for name, identifiers in declared.items():
                if name in concepts:
                    warnings.append(f"Concept {name!r} from {impl.plugin_name} ignored")
                    continue
                concepts[name] = list(identifiers)
        return concepts, warnings

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
