"""
Plugin loader.

Turns a plugin source file into a Plugin instance. The class to instantiate
is resolved in this order:

1. ``__plugin__`` declared at module level (a non-empty string)
2. the file's base name (``FooPlugin.disabled.py`` -> ``FooPlugin``)

Constructor failures other than unknown attributes surface as PluginLoadError.

An identity can also be bound to a factory with ``register``; registered
factories win over module attributes and can be used without any file.
"""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Mapping

from loguru import logger

from plugsys.plugins import naming
from plugsys.plugins.errors import AttributeNotFoundError, PluginLoadError
from plugsys.plugins.plugin import Plugin

PluginFactory = Callable[..., Plugin]

MODULE_PREFIX = "plugsys.plugins.loaded"


class PluginLoader:
    """Resolve plugin sources and registered identities to Plugin instances."""

    def __init__(self, factories: Mapping[str, PluginFactory] | None = None):
        self._factories: dict[str, PluginFactory] = dict(factories or {})

    def register(self, identity: str, factory: PluginFactory) -> None:
        """Bind ``identity`` to a factory taking an attribute mapping."""
        if not identity:
            raise ValueError("Plugin identity must not be empty")
        self._factories[identity] = factory
        logger.debug(f"Plugin factory registered: {identity}")

    def unregister(self, identity: str) -> bool:
        """Drop a registered factory. Returns True if it existed."""
        return self._factories.pop(identity, None) is not None

    def registered(self) -> list[str]:
        return list(self._factories)

    def create(self, identity: str, attributes: Mapping[str, Any] | None = None) -> Plugin:
        """Build an in-memory plugin from a registered factory."""
        factory = self._factories.get(identity)
        if factory is None:
            raise PluginLoadError(f"No plugin factory registered for '{identity}'")
        return self._construct(identity, factory, attributes)

    def load(
        self,
        path: Path | str,
        attributes: Mapping[str, Any] | None = None,
        namespace: str = "",
    ) -> Plugin:
        """
        Load the plugin defined in ``path``.

        Args:
            path: Plugin source, in either its enabled or disabled encoding.
            attributes: Initial field values, validated like ``Plugin.fill``.
            namespace: Dotted directory prefix the plugin was found under.

        Returns:
            The constructed plugin, with ``path`` and ``namespace`` set.
        """
        path = Path(path)
        if not path.is_file():
            raise PluginLoadError(f"Plugin source not found: {path}")

        derived = naming.derive_identity(path)
        module_name = ".".join(part for part in (MODULE_PREFIX, namespace, derived) if part)
        module = _load_module(module_name, path)

        declared = getattr(module, "__plugin__", None)
        identity = declared if isinstance(declared, str) and declared else derived

        factory = self._factories.get(identity) or getattr(module, identity, None)
        if factory is None or not callable(factory):
            raise PluginLoadError(f"{path.name} does not define plugin class '{identity}'")

        plugin = self._construct(identity, factory, attributes)
        plugin.path = path
        plugin.namespace = namespace
        logger.debug(f"Loaded plugin {identity} from {path}")
        return plugin

    def _construct(
        self,
        identity: str,
        factory: PluginFactory,
        attributes: Mapping[str, Any] | None,
    ) -> Plugin:
        try:
            plugin = factory(dict(attributes or {}))
        except AttributeNotFoundError:
            raise
        except Exception as e:
            raise PluginLoadError(f"Could not construct plugin '{identity}': {e}") from e
        if not isinstance(plugin, Plugin):
            raise PluginLoadError(
                f"Factory for '{identity}' returned {type(plugin).__name__}, not a Plugin"
            )
        plugin.identity = identity
        return plugin


def _load_module(module_name: str, file_path: Path) -> ModuleType:
    """Dynamically load a Python module from a file path."""
    spec = importlib.util.spec_from_file_location(module_name, str(file_path))
    if spec is None or spec.loader is None:
        raise PluginLoadError(f"Could not create module spec for {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(spec.name, None)
        raise PluginLoadError(f"Failed to import {file_path}: {e}") from e
    return module
