"""Plugin discovery, enable/disable state and hook dispatch."""

from plugsys.plugins.errors import (
    AttributeNotFoundError,
    PluginError,
    PluginLoadError,
    PluginNotFoundError,
)
from plugsys.plugins.hooks import HookEvent
from plugsys.plugins.loader import PluginLoader
from plugsys.plugins.plugin import ExecutionResult, Plugin
from plugsys.plugins.registry import PluginRegistry
from plugsys.plugins.scaffold import scaffold_plugin

__all__ = [
    "Plugin", "ExecutionResult",
    "PluginLoader", "PluginRegistry",
    "HookEvent",
    "PluginError", "AttributeNotFoundError", "PluginNotFoundError", "PluginLoadError",
    "scaffold_plugin",
]
