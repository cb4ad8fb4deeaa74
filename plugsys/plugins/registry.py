"""Plugin registry: discovery, state delegation and collection-wide dispatch."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from loguru import logger

from plugsys.plugins import naming
from plugsys.plugins.errors import PluginLoadError, PluginNotFoundError
from plugsys.plugins.loader import PluginLoader
from plugsys.plugins.plugin import ExecutionResult, Plugin

SKIPPED_DIRECTORIES = {"__pycache__"}  # Symlinked directories are never followed either


class PluginRegistry:
    """
    Ordered collection of plugins.

    The same plugin may be added more than once. Enabled and disabled views
    are rebuilt from each plugin's live state on every call.
    """

    def __init__(
        self,
        directory: Path | str | None = None,
        plugins: Iterable[Plugin] | None = None,
        loader: PluginLoader | None = None,
        suffix: str = naming.DEFAULT_SUFFIX,
        strict: bool = False,
        require_membership: bool = True,
    ):
        self.directory = Path(directory).expanduser() if directory else None
        self.plugins: list[Plugin] = list(plugins or [])
        self.loader = loader or PluginLoader()
        self.suffix = suffix
        self.strict = strict
        self.require_membership = require_membership

    @classmethod
    def from_config(cls, config: Any, loader: PluginLoader | None = None) -> "PluginRegistry":
        """Build a registry from a ``Config`` object."""
        settings = config.plugins
        return cls(
            directory=config.plugins_path,
            loader=loader,
            suffix=settings.suffix,
            strict=settings.strict,
            require_membership=settings.require_membership,
        )

    def __len__(self) -> int:
        return len(self.plugins)

    def __iter__(self):
        return iter(list(self.plugins))

    def __contains__(self, plugin: object) -> bool:
        return any(member is plugin for member in self.plugins)

    # Membership

    def add(self, plugin: Plugin) -> "PluginRegistry":
        self.plugins.append(plugin)
        return self

    def remove(self, plugin: Plugin) -> "PluginRegistry":
        """Drop every entry that is ``plugin`` itself."""
        self.plugins = [member for member in self.plugins if member is not plugin]
        return self

    def get(self, name: str) -> Plugin | None:
        """First plugin whose identity or ``name`` field equals ``name``."""
        for plugin in self.plugins:
            if plugin.identity == name or plugin.name == name:
                return plugin
        return None

    # Views

    def partition(self) -> tuple[list[Plugin], list[Plugin]]:
        """Split the plugins into (enabled, disabled) in one pass."""
        enabled: list[Plugin] = []
        disabled: list[Plugin] = []
        for plugin in self.plugins:
            if plugin.is_enabled():
                enabled.append(plugin)
            else:
                disabled.append(plugin)
        return enabled, disabled

    def enabled_plugins(self) -> list[Plugin]:
        return self.partition()[0]

    def disabled_plugins(self) -> list[Plugin]:
        return self.partition()[1]

    # State delegation

    def _member(self, plugin: Plugin) -> Plugin:
        if self.require_membership and plugin not in self:
            raise PluginNotFoundError(f"Plugin {plugin.identity} is not registered")
        return plugin

    def enable(self, plugin: Plugin) -> Plugin:
        return self._member(plugin).enable()

    def disable(self, plugin: Plugin) -> Plugin:
        return self._member(plugin).disable()

    def toggle(self, plugin: Plugin) -> Plugin:
        return self._member(plugin).toggle()

    def is_enabled(self, plugin: Plugin) -> bool:
        return self._member(plugin).is_enabled()

    def is_disabled(self, plugin: Plugin) -> bool:
        return self._member(plugin).is_disabled()

    # Discovery

    def autoload(self, directory: Path | str | None = None, nested: bool = True) -> "PluginRegistry":
        """
        Load every plugin found under ``directory``.

        Args:
            directory: New discovery root. Keeps the current one if omitted.
            nested: Descend into subdirectories.

        Returns:
            The registry, for chaining.
        """
        if directory:
            self.directory = Path(directory).expanduser()
        if self.directory is None:
            raise ValueError("No plugin directory configured")
        if not self.directory.is_dir():
            logger.warning(f"Plugin directory not found: {self.directory}")
            return self

        before = len(self.plugins)
        self._autoload_directory(self.directory, nested, "")
        logger.info(f"Autoloaded {len(self.plugins) - before} plugin(s) from {self.directory}")
        return self

    def _autoload_directory(self, directory: Path, nested: bool, prefix: str) -> None:
        for path in sorted(directory.iterdir(), key=lambda p: p.name):
            if path.name.startswith("."):
                continue

            if path.is_file() and naming.is_candidate(path, self.suffix):
                self._autoload_plugin(path, prefix)
            elif (
                nested
                and path.is_dir()
                and not path.is_symlink()
                and path.name not in SKIPPED_DIRECTORIES
            ):
                namespace = f"{prefix}.{path.name}" if prefix else path.name
                self._autoload_directory(path, nested, namespace)

    def _autoload_plugin(self, path: Path, namespace: str) -> None:
        try:
            plugin = self.loader.load(path, namespace=namespace)
        except PluginLoadError as e:
            if self.strict:
                raise
            logger.warning(f"Skipping plugin {path}: {e}")
            return
        self.add(plugin)

    # Dispatch

    def execute_all(self, name: str, *arguments: Any) -> list[ExecutionResult]:
        """Run hook ``name`` on every enabled plugin, in registry order."""
        return [
            plugin.execute(name, arguments)
            for plugin in list(self.plugins)
            if plugin.is_enabled()
        ]

    def execute(self, name: str, *arguments: Any) -> bool:
        """
        Run hook ``name`` on every enabled plugin.

        Returns:
            False if any enabled plugin lacks the hook or failed running it.
        """
        success = True
        for result in self.execute_all(name, *arguments):
            if not result.success:
                success = False
        return success

    # Diagnostics

    def doctor(self, identity: str | None = None) -> dict[str, Any] | list[dict[str, Any]]:
        """Check declared dependencies for one plugin or all of them."""
        if identity:
            target = self.get(identity)
            if target is None:
                return {"plugin": identity, "ok": False, "issues": ["Plugin not found"]}
            return self._doctor_single(target)
        return [self._doctor_single(plugin) for plugin in self.plugins]

    def _doctor_single(self, plugin: Plugin) -> dict[str, Any]:
        issues = []
        for dependency in plugin.dependencies or []:
            found = self.get(str(dependency))
            if found is None:
                issues.append(f"Missing dependency: {dependency}")
            elif found.is_disabled():
                issues.append(f"Dependency disabled: {dependency}")
        return {
            "plugin": plugin.identity,
            "ok": len(issues) == 0,
            "issues": issues,
        }
