"""
Plugin base class.

A plugin carries its metadata, knows whether it is enabled and can run its
own hooks by name. File-backed plugins keep their state in the file name
(``FooPlugin.py`` vs ``FooPlugin.disabled.py``) and re-read it on every
query; plugins without a backing file keep it in memory.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from loguru import logger

from plugsys.plugins import naming
from plugsys.plugins.errors import AttributeNotFoundError
from plugsys.plugins.hooks import supports


@dataclass
class ExecutionResult:
    """Outcome of running one hook on one plugin."""
    enabled: bool
    success: bool
    plugin: "Plugin"
    method: str
    arguments: tuple = ()
    return_value: Any = None
    elapsed: float = 0.0         # Seconds, wall clock
    error: Exception | None = None


class Plugin:
    """
    Base class for all plugins.

    Metadata fields are listed in ``fields``; only those can be set through
    ``fill``/``set_attribute``. Subclasses extend the tuple to add their own.

    Hooks are plain methods. ``execute`` calls them by name and reports a
    failed result instead of raising when a hook is missing.
    """

    fields: tuple[str, ...] = ("name", "title", "description", "version", "author", "dependencies")

    name: str = ""
    title: str = ""
    description: str = ""
    version: str = "v1.0"
    author: str = ""
    dependencies: list[str] = []

    def __init__(self, attributes: Mapping[str, Any] | None = None):
        self.dependencies = list(type(self).dependencies)
        self.identity = type(self).__name__
        self.namespace = ""
        self.path: Path | None = None
        self._enabled = True
        self.fill(attributes or {})

    def __repr__(self) -> str:
        return f"<{self.identity} name={self.name!r} enabled={self.is_enabled()}>"

    # Attributes

    def fill(self, attributes: Mapping[str, Any]) -> "Plugin":
        """
        Set several fields at once.

        Every key is checked before anything is written, so an unknown key
        leaves the plugin untouched. Values are applied in mapping order.
        """
        for key in attributes:
            if key not in self.fields:
                raise AttributeNotFoundError(key, self)
        for key, value in attributes.items():
            setattr(self, key, value)
        return self

    def set_attribute(self, key: str, value: Any) -> "Plugin":
        if key not in self.fields:
            raise AttributeNotFoundError(key, self)
        setattr(self, key, value)
        return self

    def get_attribute(self, key: str) -> Any:
        """Get a field value, or None if the plugin has no such field."""
        if key not in self.fields:
            return None
        return getattr(self, key, None)

    def has_method(self, name: str) -> bool:
        return supports(self, name)

    # State

    def is_enabled(self) -> bool:
        if self.path is None:
            return self._enabled
        return naming.enabled_path(self.path).exists()

    def is_disabled(self) -> bool:
        return not self.is_enabled()

    def before_enable(self) -> None:
        """Called at the start of every ``enable``."""

    def before_disable(self) -> None:
        """Called at the start of every ``disable``."""

    def enable(self) -> "Plugin":
        self.before_enable()
        if self.path is None:
            self._enabled = True
            return self

        target = naming.enabled_path(self.path)
        if self.is_disabled():
            self._rename(naming.disabled_path(self.path), target)
        self.path = target
        return self

    def disable(self) -> "Plugin":
        self.before_disable()
        if self.path is None:
            self._enabled = False
            return self

        target = naming.disabled_path(self.path)
        if self.is_enabled():
            self._rename(naming.enabled_path(self.path), target)
        self.path = target
        return self

    def toggle(self) -> "Plugin":
        return self.disable() if self.is_enabled() else self.enable()

    def _rename(self, source: Path, target: Path) -> None:
        if target.exists():
            raise FileExistsError(f"Cannot move {source.name}: {target} already exists")
        source.rename(target)
        logger.debug(f"Plugin {self.identity}: {source.name} -> {target.name}")

    # Dispatch

    def execute(self, name: str, arguments: Sequence[Any] = ()) -> ExecutionResult:
        """
        Run the hook ``name`` with ``arguments``.

        Returns:
            ExecutionResult with ``success=False`` and no timing when the hook
            does not exist or raised; the return value and elapsed seconds
            otherwise.
        """
        method = str(name)
        arguments = tuple(arguments)
        result = ExecutionResult(
            enabled=self.is_enabled(),
            success=False,
            plugin=self,
            method=method,
            arguments=arguments,
        )
        if not self.has_method(method):
            return result

        started = time.perf_counter()
        try:
            result.return_value = getattr(self, method)(*arguments)
            result.success = True
        except Exception as e:
            logger.error(f"Hook '{method}' of plugin {self.identity} failed: {e}")
            result.error = e
        result.elapsed = time.perf_counter() - started
        return result
