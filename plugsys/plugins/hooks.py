"""
Hook capability interface.

Hooks are optional methods a plugin may implement. The well-known ones are
declared here as runtime-checkable protocols so support can be tested with
``isinstance``; any other public method name can still be dispatched and is
checked against the plugin type.
"""

from enum import StrEnum
from typing import Any, Protocol, runtime_checkable


class HookEvent(StrEnum):
    """Well-known hook names dispatched across a registry."""

    ON_START = "on_start"          # Host is starting, receives the worker
    ON_ENABLED = "on_enabled"      # Plugin was switched on
    ON_DISABLED = "on_disabled"    # Plugin was switched off


@runtime_checkable
class SupportsStart(Protocol):
    def on_start(self, worker: Any) -> Any: ...


@runtime_checkable
class SupportsEnabled(Protocol):
    def on_enabled(self) -> Any: ...


@runtime_checkable
class SupportsDisabled(Protocol):
    def on_disabled(self) -> Any: ...


HOOK_PROTOCOLS: dict[str, type] = {
    HookEvent.ON_START.value: SupportsStart,
    HookEvent.ON_ENABLED.value: SupportsEnabled,
    HookEvent.ON_DISABLED.value: SupportsDisabled,
}


def supports(plugin: object, name: str) -> bool:
    """
    Check whether ``plugin`` exposes a callable hook called ``name``.

    Private names never count as hooks. The check is made against the plugin
    type, so callables stored on the instance are ignored.
    """
    hook_name = name.value if isinstance(name, HookEvent) else str(name)
    if not hook_name or hook_name.startswith("_"):
        return False

    protocol = HOOK_PROTOCOLS.get(hook_name)
    if protocol is not None and not isinstance(plugin, protocol):
        return False

    return callable(getattr(type(plugin), hook_name, None))
