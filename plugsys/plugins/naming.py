"""
File-naming protocol for plugin sources.

A plugin with base name ``P`` lives at ``P.py`` while enabled and at
``P.disabled.py`` while disabled. Everything that needs to reason about the
two encodings goes through the helpers below.
"""

from __future__ import annotations

from pathlib import Path

DISABLED_MARKER = "disabled"
PLUGIN_EXTENSION = ".py"
DEFAULT_SUFFIX = "Plugin"


def split_encoding(path: Path | str) -> tuple[Path, str, bool]:
    """
    Split a plugin location into its encoding parts.

    Returns:
        (base, extension, disabled) where ``base`` is the directory joined with
        the bare plugin name, e.g. ``a/FooPlugin.disabled.py`` gives
        ``(Path("a/FooPlugin"), ".py", True)``.
    """
    path = Path(path)
    extension = path.suffix
    stem = path.name[: len(path.name) - len(extension)] if extension else path.name

    marker = f".{DISABLED_MARKER}"
    disabled = stem.endswith(marker) and stem != marker
    if disabled:
        stem = stem[: -len(marker)]

    return path.with_name(stem), extension, disabled


def base_name(path: Path | str) -> str:
    """Plugin name with both the extension and the disabled marker removed."""
    base, _, _ = split_encoding(path)
    return base.name


def enabled_path(path: Path | str) -> Path:
    """Location of the enabled encoding for the plugin at ``path``."""
    base, extension, _ = split_encoding(path)
    return base.with_name(f"{base.name}{extension}")


def disabled_path(path: Path | str) -> Path:
    """Location of the disabled encoding for the plugin at ``path``."""
    base, extension, _ = split_encoding(path)
    return base.with_name(f"{base.name}.{DISABLED_MARKER}{extension}")


def derive_identity(path: Path | str) -> str:
    """
    Derive a class identity from a plugin file name.

    The identity is the base name itself, so ``FooPlugin.py`` and
    ``FooPlugin.disabled.py`` both resolve to ``FooPlugin``.
    """
    return base_name(path)


def is_candidate(path: Path | str, suffix: str = DEFAULT_SUFFIX) -> bool:
    """Check whether ``path`` names a plugin source under the suffix convention."""
    path = Path(path)
    if path.suffix != PLUGIN_EXTENSION:
        return False
    name = base_name(path)
    return bool(name) and name.endswith(suffix)
