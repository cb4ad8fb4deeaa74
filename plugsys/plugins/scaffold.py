"""Plugin scaffolding utilities."""

from __future__ import annotations

import re
from pathlib import Path

from plugsys.plugins import naming


def _sanitize_plugin_name(name: str) -> str:
    raw = (name or "").strip()
    cleaned = re.sub(r"[^A-Za-z0-9_-]+", "_", raw)
    cleaned = cleaned.strip("_-")
    return cleaned or "my"


def _class_name(plugin_id: str) -> str:
    parts = re.split(r"[_-]+", plugin_id)
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def _render_template(template_path: Path, replacements: dict[str, str]) -> str:
    content = template_path.read_text(encoding="utf-8")
    for key, value in replacements.items():
        content = content.replace(f"{{{{{key}}}}}", value)
    return content


def scaffold_plugin(
    base_dir: Path,
    name: str,
    overwrite: bool = False,
    suffix: str = naming.DEFAULT_SUFFIX,
) -> Path:
    """Create a plugin source under base_dir and return its path."""
    plugin_id = _sanitize_plugin_name(name)
    identity = _class_name(plugin_id)
    if not identity.endswith(suffix):
        identity = f"{identity}{suffix}"
    if not identity.isidentifier():
        raise ValueError(f"Cannot build a plugin class name from '{name}'")

    root = Path(base_dir).expanduser()
    root.mkdir(parents=True, exist_ok=True)
    out = root / f"{identity}{naming.PLUGIN_EXTENSION}"
    existing = [p for p in (out, naming.disabled_path(out)) if p.exists()]
    if existing:
        if not overwrite:
            raise ValueError(f"Plugin file already exists: {existing[0]}")
        for path in existing:
            path.unlink()

    template = Path(__file__).parent / "templates" / "plugin.py.tpl"
    if not template.exists():
        raise ValueError(f"Plugin template not found: {template}")

    replacements = {
        "identity": identity,
        "plugin_id": plugin_id,
        "title": re.sub(r"(?<!^)(?=[A-Z])", " ", identity),
        "description": f"{plugin_id} plugin",
    }
    out.write_text(_render_template(template, replacements), encoding="utf-8")
    return out
