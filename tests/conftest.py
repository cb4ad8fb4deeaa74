"""Shared fixtures: throwaway plugin sources on disk."""

import sys
import textwrap
from pathlib import Path

import pytest
from loguru import logger

PLUGIN_TEMPLATE = """\
from plugsys.plugins import Plugin


class {identity}(Plugin):
    name = "{name}"
    title = "{title}"
{body}
"""

DEFAULT_BODY = """\
def on_start(self, worker=None):
    return f"{self.name} started"
"""


def write_plugin(
    directory: Path,
    filename: str,
    identity: str | None = None,
    body: str = DEFAULT_BODY,
    header: str = "",
) -> Path:
    """Write a plugin module; ``identity`` defaults to the class name the file name implies."""
    directory.mkdir(parents=True, exist_ok=True)
    if identity is None:
        identity = filename.split(".")[0]
    source = PLUGIN_TEMPLATE.format(
        identity=identity,
        name=identity.lower(),
        title=identity,
        body=textwrap.indent(textwrap.dedent(body), "    ") if body else "    pass\n",
    )
    path = directory / filename
    path.write_text(textwrap.dedent(header) + source, encoding="utf-8")
    return path


@pytest.fixture
def plugin_dir(tmp_path):
    return tmp_path / "plugins"


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def make_plugin():
    return write_plugin
