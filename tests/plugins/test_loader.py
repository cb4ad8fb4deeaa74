"""Tests for the plugin loader."""

import pytest

from plugsys.plugins import AttributeNotFoundError, Plugin, PluginLoadError, PluginLoader


def test_load_derives_identity_from_file_name(plugin_dir, make_plugin):
    path = make_plugin(plugin_dir, "FooPlugin.py")

    plugin = PluginLoader().load(path)

    assert type(plugin).__name__ == "FooPlugin"
    assert plugin.identity == "FooPlugin"
    assert plugin.path == path
    assert plugin.is_enabled()


def test_load_disabled_file_strips_marker(plugin_dir, make_plugin):
    path = make_plugin(plugin_dir, "FooPlugin.disabled.py", identity="FooPlugin")

    plugin = PluginLoader().load(path)

    assert plugin.identity == "FooPlugin"
    assert plugin.is_disabled()
    plugin.enable()
    assert plugin.path == plugin_dir / "FooPlugin.py"


def test_load_uses_file_name_as_class_name(plugin_dir, make_plugin):
    path = make_plugin(plugin_dir, "fooPlugin.py", identity="fooPlugin")

    plugin = PluginLoader().load(path)

    assert plugin.identity == "fooPlugin"
    assert type(plugin).__name__ == "fooPlugin"


def test_constructor_error_becomes_load_error(plugin_dir):
    plugin_dir.mkdir()
    path = plugin_dir / "OddPlugin.py"
    path.write_text("class OddPlugin:\n    def __init__(self):\n        pass\n")

    with pytest.raises(PluginLoadError, match="OddPlugin"):
        PluginLoader().load(path)


def test_declared_identity_wins(plugin_dir, make_plugin):
    path = make_plugin(
        plugin_dir,
        "FooPlugin.py",
        identity="RealPlugin",
        header='__plugin__ = "RealPlugin"\n',
    )

    plugin = PluginLoader().load(path)

    assert plugin.identity == "RealPlugin"
    assert type(plugin).__name__ == "RealPlugin"


def test_empty_declared_identity_is_ignored(plugin_dir, make_plugin):
    path = make_plugin(plugin_dir, "FooPlugin.py", header='__plugin__ = ""\n')

    assert PluginLoader().load(path).identity == "FooPlugin"


def test_load_applies_attributes(plugin_dir, make_plugin):
    path = make_plugin(plugin_dir, "FooPlugin.py")

    plugin = PluginLoader().load(path, {"author": "Ada", "version": "v2.0"}, namespace="tools")

    assert plugin.author == "Ada"
    assert plugin.version == "v2.0"
    assert plugin.namespace == "tools"


def test_load_rejects_unknown_attribute(plugin_dir, make_plugin):
    path = make_plugin(plugin_dir, "FooPlugin.py")

    with pytest.raises(AttributeNotFoundError):
        PluginLoader().load(path, {"colour": "red"})


def test_load_missing_class(plugin_dir, make_plugin):
    path = make_plugin(plugin_dir, "FooPlugin.py", identity="BarPlugin")

    with pytest.raises(PluginLoadError, match="FooPlugin"):
        PluginLoader().load(path)


def test_load_import_error(plugin_dir):
    plugin_dir.mkdir()
    path = plugin_dir / "BrokenPlugin.py"
    path.write_text("def broken(:\n")

    with pytest.raises(PluginLoadError):
        PluginLoader().load(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(PluginLoadError):
        PluginLoader().load(tmp_path / "GhostPlugin.py")


def test_registered_factory_wins_over_module(plugin_dir, make_plugin):
    class ReplacementPlugin(Plugin):
        name = "replacement"

    path = make_plugin(plugin_dir, "FooPlugin.py")
    loader = PluginLoader()
    loader.register("FooPlugin", ReplacementPlugin)

    plugin = loader.load(path)

    assert isinstance(plugin, ReplacementPlugin)
    assert plugin.identity == "FooPlugin"
    assert plugin.path == path


def test_create_from_factory_keeps_state_in_memory():
    class MemoryPlugin(Plugin):
        pass

    loader = PluginLoader({"memory": MemoryPlugin})
    plugin = loader.create("memory", {"title": "In memory"})

    assert plugin.identity == "memory"
    assert plugin.title == "In memory"
    assert plugin.path is None
    assert plugin.is_enabled()
    plugin.disable()
    assert plugin.is_disabled()


def test_create_unknown_identity():
    with pytest.raises(PluginLoadError):
        PluginLoader().create("nothing")


def test_factory_must_return_plugin():
    loader = PluginLoader()
    loader.register("bad", lambda attributes: object())

    with pytest.raises(PluginLoadError):
        loader.create("bad")


def test_register_and_unregister():
    loader = PluginLoader()
    loader.register("one", Plugin)

    assert loader.registered() == ["one"]
    assert loader.unregister("one") is True
    assert loader.unregister("one") is False

    with pytest.raises(ValueError):
        loader.register("", Plugin)
