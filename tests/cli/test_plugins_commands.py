"""Tests for plugins CLI commands."""

import pytest
from typer.testing import CliRunner

from plugsys.config.schema import Config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_config(monkeypatch, plugin_dir, reset_logger):
    cfg = Config()
    cfg.plugins.directory = str(plugin_dir)
    cfg.logging.level = "WARNING"
    monkeypatch.setattr("plugsys.config.loader.load_config", lambda: cfg)
    return cfg


def test_version(runner):
    from plugsys.cli.commands import app

    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "plugsys v" in result.output


def test_list_without_plugins(runner, cli_config):
    from plugsys.cli.commands import app

    result = runner.invoke(app, ["plugins", "list"])
    assert result.exit_code == 0
    assert "No plugins found" in result.output


def test_list_disable_enable_toggle(runner, cli_config, plugin_dir, make_plugin):
    from plugsys.cli.commands import app

    make_plugin(plugin_dir, "AlphaPlugin.py")
    make_plugin(plugin_dir / "extra", "BetaPlugin.py")

    result_list = runner.invoke(app, ["plugins", "list"])
    assert result_list.exit_code == 0
    assert "Total: 2 plugin(s)" in result_list.output

    result_disable = runner.invoke(app, ["plugins", "disable", "--target", "AlphaPlugin"])
    assert result_disable.exit_code == 0
    assert (plugin_dir / "AlphaPlugin.disabled.py").exists()

    result_enable = runner.invoke(app, ["plugins", "enable", "-t", "AlphaPlugin"])
    assert result_enable.exit_code == 0
    assert (plugin_dir / "AlphaPlugin.py").exists()

    result_toggle = runner.invoke(app, ["plugins", "toggle", "-t", "BetaPlugin"])
    assert result_toggle.exit_code == 0
    assert (plugin_dir / "extra" / "BetaPlugin.disabled.py").exists()


def test_enable_unknown_plugin(runner, cli_config):
    from plugsys.cli.commands import app

    result = runner.invoke(app, ["plugins", "enable", "--target", "GhostPlugin"])
    assert result.exit_code == 1
    assert "Plugin not found" in result.output


def test_enable_requires_target(runner, cli_config):
    from plugsys.cli.commands import app

    result = runner.invoke(app, ["plugins", "enable"])
    assert result.exit_code == 1


def test_run_hook(runner, cli_config, plugin_dir, make_plugin):
    from plugsys.cli.commands import app

    make_plugin(plugin_dir, "AlphaPlugin.py")

    result = runner.invoke(app, ["plugins", "run", "--target", "on_start", "w1"])
    assert result.exit_code == 0
    assert "OK" in result.output


def test_run_hook_missing_on_one_plugin(runner, cli_config, plugin_dir, make_plugin):
    from plugsys.cli.commands import app

    make_plugin(plugin_dir, "AlphaPlugin.py")
    make_plugin(plugin_dir, "BetaPlugin.py", body="")

    result = runner.invoke(app, ["plugins", "run", "--target", "on_start"])
    assert result.exit_code == 1
    assert "MISSING" in result.output


def test_doctor(runner, cli_config, plugin_dir, make_plugin):
    from plugsys.cli.commands import app

    make_plugin(plugin_dir, "AlphaPlugin.py", body='dependencies = ["BetaPlugin"]\n')

    result = runner.invoke(app, ["plugins", "doctor"])
    assert result.exit_code == 1
    assert "Plugin Doctor" in result.output


def test_scaffold_then_list(runner, cli_config, plugin_dir):
    from plugsys.cli.commands import app

    result = runner.invoke(app, ["plugins", "scaffold", "--target", "hello"])
    assert result.exit_code == 0
    assert (plugin_dir / "HelloPlugin.py").exists()

    again = runner.invoke(app, ["plugins", "scaffold", "--target", "hello"])
    assert again.exit_code == 1

    listed = runner.invoke(app, ["plugins", "list"])
    assert "Total: 1 plugin(s)" in listed.output


def test_unknown_action(runner, cli_config):
    from plugsys.cli.commands import app

    result = runner.invoke(app, ["plugins", "explode"])
    assert result.exit_code == 1
    assert "Unknown action" in result.output
