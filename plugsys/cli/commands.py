"""CLI commands for plugsys."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from plugsys import __logo__, __version__

app = typer.Typer(
    name="plugsys",
    help=f"{__logo__} plugsys - plugin discovery and dispatch",
    no_args_is_help=True,
)

console = Console()

ACTIONS = ["list", "enable", "disable", "toggle", "run", "doctor", "scaffold"]


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} plugsys v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """plugsys - plugin discovery and dispatch."""
    pass


def _load_registry(directory: Path | None):
    """Load config, set up logging and autoload the plugin directory."""
    from plugsys.config.loader import load_config
    from plugsys.core.logger import configure_logger
    from plugsys.plugins.registry import PluginRegistry

    config = load_config()
    configure_logger(config)
    if directory is not None:
        config.plugins.directory = str(directory)

    registry = PluginRegistry.from_config(config)
    registry.autoload(nested=config.plugins.nested)
    return config, registry


@app.command("plugins")
def plugins_cmd(
    action: str = typer.Argument(
        "list",
        help="Action: list|enable|disable|toggle|run|doctor|scaffold",
    ),
    arguments: list[str] | None = typer.Argument(None, help="Arguments passed to the hook for run"),
    target: str = typer.Option("", "--target", "-t", help="Plugin name for enable/disable/toggle/doctor/scaffold, hook name for run"),
    directory: Path | None = typer.Option(None, "--directory", "-d", help="Plugin directory (overrides config)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing plugin file for scaffold"),
):
    """Manage plugins (list/enable/disable/toggle/run/doctor/scaffold)."""
    action = action.strip().lower()

    if action == "scaffold":
        from plugsys.config.loader import load_config
        from plugsys.plugins.scaffold import scaffold_plugin

        if not target:
            console.print("[red]--target is required for scaffold[/red]")
            raise typer.Exit(1)
        config = load_config()
        base_dir = directory if directory is not None else config.plugins_path
        try:
            plugin_path = scaffold_plugin(base_dir, name=target, overwrite=force, suffix=config.plugins.suffix)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]✓[/green] Scaffolded plugin: [cyan]{plugin_path}[/cyan]")
        return

    if action not in ACTIONS:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print(f"[dim]Available actions: {', '.join(ACTIONS)}[/dim]")
        raise typer.Exit(1)

    _, registry = _load_registry(directory)

    if action == "list":
        if not registry.plugins:
            console.print("[yellow]No plugins found.[/yellow]")
            console.print("[dim]Create one: plugsys plugins scaffold --target <name>[/dim]")
            return

        table = Table(title="Plugins")
        table.add_column("Identity", style="cyan")
        table.add_column("Namespace")
        table.add_column("Title")
        table.add_column("Version")
        table.add_column("Author")
        table.add_column("Status")
        table.add_column("Path")

        for p in registry.plugins:
            status = "[green]Enabled[/green]" if p.is_enabled() else "[red]Disabled[/red]"
            table.add_row(
                p.identity,
                p.namespace or "-",
                str(p.title or p.name or "-"),
                str(p.version or "-"),
                str(p.author or "-"),
                status,
                str(p.path or "-"),
            )

        console.print(table)
        enabled, disabled = registry.partition()
        console.print(
            f"\n[dim]Total: {len(registry.plugins)} plugin(s), "
            f"{len(enabled)} enabled, {len(disabled)} disabled[/dim]"
        )
        return

    if action in {"enable", "disable", "toggle"}:
        if not target:
            console.print(f"[red]--target is required for {action}[/red]")
            raise typer.Exit(1)
        plugin = registry.get(target)
        if plugin is None:
            console.print(f"[red]Plugin not found: {target}[/red]")
            raise typer.Exit(1)
        try:
            getattr(registry, action)(plugin)
        except OSError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)
        state = "Enabled" if plugin.is_enabled() else "Disabled"
        console.print(f"[green]✓[/green] {state} plugin: [cyan]{plugin.identity}[/cyan]")
        return

    if action == "run":
        if not target:
            console.print("[red]--target is required for run (hook name)[/red]")
            raise typer.Exit(1)
        results = registry.execute_all(target, *(arguments or []))
        if not results:
            console.print("[yellow]No enabled plugins.[/yellow]")
            return

        table = Table(title=f"Hook: {target}")
        table.add_column("Plugin", style="cyan")
        table.add_column("Status")
        table.add_column("Return")
        table.add_column("Seconds", justify="right")
        for result in results:
            if result.success:
                status = "[green]OK[/green]"
            elif result.error is not None:
                status = f"[red]ERROR[/red] {result.error}"
            else:
                status = "[yellow]MISSING[/yellow]"
            table.add_row(
                result.plugin.identity,
                status,
                "-" if result.return_value is None else str(result.return_value),
                f"{result.elapsed:.4f}",
            )
        console.print(table)
        if not all(result.success for result in results):
            raise typer.Exit(1)
        return

    if action == "doctor":
        report = registry.doctor(target or None)
        rows = report if isinstance(report, list) else [report]
        if not rows:
            console.print("[yellow]No plugins to diagnose.[/yellow]")
            return
        table = Table(title="Plugin Doctor")
        table.add_column("Plugin", style="cyan")
        table.add_column("Status")
        table.add_column("Issues")
        for item in rows:
            issues = item.get("issues", [])
            issue_text = "; ".join(str(v) for v in issues) if issues else "-"
            status = "[green]OK[/green]" if item.get("ok") else "[red]FAIL[/red]"
            table.add_row(str(item.get("plugin", "")), status, issue_text)
        console.print(table)
        if not all(bool(item.get("ok")) for item in rows):
            raise typer.Exit(1)
        return


if __name__ == "__main__":
    app()
