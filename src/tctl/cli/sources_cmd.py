"""``tctl add|remove|sources`` — manage registered tool directories.

Exit Codes:
    0 — Success.
    1 — Invalid path, unknown source, or the config could not be written.
"""

from __future__ import annotations

from pathlib import Path

import click

from tctl.cli.common import load_config, save_or_exit, scan
from tctl.cli.output import console


@click.command("add")
@click.argument("path", type=click.Path(), default=".", required=False)
@click.option("--name", "-n", default="", help="Custom name for this source.")
def add_command(path: str, name: str) -> None:
    """Register a directory containing tools (default: current directory)."""
    cfg = load_config()
    source = save_or_exit(cfg.add_source, path, name)

    registry = scan([Path(source.path)])
    click.echo(f"✓ Registered: {source.path}")
    click.echo(f"  Name: {source.name}")
    click.echo(f"  Found {len(registry)} tools")


@click.command("remove")
@click.argument("path_or_name")
def remove_command(path_or_name: str) -> None:
    """Unregister a tool directory by path or by source name."""
    cfg = load_config()
    save_or_exit(cfg.remove_source, path_or_name)
    click.echo(f"✓ Removed: {path_or_name}")


@click.command("sources")
@click.option("--tools", "-t", "show_tools", is_flag=True, default=False,
              help="Show tools in each source.")
def sources_command(show_tools: bool) -> None:
    """List registered tool directories."""
    cfg = load_config()
    if not cfg.sources:
        click.echo("No sources registered.")
        click.echo("")
        click.echo("Register a directory with:")
        click.echo("  tctl add <path>")
        return

    console.print()
    console.print("Registered sources:")
    console.print()
    for source in cfg.sources:
        exists = "✓" if Path(source.path).exists() else "✗"
        name = source.name or "(unnamed)"
        console.print(f"  {exists} {name:<16} {source.path}", markup=False, soft_wrap=True)
        if show_tools:
            for tool in sorted(scan([Path(source.path)]).all(), key=lambda t: t.name):
                provides = f" → {tool.provides[0]}" if tool.provides else ""
                console.print(f"      • {tool.name}{provides}", markup=False)

    console.print()
    console.print(f"Config: {cfg.config_dir}", markup=False, soft_wrap=True)
