"""``tctl list`` and ``tctl show`` — browse discovered tools.

Exit Codes:
    0 — Success (including "no tools found").
    1 — Unknown tool name or unknown ``--source``.
"""

from __future__ import annotations

import sys

import click

from tctl.cli.common import load_config, require_sources, scan
from tctl.cli.output import print_json, print_tool_details, print_tool_table


@click.command("list")
@click.option("--source", "-s", default=None, help="Only list tools from this source.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format: text (default) or json.")
def list_command(source: str | None, output_format: str) -> None:
    """List all tools from all registered sources."""
    cfg = load_config()
    registry = scan(require_sources(cfg, source))
    tools = sorted(registry.all(), key=lambda t: t.name)

    if output_format == "json":
        print_json([t.to_dict() for t in tools])
        return
    if not tools:
        click.echo("No tools found.")
        return
    source_names = {s.path: s.name for s in cfg.sources}
    print_tool_table(tools, source_names)


@click.command("show")
@click.argument("tool_name")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format: text (default) or json.")
def show_command(tool_name: str, output_format: str) -> None:
    """Show every piece of metadata extracted from a tool's docstring."""
    cfg = load_config()
    registry = scan(require_sources(cfg))
    tool = registry.get(tool_name)
    if tool is None:
        click.echo(f"Unknown tool: {tool_name}")
        click.echo("Run 'tctl list' to see available tools.")
        sys.exit(1)

    if output_format == "json":
        print_json(tool.to_dict())
    else:
        print_tool_details(tool)
