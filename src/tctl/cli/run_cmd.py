"""``tctl run`` and ``tctl get`` — execute tools.

``run`` executes one tool directly, forwarding every remaining argument.
``get`` ensures an artifact (or intent) is fresh, running producers and
their requirements as needed.

Exit Codes:
    run: the tool's own exit code, or 1 if it is unknown or could not start.
    get: 0 when the target was ensured, 1 otherwise.
"""

from __future__ import annotations

import sys

import click

from tctl.cli.common import load_config, require_sources, scan
from tctl.cli.output import ConsoleReporter, console
from tctl.core.resolver import DataResolver
from tctl.runners.registry import default_runners


@click.command(
    "run",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.argument("tool_name")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def run_command(tool_name: str, args: tuple[str, ...]) -> None:
    """Run a tool by name, passing ARGS through unchanged."""
    registry = scan(require_sources(load_config()))
    tool = registry.get(tool_name)
    if tool is None:
        click.echo(f"Unknown tool: {tool_name}", err=True)
        click.echo("Run 'tctl list' to see available tools.", err=True)
        sys.exit(1)

    console.print(f"[tctl] running: {tool.name}", markup=False)
    result = default_runners().run(tool, list(args))
    if result.error is not None:
        click.echo(f"[tctl] ✗ {tool.name}: {result.error}", err=True)
        sys.exit(1)
    sys.exit(result.exit_code)


@click.command("get")
@click.argument("target")
def get_command(target: str) -> None:
    """Ensure TARGET (an artifact or intent) is fresh, regenerating if needed."""
    cfg = load_config()
    registry = scan(require_sources(cfg))

    console.print(f"[tctl] ensuring: {target}", markup=False)
    resolver = DataResolver(registry, cfg.intents, default_runners(), ConsoleReporter())
    if resolver.ensure(target):
        console.print("[tctl] ✓ done", markup=False)
        return
    click.echo("[tctl] ✗ failed", err=True)
    sys.exit(1)
