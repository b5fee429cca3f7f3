"""``tctl status|sync|new|lint`` — keep the catalog healthy.

Exit Codes:
    status, sync: 0 (problems are reported, not fatal).
    new:  1 when the target file already exists or cannot be written.
    lint: 1 when any error-level finding is reported.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from tctl.cli.common import load_config, require_sources, scan
from tctl.cli.output import console, format_lint_report, print_status_row
from tctl.core import freshness
from tctl.core.linter import lint_path, lint_registry
from tctl.core.models import Arg, Tool
from tctl.parsers.tags import render_tags


@click.command("status")
def status_command() -> None:
    """Show freshness of every declared tool output."""
    registry = scan(require_sources(load_config()))

    console.print()
    console.print("[bold]Data Status[/bold]")
    console.print()

    shown = 0
    for tool in sorted(registry.all(), key=lambda t: t.name):
        output = tool.output_path()
        if output is None:
            continue
        shown += 1
        fresh, message = freshness.check(output, tool.freshness)
        name = tool.provides[0] if tool.provides else tool.name
        print_status_row(name, fresh, message)

    if not shown:
        console.print("  No tools with @output defined.")
    console.print()


@click.command("sync")
def sync_command() -> None:
    """Rescan all sources and validate the tools found."""
    paths = require_sources(load_config())

    click.echo(f"[sync] Scanning {len(paths)} sources...")
    registry = scan(paths)
    tools = sorted(registry.all(), key=lambda t: t.name)
    click.echo(f"[sync] Found {len(tools)} tools")

    click.echo("[sync] Validating...")
    for tool in tools:
        if not tool.provides:
            click.echo(f"  ⚠ {tool.name}: missing @provides tag")

    result = lint_registry(registry)
    for msg in result.errors:
        click.echo(f"  ⚠ {msg.message}")

    if result.ok:
        click.echo("[sync] ✓ All tools valid")
    else:
        click.echo("")
        click.echo("[sync] ⚠ Some tools have issues. Run 'tctl lint <path>' for details.")
    click.echo("")


# ---------------------------------------------------------------------------
# tctl new
# ---------------------------------------------------------------------------

_SCRIPT_BODY = '''
import argparse


def main():
    ap = argparse.ArgumentParser(description="TODO: Description")
    ap.add_argument("--out", required=True, help="Output file path")
    args = ap.parse_args()

    # TODO: Implement tool logic
    print("TODO: Implement {name}")
    print(f"Output would go to: {{args.out}}")


if __name__ == "__main__":
    main()
'''


def template_tool(name: str) -> Tool:
    """Placeholder descriptor used to seed a new tool file."""
    return Tool(
        name=name,
        version="0.1.0",
        description="TODO: One-line description of what this tool does.",
        provides=["TODO-data-name"],
        output="data/TODO-output.csv",
        freshness="daily",
        capabilities=["TODO: Describe what this tool does"],
        boundaries=["TODO: Does NOT do X (use other-tool for that)"],
        keywords=["TODO", "add", "search", "terms"],
        interface={"--out": Arg("--out", "file", required=True, description="Output file path")},
        examples=[f"tctl run {name} --out data/output.csv"],
    )


def render_template(name: str, file_name: str) -> str:
    """Full source of a new Python tool named ``name``."""
    docstring = render_tags(template_tool(name), title=file_name)
    return (
        "#!/usr/bin/env python3\n"
        f'"""\n{docstring}"""\n'
        + _SCRIPT_BODY.format(name=name)
    )


@click.command("new")
@click.argument("tool_name")
@click.option("--output", "-o", "output_dir", type=click.Path(file_okay=False),
              default=None, help="Directory to create the tool in (default: cwd).")
def new_command(tool_name: str, output_dir: str | None) -> None:
    """Create a new tool file from the template."""
    directory = Path(output_dir) if output_dir else Path.cwd()
    file_name = tool_name.replace("-", "_") + ".py"
    file_path = directory / file_name

    if file_path.exists():
        click.echo(f"Error: file already exists: {file_path}", err=True)
        sys.exit(1)

    try:
        directory.mkdir(parents=True, exist_ok=True)
        file_path.write_text(render_template(tool_name, file_name), encoding="utf-8")
        os.chmod(file_path, 0o755)
    except OSError as exc:
        click.echo(f"Error: cannot write {file_path}: {exc}", err=True)
        sys.exit(1)

    click.echo(f"✓ Created: {file_path}")
    click.echo("")
    click.echo("Next steps:")
    click.echo(f"  1. Edit {file_path} - fill in @tags")
    click.echo(f"  2. Register the directory: tctl add {directory}")
    click.echo(f"  3. Validate: tctl lint {file_path}")
    click.echo(f"  4. Run: tctl run {tool_name} --help")


@click.command("lint")
@click.argument("path", type=click.Path(), default=".", required=False)
def lint_command(path: str) -> None:
    """Check tool files for tctl compatibility and print a markdown report."""
    result = lint_path(path)
    click.echo(format_lint_report(result, path), nl=False)
    if not result.ok:
        sys.exit(1)
