"""Rich output formatting helpers for the tctl CLI.

Tables for listings, tool details and data status; a
console-backed ``ResolveReporter`` for ``tctl get``. Search results and
lint reports are emitted as plain markdown via ``click.echo`` so they can
be piped to other programs (or pasted into an LLM prompt) unchanged.

Status Color Mapping:
    fresh = green, stale = yellow, missing/failed = bold red
"""

from __future__ import annotations

import json
from typing import Any, Iterable

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from tctl.core.linter import LintResult
from tctl.core.models import Intent, Tool
from tctl.core.resolver import ResolveReporter
from tctl.core.search import Exclusion, Match
from tctl.runners.base import RunResult

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_tool_table(tools: list[Tool], source_names: dict[str, str]) -> None:
    """Print the ``tctl list`` table.

    Args:
        tools: Tools to list (printed in name order).
        source_names: Directory path to registered source name.
    """
    table = Table(title="Tools", show_header=True, header_style="bold")
    table.add_column("Tool", style="bold")
    table.add_column("Source", style="dim")
    table.add_column("Provides")
    table.add_column("Output", style="dim")

    for tool in sorted(tools, key=lambda t: t.name):
        directory = str(tool.file.parent)
        source = source_names.get(directory) or tool.file.parent.name
        table.add_row(
            escape(tool.name), escape(source), escape(", ".join(tool.provides)), escape(tool.output),
        )
    console.print(table)


def print_tool_details(tool: Tool) -> None:
    """Print everything known about one tool (``tctl show``)."""
    console.print()
    console.print(f"[bold]# {escape(tool.name)}[/bold]")
    console.print()
    if tool.description:
        console.print(f"  {escape(tool.description)}")
        console.print()

    console.print(f"  File: {escape(str(tool.file))}", soft_wrap=True)
    console.print(f"  Language: {escape(tool.language)}")
    if tool.version:
        console.print(f"  Version: {escape(tool.version)}")
    console.print(f"  Provides: {escape(', '.join(tool.provides))}")
    if tool.requires:
        console.print(f"  Requires: {escape(', '.join(tool.requires))}")
    console.print(f"  Output: {escape(tool.output)}")
    console.print(f"  Freshness: {escape(tool.freshness)}")

    if tool.capabilities:
        console.print()
        console.print("  Capabilities:")
        for capability in tool.capabilities:
            console.print(f"    [green]•[/green] {escape(capability)}")

    if tool.boundaries:
        console.print()
        console.print("  Boundaries:")
        for boundary in tool.boundaries:
            console.print(f"    [red]✗[/red] {escape(boundary)}")

    if tool.keywords:
        console.print()
        console.print(f"  Keywords: {escape(', '.join(tool.keywords))}")

    if tool.interface:
        console.print()
        console.print("  Interface:")
        for name, arg in tool.interface.items():
            extra = " (required)" if arg.required else ""
            if arg.default:
                extra += f" [default: {arg.default}]"
            console.print(f"    {escape(name)}: {escape(arg.type)}{escape(extra)}")
            if arg.description:
                console.print(f"      [dim]{escape(arg.description)}[/dim]")

    if tool.examples:
        console.print()
        console.print("  Examples:")
        for example in tool.examples:
            console.print(f"    $ {escape(example)}", soft_wrap=True)
    console.print()


def print_status_row(name: str, fresh: bool, message: str) -> None:
    """Print one line of ``tctl status``."""
    if fresh:
        icon = Text("✓", style="green")
    elif "missing" in message:
        icon = Text("✗", style="bold red")
    else:
        icon = Text("⚠", style="yellow")
    console.print(Text.assemble("  ", icon, f" {name:<24} ", message))


def print_match(match: Match) -> None:
    """Print one ``tctl find`` result as markdown."""
    tool = match.tool
    click.echo(f"## {tool.name}")
    if tool.description:
        click.echo(tool.description)
    click.echo("")
    click.echo(f"**File:** `{tool.file}`")
    if tool.provides:
        click.echo(f"**Provides:** {', '.join(tool.provides)}")
    if tool.requires:
        click.echo(f"**Requires:** {', '.join(tool.requires)}")
    if tool.output:
        click.echo(f"**Output:** {tool.output}")
    _echo_list("Capabilities", tool.capabilities)
    _echo_list("Boundaries", tool.boundaries)
    click.echo("")
    click.echo("---")
    click.echo("")


def print_placement(match: Match) -> None:
    """Print one ``tctl where`` suggestion as markdown."""
    tool = match.tool
    click.echo(f"### {tool.name}")
    if tool.description:
        click.echo(tool.description)
    click.echo("")
    click.echo(f"**File:** `{tool.file}`")
    if tool.provides:
        click.echo(f"**Provides:** {', '.join(tool.provides)}")
    _echo_list("Why this tool", match.unique_reasons)
    _echo_list("Existing capabilities", tool.capabilities)
    click.echo("")
    click.echo("---")
    click.echo("")


def print_exclusions(excluded: list[Exclusion], limit: int = 3) -> None:
    click.echo("## Explicitly excluded\n")
    click.echo("These tools have @boundary tags that exclude this feature:\n")
    for item in excluded[:limit]:
        click.echo(f"- **{item.tool.name}**: {item.boundary}")
    click.echo("")


def _echo_list(title: str, items: Iterable[str]) -> None:
    items = list(items)
    if not items:
        return
    click.echo("")
    click.echo(f"**{title}:**")
    for item in items:
        click.echo(f"- {item}")


def format_lint_report(result: LintResult, path: str) -> str:
    """Render lint findings as a markdown report."""
    lines = ["# tctl Compatibility Report", "", f"Path analyzed: {path}", ""]
    if result.total == 0:
        lines.append("✓ All files are tctl-compatible. No changes needed.")
        return "\n".join(lines) + "\n"

    sections = (
        ("Required Fixes (Errors)", result.errors),
        ("Recommended Fixes (Warnings)", result.warnings),
        ("Suggestions (Info)", result.info),
    )
    for title, messages in sections:
        if not messages:
            continue
        lines.append(f"## {title}")
        lines.append("")
        for msg in messages:
            lines.append(f"- **{msg.file}** (`{msg.code}`): {msg.message}")
        lines.append("")
    return "\n".join(lines) + "\n"


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


class ConsoleReporter(ResolveReporter):
    """Prints ``tctl get`` progress in the ``[tctl] ...`` line format."""

    def intent(self, name: str, intent: Intent) -> None:
        console.print(f"[tctl] intent: {name}", markup=False)

    def fresh(self, target: str, tool: Tool, message: str) -> None:
        console.print(
            Text.assemble("[tctl] ", ("✓", "green"), f" {target}: {message}"),
        )

    def stale(self, target: str, tool: Tool, message: str) -> None:
        console.print(
            Text.assemble("[tctl] ", ("→", "yellow"), f" {target}: {message}, regenerating..."),
        )

    def unknown(self, target: str) -> None:
        err_console.print(Text.assemble("[tctl] ", ("✗", "bold red"), f" Unknown data: {target}"))
        err_console.print(f"       No tool provides '{target}'", markup=False)

    def cycle(self, path: list[str]) -> None:
        err_console.print(
            Text.assemble("[tctl] ", ("⚠", "yellow"), " dependency cycle: " + " → ".join(path)),
        )

    def failed(self, tool: Tool, result: RunResult) -> None:
        if result.error is not None:
            detail = f" {tool.name}: {result.error}"
        else:
            detail = f" {tool.name} failed with code {result.exit_code}"
        err_console.print(Text.assemble("[tctl] ", ("✗", "bold red"), detail))

    def produced(self, tool: Tool) -> None:
        if tool.output:
            console.print(f"     → output: {tool.output}", markup=False)
