"""``tctl find|what|where`` — discover tools by what they do.

``find`` ranks tools against keywords, ``what`` summarises every artifact
and the most common keywords, and ``where`` suggests which tool a new
feature belongs in (using ``@boundary`` tags as negative evidence).

Output is markdown on stdout.
"""

from __future__ import annotations

import click

from tctl.cli.common import load_config, require_sources, scan
from tctl.cli.output import print_exclusions, print_match, print_placement
from tctl.core.search import find_tools, keyword_index, suggest_placement, suggest_tool_name

_MAX_FIND_RESULTS = 10
_MAX_WHERE_RESULTS = 5
_MAX_KEYWORDS = 15


@click.command("find")
@click.argument("keywords", nargs=-1, required=True)
def find_command(keywords: tuple[str, ...]) -> None:
    """Find tools by keyword (searches name, description, keywords, capabilities)."""
    query = " ".join(keywords)
    registry = scan(require_sources(load_config()))
    matches = find_tools(registry.all(), query)

    if not matches:
        click.echo(f"No tools found matching: {query}")
        click.echo("")
        click.echo("Try:")
        click.echo("  tctl what     - See all keywords")
        click.echo("  tctl list     - See all tools")
        return

    click.echo("")
    click.echo(f"# Tools matching '{query}'")
    click.echo("")
    for match in matches[:_MAX_FIND_RESULTS]:
        print_match(match)
    if len(matches) > _MAX_FIND_RESULTS:
        click.echo(f"... and {len(matches) - _MAX_FIND_RESULTS} more matches")


@click.command("what")
def what_command() -> None:
    """Show available data (what you can 'tctl get') and common keywords."""
    registry = scan(require_sources(load_config()))
    tools = sorted(registry.all(), key=lambda t: t.name)
    if not tools:
        click.echo("No tools found.")
        return

    click.echo("")
    click.echo("DATA AVAILABLE:")
    click.echo("")
    for tool in tools:
        for artifact in tool.provides:
            click.echo(f"  {artifact:<24} → tctl get {artifact}")

    click.echo("")
    click.echo("KEYWORDS:")
    click.echo("")
    for keyword, names in list(keyword_index(tools).items())[:_MAX_KEYWORDS]:
        click.echo(f"  '{keyword}' → {', '.join(names[:2])}")

    click.echo("")
    click.echo("Run 'tctl find <keyword>' for specific matching")


@click.command("where")
@click.argument("feature", nargs=-1, required=True)
def where_command(feature: tuple[str, ...]) -> None:
    """Suggest where a feature should go among existing tools."""
    text = " ".join(feature)
    registry = scan(require_sources(load_config()))
    matches, excluded = suggest_placement(registry.all(), text)

    click.echo("")
    click.echo(f"# Where should '{text}' go?")
    click.echo("")

    if matches:
        click.echo("## Best matches\n")
        for match in matches[:_MAX_WHERE_RESULTS]:
            print_placement(match)

    if excluded:
        print_exclusions(excluded)

    if not matches:
        click.echo("No existing tool matches this feature.\n")
        click.echo("Create a new tool:")
        click.echo(f"```bash\ntctl new {suggest_tool_name(text)}\n```")
