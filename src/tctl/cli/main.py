"""tctl CLI — a catalog of self-describing tool scripts.

Entry point for the ``tctl`` command-line tool. Registers all subcommands
under a single Click group.

Commands:
    add      — Register a directory containing tools.
    remove   — Unregister a directory.
    sources  — List registered directories.
    list     — List all discovered tools.
    show     — Show a tool's full metadata.
    find     — Find tools by keyword.
    what     — Show available data and common keywords.
    where    — Suggest which tool a new feature belongs in.
    run      — Run a tool, forwarding arguments.
    get      — Ensure an artifact is fresh, regenerating as needed.
    status   — Show freshness of every tool output.
    sync     — Rescan sources and validate tools.
    new      — Create a tool from a template.
    lint     — Check tool files for tctl compatibility.

Usage::

    tctl add ~/tools
    tctl find scrape
    tctl get enriched-leads
    tctl run scrape-leads --out data/leads.csv
    tctl -v get enriched-leads            # with debug logging
"""

from __future__ import annotations

import logging

import click

from tctl import __version__
from tctl.cli.list_cmd import list_command, show_command
from tctl.cli.maintain_cmd import lint_command, new_command, status_command, sync_command
from tctl.cli.run_cmd import get_command, run_command
from tctl.cli.search_cmd import find_command, what_command, where_command
from tctl.cli.sources_cmd import add_command, remove_command, sources_command

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__, prog_name="tctl")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """tctl: discover, run and chain self-describing tools.

    Tools declare what they provide and require in tagged docstrings;
    tctl indexes them and regenerates stale data on demand.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, force=True)


# Register all subcommands
cli.add_command(add_command)
cli.add_command(remove_command)
cli.add_command(sources_command)
cli.add_command(list_command)
cli.add_command(show_command)
cli.add_command(find_command)
cli.add_command(what_command)
cli.add_command(where_command)
cli.add_command(run_command)
cli.add_command(get_command)
cli.add_command(status_command)
cli.add_command(sync_command)
cli.add_command(new_command)
cli.add_command(lint_command)
