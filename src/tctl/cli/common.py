"""Shared plumbing for CLI commands: config loading and scanning.

Every command is stateless: it loads the configuration, re-scans the
registered sources and discards everything when it returns.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from tctl.config import GlobalConfig
from tctl.core.models import Registry
from tctl.discovery.scanner import DirectoryScanner
from tctl.exceptions import ConfigError

NO_SOURCES_HINT = "Register a directory with: tctl add <path>"


def load_config() -> GlobalConfig:
    """Load the global config, exiting with status 1 on ``ConfigError``."""
    try:
        return GlobalConfig.load()
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def require_sources(cfg: GlobalConfig, source: str | None = None) -> list[Path]:
    """Return the paths to scan, or print a hint and exit 0 when there are none.

    Args:
        cfg: Loaded configuration.
        source: Optional source name restricting the scan to one directory.
    """
    if source:
        match = cfg.find_source(source)
        if match is None:
            click.echo(f"Error: unknown source: {source}", err=True)
            sys.exit(1)
        return [Path(match.path)]

    paths = cfg.source_paths()
    if not paths:
        click.echo("No sources registered.")
        click.echo(NO_SOURCES_HINT)
        sys.exit(0)
    return paths


def scan(paths: list[Path]) -> Registry:
    """Scan ``paths`` with the built-in parsers."""
    return DirectoryScanner().scan(paths)


def save_or_exit(action, *args):
    """Run a config mutation, turning ``ConfigError`` into exit status 1."""
    try:
        return action(*args)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
