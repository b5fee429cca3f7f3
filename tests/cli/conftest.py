"""Shared fixtures for CLI tests.

Every CLI test runs against a throwaway config directory
(``XDG_CONFIG_HOME`` points into ``tmp_path``) and, when it needs tools,
a registered project whose scripts really run under the current
interpreter.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from tctl.cli import run_cmd
from tctl.config import GlobalConfig
from tctl.runners.python import PythonRunner
from tctl.runners.registry import RunnerRegistry

WRITE_OUTPUT = """
import pathlib

out = pathlib.Path(__file__).resolve().parent.parent / {output!r}
out.parent.mkdir(parents=True, exist_ok=True)
out.write_text("ok\\n")
"""

RECORD_ARGS = """
import pathlib
import sys

log = pathlib.Path(__file__).resolve().parent.parent / "args.txt"
log.write_text("\\n".join(sys.argv[1:]))
"""


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def current_interpreter(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run tools with the test interpreter instead of searching PATH."""

    def runners() -> RunnerRegistry:
        registry = RunnerRegistry()
        registry.register(PythonRunner(sys.executable))
        return registry

    monkeypatch.setattr(run_cmd, "default_runners", runners)


@pytest.fixture
def catalog(config_home: Path, project_dir: Path, write_tool) -> Path:
    """Register a project with a small prices -> signals pipeline.

    Tools:
        fetch-prices     provides prices  -> data/prices.csv (daily)
        compute-signals  provides signals -> data/signals.csv, requires prices
        echo-args        provides nothing, records its argv in args.txt
        broken-tool      provides broken, exits 3

    Returns:
        The project directory (parent of ``tools/``).
    """
    tools = project_dir / "tools"
    write_tool(
        tools, "fetch_prices.py",
        "@tool fetch-prices",
        "@provides prices",
        "@output data/prices.csv",
        "@freshness daily",
        "@capability Downloads closing prices",
        "@boundary Does NOT compute indicators",
        "@keywords prices, market",
        description="Download daily closing prices.",
        body=WRITE_OUTPUT.format(output="data/prices.csv"),
    )
    write_tool(
        tools, "compute_signals.py",
        "@tool compute-signals",
        "@provides signals",
        "@requires prices",
        "@output data/signals.csv",
        "@freshness daily",
        "@capability Computes trading indicators",
        "@keywords signals, indicators, market",
        description="Compute trading signals from prices.",
        body=WRITE_OUTPUT.format(output="data/signals.csv"),
    )
    write_tool(
        tools, "echo_args.py",
        "@tool echo-args",
        "@interface",
        "  --flag: string - Anything",
        description="Record arguments.",
        body=RECORD_ARGS,
    )
    write_tool(
        tools, "broken.py",
        "@tool broken-tool",
        "@provides broken",
        description="Always fails.",
        body="import sys\nsys.exit(3)\n",
    )
    GlobalConfig.load().add_source(tools, name="market")
    return project_dir
