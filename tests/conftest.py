"""Shared fixtures for tctl tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from tctl.parsers.base import ToolParser
from tctl.parsers.docstring import DocBlock

WriteTool = Callable[..., Path]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with an empty ``tools/`` subdirectory."""
    project = tmp_path / "project"
    (project / "tools").mkdir(parents=True)
    return project


@pytest.fixture
def tools_dir(project_dir: Path) -> Path:
    """The ``tools/`` directory of ``project_dir``."""
    return project_dir / "tools"


@pytest.fixture
def write_tool() -> WriteTool:
    """Return a helper that writes a Python tool file with tagged docstring.

    Usage::

        write_tool(tools_dir, "fetch.py", "@tool fetch", "@provides prices")
    """

    def _write(
        directory: Path,
        filename: str,
        *tags: str,
        description: str = "A test tool.",
        body: str = "",
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        lines = ["#!/usr/bin/env python3", '"""', filename, description, "", *tags, '"""']
        path = directory / filename
        path.write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``XDG_CONFIG_HOME`` at a temp dir; returns the tctl config dir."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return xdg / "tctl"


class ShellParser(ToolParser):
    """Reads tags from the leading ``#`` comment block of a shell script."""

    language = "shell"
    extensions = (".sh",)

    def read_block(self, path: Path) -> DocBlock | None:
        lines = []
        for line in Path(path).read_text(encoding="utf-8").splitlines():
            if line.startswith("#!"):
                continue
            if not line.startswith("#"):
                break
            lines.append(line[1:].strip())
        return DocBlock(text="\n".join(lines), delimiter="#", start_line=2) if lines else None


@pytest.fixture
def shell_parser() -> ToolParser:
    """A second-language parser for registry and lint tests."""
    return ShellParser()
