"""Runner for Python tools.

Interpreter selection, first match wins:

1. An explicit ``python_path`` passed to ``PythonRunner``.
2. ``uv run python`` when ``uv`` is on PATH and the working directory
   holds a ``pyproject.toml`` (picks up the project's environment).
3. ``python3`` on PATH.
4. ``python`` on PATH.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Sequence

from tctl.core.models import Tool
from tctl.exceptions import InterpreterNotFoundError
from tctl.runners.base import RunResult, ToolRunner, execute


class PythonRunner(ToolRunner):
    """Executes Python tools as ``<interpreter> <file> [args...]``."""

    language = "python"

    def __init__(self, python_path: str | None = None) -> None:
        self.python_path = python_path

    def can_run(self, tool: Tool) -> bool:
        return tool.language == self.language or Path(tool.file).suffix == ".py"

    def interpreter_command(self) -> list[str]:
        """Return the command prefix used to launch a script, or [] if none found."""
        if self.python_path:
            return [self.python_path]

        uv = shutil.which("uv")
        if uv and Path("pyproject.toml").is_file():
            return [uv, "run", "python"]

        for candidate in ("python3", "python"):
            found = shutil.which(candidate)
            if found:
                return [found]
        return []

    def run(self, tool: Tool, args: Sequence[str] = ()) -> RunResult:
        command = self.interpreter_command()
        if not command:
            return RunResult(exit_code=1, error=InterpreterNotFoundError("python"))
        return execute([*command, str(tool.file), *args])
