"""Runner registry: picks the runner for a tool and executes it.

Like the parser registry, it is constructed explicitly (usually through
``default_runners()``) and passed to whoever needs to execute tools,
typically the CLI and the ``DataResolver``.
"""

from __future__ import annotations

from typing import Sequence

from tctl.core.models import Tool
from tctl.exceptions import UnsupportedLanguageError
from tctl.runners.base import RunResult, ToolRunner
from tctl.runners.python import PythonRunner


class RunnerRegistry:
    """Ordered collection of ``ToolRunner`` instances.

    Attributes:
        runners: Registered runners, in lookup order.
    """

    def __init__(self) -> None:
        self.runners: list[ToolRunner] = []

    def register(self, runner: ToolRunner) -> None:
        """Append a runner."""
        self.runners.append(runner)

    def runner_for(self, tool: Tool) -> ToolRunner | None:
        """Return the first runner that accepts ``tool``, or None."""
        for runner in self.runners:
            if runner.can_run(tool):
                return runner
        return None

    def run(self, tool: Tool, args: Sequence[str] = ()) -> RunResult:
        """Execute ``tool`` with the matching runner.

        Returns:
            The run result. When no runner accepts the tool, exit code 1
            with an ``UnsupportedLanguageError``.
        """
        runner = self.runner_for(tool)
        if runner is None:
            return RunResult(exit_code=1, error=UnsupportedLanguageError(tool.language))
        return runner.run(tool, args)


def default_runners() -> RunnerRegistry:
    """Create a RunnerRegistry with all built-in runners (currently Python)."""
    registry = RunnerRegistry()
    registry.register(PythonRunner())
    return registry
