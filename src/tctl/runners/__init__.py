"""Tool execution: language runners and the runner registry."""

from tctl.runners.base import RunResult, ToolRunner, execute
from tctl.runners.python import PythonRunner
from tctl.runners.registry import RunnerRegistry, default_runners

__all__ = [
    "PythonRunner",
    "RunResult",
    "RunnerRegistry",
    "ToolRunner",
    "default_runners",
    "execute",
]
