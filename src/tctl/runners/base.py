"""Base interface for tool runners and the shared subprocess helper.

A runner launches a tool's underlying program. Execution is a direct,
synchronous subprocess connected to the caller's standard streams, so
interactive tools behave normally. There is no timeout, no sandbox and
no output capture.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from tctl.core.models import Tool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Outcome of one tool execution.

    Attributes:
        exit_code: Process exit status (1 when the process never started).
        error: The launch failure, or None if the process ran.
    """

    exit_code: int
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """True when the process ran and exited with status 0."""
        return self.error is None and self.exit_code == 0


def execute(argv: Sequence[str]) -> RunResult:
    """Run ``argv`` with inherited stdin/stdout/stderr and wait for it.

    A nonzero exit is a normal result, not an error. Only a failure to
    start the process populates ``RunResult.error``.
    """
    logger.debug("Executing: %s", " ".join(argv))
    try:
        completed = subprocess.run(list(argv), check=False)
    except OSError as exc:
        return RunResult(exit_code=1, error=exc)
    return RunResult(exit_code=completed.returncode)


class ToolRunner(ABC):
    """Abstract base class for language runners."""

    #: Language identifier this runner executes.
    language: str = ""

    @abstractmethod
    def can_run(self, tool: Tool) -> bool:
        """Return True if this runner can execute ``tool``."""

    @abstractmethod
    def run(self, tool: Tool, args: Sequence[str] = ()) -> RunResult:
        """Execute ``tool`` with ``args`` and block until it exits."""
