"""Data resolver: ``ensure(target)`` makes an artifact present and fresh.

Resolution Algorithm
--------------------
``ensure(target)`` walks the requires/provides graph depth-first:

1. A target already visited by this resolver succeeds immediately. This
   makes diamonds produce each tool once and stops cycles.
2. Mark the target visited.
3. If the target names an intent, ensure each included name in order,
   stopping at the first failure. Intents have no output of their own.
4. Otherwise find the first tool providing the target. None means
   failure ("unknown data") and no subprocess runs.
5. If the tool declares an output and it is fresh under the tool's
   policy, succeed without running anything.
6. Ensure every ``@requires`` entry, stopping at the first failure.
7. Run the tool with no arguments. A launch error or a nonzero exit is a
   failure that propagates to every ancestor.

A tool without ``@output`` is never checked for freshness; it runs every
time it is reached and its requirements succeed.

The visited set belongs to one ``DataResolver``; create a new resolver for
each top-level command. A separate stack of targets currently being
resolved lets the resolver tell a cycle (target re-entered while still on
the stack) from a diamond (target already finished). Cycles are reported
and recorded in ``cycles`` but, like diamonds, are treated as satisfied.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Protocol, Sequence

from tctl.core import freshness
from tctl.core.models import Intent, Registry, Tool

if TYPE_CHECKING:
    from tctl.runners.base import RunResult

logger = logging.getLogger(__name__)


class ToolExecutor(Protocol):
    """Anything that can run a tool, e.g. ``RunnerRegistry``."""

    def run(self, tool: Tool, args: Sequence[str] = ...) -> RunResult: ...


class ResolveReporter:
    """Receives progress events from a ``DataResolver``.

    The default implementation logs every event. The CLI subclasses it to
    print to the console.
    """

    def intent(self, name: str, intent: Intent) -> None:
        logger.info("intent: %s", name)

    def fresh(self, target: str, tool: Tool, message: str) -> None:
        logger.info("%s: %s", target, message)

    def stale(self, target: str, tool: Tool, message: str) -> None:
        logger.info("%s: %s, regenerating", target, message)

    def unknown(self, target: str) -> None:
        logger.error("Unknown data: %s (no tool provides it)", target)

    def cycle(self, path: list[str]) -> None:
        logger.warning("Dependency cycle: %s", " -> ".join(path))

    def failed(self, tool: Tool, result: RunResult) -> None:
        if result.error is not None:
            logger.error("%s: %s", tool.name, result.error)
        else:
            logger.error("%s failed with code %d", tool.name, result.exit_code)

    def produced(self, tool: Tool) -> None:
        logger.info("produced %s", tool.name)


class DataResolver:
    """Ensures targets (artifacts or intents) are fresh, producing as needed.

    Args:
        registry: Tools discovered by the scan.
        intents: Intent definitions keyed by name.
        executor: Runs a tool; must return a ``RunResult``.
        reporter: Progress sink. Defaults to a logging ``ResolveReporter``.

    Attributes:
        visited: Every target this resolver has started (never cleared).
        produced: Names of tools run, in execution order.
        cycles: Each detected cycle as a list of target names.
    """

    def __init__(
        self,
        registry: Registry,
        intents: Mapping[str, Intent] | None,
        executor: ToolExecutor,
        reporter: ResolveReporter | None = None,
    ) -> None:
        self.registry = registry
        self.intents: Mapping[str, Intent] = intents or {}
        self.executor = executor
        self.reporter = reporter or ResolveReporter()
        self.visited: set[str] = set()
        self.produced: list[str] = []
        self.cycles: list[list[str]] = []
        self._stack: list[str] = []

    def ensure(self, target: str) -> bool:
        """Make ``target`` present and fresh.

        Args:
            target: Artifact or intent name.

        Returns:
            True on success (including a repeat visit), False if the target
            is unknown or a production step in its subtree failed.
        """
        if target in self.visited:
            if target in self._stack:
                cycle = self._stack[self._stack.index(target):] + [target]
                self.cycles.append(cycle)
                self.reporter.cycle(cycle)
            return True
        self.visited.add(target)

        self._stack.append(target)
        try:
            return self._ensure_unvisited(target)
        finally:
            self._stack.pop()

    def _ensure_unvisited(self, target: str) -> bool:
        intent = self.intents.get(target)
        if intent is not None:
            self.reporter.intent(target, intent)
            return self._ensure_all(intent.includes)

        tool = self.registry.find_by_provides(target)
        if tool is None:
            self.reporter.unknown(target)
            return False

        output = tool.output_path()
        if output is not None:
            fresh, message = freshness.check(output, tool.freshness)
            if fresh:
                self.reporter.fresh(target, tool, message)
                return True
            self.reporter.stale(target, tool, message)

        if not self._ensure_all(tool.requires):
            return False
        return self._produce(tool)

    def _ensure_all(self, names: Sequence[str]) -> bool:
        for name in names:
            if not self.ensure(name):
                return False
        return True

    def _produce(self, tool: Tool) -> bool:
        result = self.executor.run(tool, [])
        self.produced.append(tool.name)
        if result.error is not None or result.exit_code != 0:
            self.reporter.failed(tool, result)
            return False
        self.reporter.produced(tool)
        return True


def ensure(
    target: str,
    registry: Registry,
    intents: Mapping[str, Intent] | None,
    executor: ToolExecutor,
    reporter: ResolveReporter | None = None,
) -> bool:
    """One-shot ``ensure`` with a fresh visited set."""
    return DataResolver(registry, intents, executor, reporter).ensure(target)
