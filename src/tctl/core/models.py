"""Descriptor model: Tool, Arg, Intent, and the Registry index.

A ``Tool`` is the universal intermediate representation for one
discoverable script, regardless of the language it is written in. Language
parsers populate it from tag lines; the scanner collects tools into a
``Registry``; the resolver, search and CLI layers consume the registry.

Nothing here is persisted. A registry is built fresh on every command and
discarded when the command completes.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Iterator

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS = "manual"


# ---------------------------------------------------------------------------
# Arg: one entry of a tool's @interface block
# ---------------------------------------------------------------------------


@dataclass
class Arg:
    """A command-line argument declared in a tool's ``@interface`` block.

    Attributes:
        name: Flag name including the leading ``--`` (e.g. ``"--out"``).
        type: Free-text type token. Not enforced.
        required: True when the type part carried a ``required`` token.
        default: Value from a ``default=VALUE`` token, empty when absent.
        description: Text after the ``" - "`` separator.
    """

    name: str
    type: str = "string"
    required: bool = False
    default: str = ""
    description: str = ""


# ---------------------------------------------------------------------------
# Tool: one discoverable unit of work
# ---------------------------------------------------------------------------


@dataclass
class Tool:
    """Metadata extracted from a tool's leading docstring.

    Attributes:
        name: Unique key (kebab-case by convention). Empty means "not a tool".
        version: Optional free-text version.
        file: Path to the source file on disk.
        language: Language identifier of the parser that produced it.
        description: One-line human summary.
        provides: Artifact names this tool produces, in declared order.
        requires: Artifact names that must be fresh before this tool runs.
        output: Declared output path, relative to the tool directory's
            parent unless absolute. Empty when undeclared.
        freshness: Policy name (``daily``, ``weekly``, ``monthly``,
            ``manual``).
        capabilities: Statements of what the tool does.
        boundaries: Statements of what the tool explicitly does not do.
        keywords: Search keywords.
        interface: Argument descriptors keyed by flag name.
        examples: Example invocation strings.
    """

    name: str = ""
    version: str = ""
    file: Path = field(default_factory=Path)
    language: str = ""
    description: str = ""
    provides: list[str] = field(default_factory=list)
    requires: list[str] = field(default_factory=list)
    output: str = ""
    freshness: str = DEFAULT_FRESHNESS
    capabilities: list[str] = field(default_factory=list)
    boundaries: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    interface: dict[str, Arg] = field(default_factory=dict)
    examples: list[str] = field(default_factory=list)

    def output_path(self) -> Path | None:
        """Resolve the declared output to a filesystem path.

        Relative outputs are joined to the parent of the directory holding
        the tool file, so a tool in ``project/tools/fetch.py`` declaring
        ``data/prices.csv`` writes ``project/data/prices.csv``. The join is
        lexical (``tools/..``), so a bare ``fetch.py`` relative to the current
        directory writes ``../data/prices.csv``.

        Returns:
            The resolved path, or None when no output is declared.
        """
        if not self.output:
            return None
        out = Path(self.output)
        if out.is_absolute():
            return out
        return Path(os.path.normpath(Path(self.file).parent / ".." / out))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable mapping of all fields."""
        data = asdict(self)
        data["file"] = str(self.file)
        return data


# ---------------------------------------------------------------------------
# Intent: a named group of artifacts ensured together
# ---------------------------------------------------------------------------


@dataclass
class Intent:
    """A named, ordered group of artifact or intent names.

    Used purely as an expansion macro by the resolver. Intents are owned
    by configuration (``state.yaml``), not by the scan.
    """

    name: str
    description: str = ""
    includes: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Registry: in-memory index for one scan pass
# ---------------------------------------------------------------------------


class Registry:
    """Index of discovered tools, by name and by provided artifact.

    Insertion is last-write-wins by name. Replaced tools are kept in
    ``shadowed`` so validation passes can report them. Artifact lookup is
    a linear search in insertion order and returns the first provider.

    Thread safety: not thread-safe. A registry is owned by the single scan
    that built it.
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self.shadowed: list[tuple[Tool, Tool]] = []

    def add(self, tool: Tool | None) -> None:
        """Insert a tool. ``None`` and tools with an empty name are ignored.

        Args:
            tool: The tool descriptor to index.
        """
        if tool is None or not tool.name:
            return
        previous = self._tools.get(tool.name)
        if previous is not None:
            logger.warning(
                "Tool %r in %s shadows %s", tool.name, tool.file, previous.file,
            )
            self.shadowed.append((tool, previous))
            # Re-insert so the winning tool takes the latest position.
            del self._tools[tool.name]
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        """Return the tool with this exact name, or None."""
        return self._tools.get(name)

    def find_by_provides(self, artifact: str) -> Tool | None:
        """Return the first tool (insertion order) that provides ``artifact``."""
        for tool in self._tools.values():
            if artifact in tool.provides:
                return tool
        return None

    def providers(self, artifact: str) -> list[Tool]:
        """Return every tool that provides ``artifact``."""
        return [t for t in self._tools.values() if artifact in t.provides]

    def ambiguous_provides(self) -> dict[str, list[str]]:
        """Map each artifact provided by more than one tool to those tool names."""
        owners: dict[str, list[str]] = {}
        for tool in self._tools.values():
            for artifact in dict.fromkeys(tool.provides):
                owners.setdefault(artifact, []).append(tool.name)
        return {a: names for a, names in owners.items() if len(names) > 1}

    def all(self) -> list[Tool]:
        """Return all tools. Callers must not rely on the order."""
        return list(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(list(self._tools.values()))
