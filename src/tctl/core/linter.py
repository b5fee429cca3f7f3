"""Optional validation pass for tool files and scanned registries.

The tag parser is deliberately permissive. This module is where strictness
lives: it reports what the parser silently tolerated, so authors can fix
their metadata without tctl ever refusing to discover a tool.

File checks (``lint_path``):

=====  =======  =====================================================
Code   Level    Condition
=====  =======  =====================================================
F001   error    Path cannot be accessed
P001   error    File cannot be read or decoded
D001   error    No module-level docstring
D002   warning  Docstring is never closed
T001   error    Docstring has no ``@tool`` tag (or an empty name)
T002   warning  No ``@provides``
T003   warning  No ``@capability``
T004   info     No ``@keywords``
T005   warning  No ``@output``
T006   info     No ``@boundary`` (``tctl where`` cannot exclude the tool)
T007   error    ``@freshness`` is not a known policy
T008   info     No description line
T009   info     No ``@interface`` block at all
T010   info     No ``@example``
T012   warning  Arguments declared but no ``@example``
=====  =======  =====================================================

Registry checks (``lint_registry``):

=====  =======  =====================================================
R001   error    Same tool name defined by more than one file
R002   error    Same artifact provided by more than one tool
=====  =======  =====================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from tctl.core.freshness import VALID_POLICIES
from tctl.core.models import Registry
from tctl.discovery.scanner import iter_candidate_files
from tctl.exceptions import ParseError
from tctl.parsers.registry import ParserRegistry, default_registry
from tctl.parsers.tags import parse_tags


class Level(str, Enum):
    """Severity of a lint message."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class LintMessage:
    """A single lint finding."""

    level: Level
    file: str
    line: int
    code: str
    message: str

    def __str__(self) -> str:
        location = f"{self.file}:{self.line}" if self.line > 0 else self.file
        return f"[{self.code}] {location}: {self.message}"


@dataclass
class LintResult:
    """All findings of a lint run, bucketed by level."""

    errors: list[LintMessage] = field(default_factory=list)
    warnings: list[LintMessage] = field(default_factory=list)
    info: list[LintMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when there are no errors (warnings and info are allowed)."""
        return not self.errors

    @property
    def total(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)

    def add(self, level: Level, file: str, line: int, code: str, message: str) -> None:
        msg = LintMessage(level=level, file=file, line=line, code=code, message=message)
        bucket = {
            Level.ERROR: self.errors,
            Level.WARNING: self.warnings,
            Level.INFO: self.info,
        }[level]
        bucket.append(msg)

    def codes(self) -> list[str]:
        return [m.code for m in (*self.errors, *self.warnings, *self.info)]


def lint_file(path: Path, result: LintResult, parsers: ParserRegistry | None = None) -> None:
    """Check one file for tctl compatibility and append findings to ``result``."""
    parsers = parsers or default_registry()
    parser = parsers.parser_for(path)
    if parser is None:
        return
    display = str(Path(path).resolve())

    try:
        block = parser.read_block(path)
    except ParseError as exc:
        result.add(Level.ERROR, display, 0, "P001", f"Parse error: {exc}")
        return

    if block is None:
        result.add(
            Level.ERROR, display, 1, "D001",
            "No module-level docstring. Add a triple-quoted docstring at the "
            "top of the file with an @tool <name> tag.",
        )
        return
    if not block.terminated:
        result.add(
            Level.WARNING, display, block.start_line, "D002",
            f"Docstring opened with {block.delimiter} is never closed; "
            "metadata may be truncated.",
        )

    tool = parse_tags(block.text)
    if tool is None:
        if "@tool" in block.text:
            message = "@tool tag found but could not parse. Check format: @tool <name>"
        else:
            message = "Docstring exists but missing @tool tag. Add '@tool <tool-name>'."
        result.add(Level.ERROR, display, block.start_line, "T001", message)
        return

    if not tool.provides:
        result.add(Level.WARNING, display, 0, "T002",
                   "Missing @provides tag. Add: @provides <artifact-name>")
    if not tool.capabilities:
        result.add(Level.WARNING, display, 0, "T003",
                   "Missing @capability tags (at least one recommended).")
    if not tool.output:
        result.add(Level.WARNING, display, 0, "T005",
                   "Missing @output tag. Add: @output <path>")
    if not tool.keywords:
        result.add(Level.INFO, display, 0, "T004",
                   "Missing @keywords tag (improves discoverability).")
    if not tool.boundaries:
        result.add(Level.INFO, display, 0, "T006",
                   "No @boundary tags (they tell readers what the tool does not do).")
    if tool.freshness not in VALID_POLICIES:
        result.add(
            Level.ERROR, display, 0, "T007",
            f"Invalid @freshness '{tool.freshness}'. "
            f"Must be one of: {', '.join(VALID_POLICIES)}",
        )
    if not tool.description:
        result.add(Level.INFO, display, 0, "T008",
                   "Missing description. Add a summary line near the top of the docstring.")
    if not tool.interface and "@interface" not in block.text:
        result.add(Level.INFO, display, 0, "T009",
                   "No @interface block. Document CLI arguments if the tool accepts any.")
    if not tool.examples:
        result.add(Level.INFO, display, 0, "T010", "No @example provided.")
        if tool.interface:
            result.add(Level.WARNING, display, 0, "T012",
                       "Tool has CLI arguments but no @example.")


def lint_path(path: Path | str, parsers: ParserRegistry | None = None) -> LintResult:
    """Lint a single file or every scannable file under a directory.

    Directory walks use the scanner's exclusion rules.
    """
    parsers = parsers or default_registry()
    result = LintResult()
    target = Path(path)
    if not target.exists():
        result.add(Level.ERROR, str(target), 0, "F001", "Cannot access path")
        return result

    if target.is_dir():
        for file_path in iter_candidate_files(target, parsers.extensions()):
            lint_file(file_path, result, parsers)
    else:
        lint_file(target, result, parsers)
    return result


def lint_registry(registry: Registry, result: LintResult | None = None) -> LintResult:
    """Report name shadowing and ambiguous artifact providers."""
    result = result if result is not None else LintResult()
    for kept, replaced in registry.shadowed:
        result.add(
            Level.ERROR, str(kept.file), 0, "R001",
            f"Tool '{kept.name}' is also defined in {replaced.file}; "
            "only this definition is used.",
        )
    for artifact, names in registry.ambiguous_provides().items():
        first = registry.find_by_provides(artifact)
        source = str(first.file) if first else artifact
        result.add(
            Level.ERROR, source, 0, "R002",
            f"Artifact '{artifact}' is provided by several tools: "
            f"{', '.join(names)}; 'get {artifact}' uses {names[0]}.",
        )
    return result
