"""Tests for the compatibility linter.

Each fixture file isolates one defect and checks that its code (and only
the expected level) is reported.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tctl.core.linter import Level, LintMessage, LintResult, lint_path, lint_registry
from tctl.core.models import Registry, Tool
from tctl.parsers.base import ToolParser
from tctl.parsers.registry import default_registry

COMPLETE_TAGS = (
    "@tool good",
    "@provides good-data",
    "@output data/good.csv",
    "@freshness daily",
    "@keywords good, data",
    "@capability Writes the good dataset",
    "@boundary Does NOT fetch remote data",
    "@interface",
    "  --out: file - Output path",
    "@example tctl run good --out x.csv",
)


class TestLintFile:
    """Per-file checks."""

    def test_complete_tool_is_clean(self, tools_dir: Path, write_tool) -> None:
        path = write_tool(tools_dir, "good.py", *COMPLETE_TAGS)
        result = lint_path(path)
        assert result.ok
        assert result.total == 0

    def test_no_docstring(self, tmp_path: Path) -> None:
        path = tmp_path / "plain.py"
        path.write_text("x = 1\n")
        result = lint_path(path)
        assert result.codes() == ["D001"]
        assert not result.ok

    def test_unterminated_docstring(self, tmp_path: Path) -> None:
        path = tmp_path / "open.py"
        path.write_text('"""\nDoes stuff.\n' + "\n".join(COMPLETE_TAGS) + "\n")
        result = lint_path(path)
        assert "D002" in result.codes()
        assert result.ok

    def test_missing_tool_tag(self, tmp_path: Path) -> None:
        path = tmp_path / "lib.py"
        path.write_text('"""Helpers."""\n')
        result = lint_path(path)
        assert result.codes() == ["T001"]
        assert "missing @tool" in result.errors[0].message

    def test_empty_tool_name(self, tmp_path: Path) -> None:
        path = tmp_path / "blank.py"
        path.write_text('"""\n@tool\n"""\n')
        result = lint_path(path)
        assert result.codes() == ["T001"]
        assert "could not parse" in result.errors[0].message

    def test_minimal_tool_warnings_and_info(self, tools_dir: Path, write_tool) -> None:
        path = write_tool(tools_dir, "bare.py", "@tool bare")
        codes = lint_path(path).codes()
        assert set(codes) == {"T002", "T003", "T005", "T004", "T006", "T009", "T010"}

    def test_invalid_freshness_is_error(self, tools_dir: Path, write_tool) -> None:
        path = write_tool(tools_dir, "x.py", *COMPLETE_TAGS, "@freshness hourly")
        result = lint_path(path)
        assert result.codes() == ["T007"]
        assert not result.ok

    def test_missing_description(self, tmp_path: Path) -> None:
        path = tmp_path / "nodesc.py"
        path.write_text('"""\n' + "\n".join(COMPLETE_TAGS) + '\n"""\n')
        assert lint_path(path).codes() == ["T008"]

    def test_arguments_without_examples(self, tools_dir: Path, write_tool) -> None:
        tags = [t for t in COMPLETE_TAGS if not t.startswith("@example")]
        path = write_tool(tools_dir, "x.py", *tags)
        result = lint_path(path)
        assert result.codes() == ["T012", "T010"]
        assert result.ok

    def test_missing_example_without_arguments_is_info(
        self, tools_dir: Path, write_tool,
    ) -> None:
        tags = [t for t in COMPLETE_TAGS if not t.startswith(("@example", "@interface", "  --"))]
        path = write_tool(tools_dir, "x.py", *tags, "@interface")
        result = lint_path(path)
        assert result.codes() == ["T010"]
        assert result.info[0].level is Level.INFO

    def test_missing_capability_is_warning(self, tools_dir: Path, write_tool) -> None:
        tags = [t for t in COMPLETE_TAGS if not t.startswith("@capability")]
        result = lint_path(write_tool(tools_dir, "x.py", *tags))
        assert result.codes() == ["T003"]
        assert result.warnings[0].level is Level.WARNING

    def test_missing_boundary_is_info(self, tools_dir: Path, write_tool) -> None:
        tags = [t for t in COMPLETE_TAGS if not t.startswith("@boundary")]
        result = lint_path(write_tool(tools_dir, "x.py", *tags))
        assert result.codes() == ["T006"]
        assert result.info[0].level is Level.INFO
        assert result.ok

    def test_unreadable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bin.py"
        path.write_bytes(b"\xff\xfe\x00")
        assert lint_path(path).codes() == ["P001"]

    def test_non_python_file_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        assert lint_path(path).total == 0

    def test_other_registered_language_is_linted(
        self, tmp_path: Path, shell_parser: ToolParser,
    ) -> None:
        parsers = default_registry()
        parsers.register(shell_parser)
        (tmp_path / "plain.sh").write_text("echo hi\n")
        (tmp_path / "helper.sh").write_text("#!/bin/sh\n# Shared helpers.\necho hi\n")
        (tmp_path / "sync.sh").write_text(
            "#!/bin/sh\n# Mirror the bucket.\n# @tool sync\n# @freshness hourly\n"
        )
        result = lint_path(tmp_path, parsers)
        by_file = {Path(m.file).name: m.code for m in result.errors}
        assert by_file == {"plain.sh": "D001", "helper.sh": "T001", "sync.sh": "T007"}
        assert "T002" in result.codes()


class TestLintPath:
    """Directory walks."""

    def test_missing_path(self, tmp_path: Path) -> None:
        result = lint_path(tmp_path / "nope")
        assert result.codes() == ["F001"]

    def test_directory_skips_excluded_and_private(self, tools_dir: Path, write_tool) -> None:
        write_tool(tools_dir, "good.py", *COMPLETE_TAGS)
        (tools_dir / "_private.py").write_text("x = 1\n")
        (tools_dir / "__pycache__").mkdir()
        (tools_dir / "__pycache__" / "cached.py").write_text("x = 1\n")
        (tools_dir / "lib.py").write_text("x = 1\n")
        result = lint_path(tools_dir)
        assert result.codes() == ["D001"]
        assert result.errors[0].file.endswith("lib.py")


class TestLintRegistry:
    """Registry-level conflicts."""

    def test_shadowed_and_ambiguous(self) -> None:
        registry = Registry()
        registry.add(Tool(name="a", provides=["x"], file=Path("one/a.py")))
        registry.add(Tool(name="a", provides=["x"], file=Path("two/a.py")))
        registry.add(Tool(name="b", provides=["x"], file=Path("two/b.py")))
        result = lint_registry(registry)
        assert result.codes() == ["R001", "R002"]
        assert "one/a.py" in result.errors[0].message.replace("\\", "/")
        assert "uses a" in result.errors[1].message

    def test_clean_registry(self) -> None:
        registry = Registry()
        registry.add(Tool(name="a", provides=["x"]))
        assert lint_registry(registry).ok

    def test_appends_to_existing_result(self) -> None:
        existing = LintResult()
        existing.add(Level.INFO, "f.py", 0, "T004", "info")
        registry = Registry()
        registry.add(Tool(name="a"))
        registry.add(Tool(name="a"))
        assert lint_registry(registry, existing) is existing
        assert existing.codes() == ["R001", "T004"]


class TestLintMessage:
    """Message formatting."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [(3, "[T001] f.py:3: boom"), (0, "[T001] f.py: boom")],
    )
    def test_str(self, line: int, expected: str) -> None:
        msg = LintMessage(level=Level.ERROR, file="f.py", line=line, code="T001", message="boom")
        assert str(msg) == expected
