"""Tests for tool runners and the runner registry.

``shutil.which`` and ``subprocess.run`` are monkeypatched so no real
interpreter is launched (except in the end-to-end test, which uses the
running interpreter explicitly).
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from tctl.core.models import Tool
from tctl.exceptions import InterpreterNotFoundError, UnsupportedLanguageError
from tctl.runners import base as runners_base
from tctl.runners import python as python_runner
from tctl.runners.base import RunResult, execute
from tctl.runners.python import PythonRunner
from tctl.runners.registry import RunnerRegistry, default_runners


class _Recorder:
    """Stands in for ``subprocess.run``."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[list[str]] = []

    def __call__(self, argv, check=False):
        self.calls.append(list(argv))
        return subprocess.CompletedProcess(argv, self.returncode)


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> _Recorder:
    rec = _Recorder()
    monkeypatch.setattr(runners_base.subprocess, "run", rec)
    return rec


def _which(available: dict[str, str]):
    return lambda name: available.get(name)


class TestInterpreterSelection:
    """Interpreter lookup order."""

    def test_explicit_path_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(python_runner.shutil, "which", _which({"python3": "/usr/bin/python3"}))
        assert PythonRunner("/opt/py/bin/python").interpreter_command() == ["/opt/py/bin/python"]

    def test_uv_with_pyproject(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            python_runner.shutil, "which",
            _which({"uv": "/bin/uv", "python3": "/usr/bin/python3"}),
        )
        assert PythonRunner().interpreter_command() == ["/bin/uv", "run", "python"]

    def test_uv_ignored_without_pyproject(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            python_runner.shutil, "which",
            _which({"uv": "/bin/uv", "python3": "/usr/bin/python3"}),
        )
        assert PythonRunner().interpreter_command() == ["/usr/bin/python3"]

    def test_python_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(python_runner.shutil, "which", _which({"python": "/usr/bin/python"}))
        assert PythonRunner().interpreter_command() == ["/usr/bin/python"]

    def test_no_interpreter(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, recorder) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(python_runner.shutil, "which", _which({}))
        result = PythonRunner().run(Tool(name="a", file=Path("a.py"), language="python"))
        assert result.exit_code == 1
        assert isinstance(result.error, InterpreterNotFoundError)
        assert recorder.calls == []


class TestPythonRunner:
    """Command construction and exit codes."""

    def test_command_line(self, recorder: _Recorder) -> None:
        tool = Tool(name="a", file=Path("/tools/a.py"), language="python")
        result = PythonRunner("/py").run(tool, ["--out", "x.csv"])
        assert result == RunResult(exit_code=0)
        assert recorder.calls == [["/py", str(Path("/tools/a.py")), "--out", "x.csv"]]

    def test_nonzero_exit_is_not_an_error(self, recorder: _Recorder) -> None:
        recorder.returncode = 3
        result = PythonRunner("/py").run(Tool(name="a", file=Path("a.py"), language="python"))
        assert result.exit_code == 3
        assert result.error is None
        assert not result.ok

    def test_can_run(self) -> None:
        runner = PythonRunner()
        assert runner.can_run(Tool(name="a", language="python"))
        assert runner.can_run(Tool(name="a", file=Path("x.py")))
        assert not runner.can_run(Tool(name="a", file=Path("x.sh"), language="shell"))

    def test_real_interpreter_end_to_end(self, tmp_path: Path) -> None:
        script = tmp_path / "exit7.py"
        script.write_text("import sys\nsys.exit(7)\n")
        result = PythonRunner(sys.executable).run(Tool(name="e", file=script, language="python"))
        assert result.exit_code == 7


class TestExecute:
    """The shared subprocess helper."""

    def test_launch_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(argv, check=False):
            raise FileNotFoundError(argv[0])

        monkeypatch.setattr(runners_base.subprocess, "run", boom)
        result = execute(["/does/not/exist"])
        assert result.exit_code == 1
        assert isinstance(result.error, FileNotFoundError)


class TestRunnerRegistry:
    """Runner dispatch."""

    def test_default_runners(self) -> None:
        registry = default_runners()
        assert isinstance(registry.runner_for(Tool(name="a", language="python")), PythonRunner)

    def test_unsupported_language(self) -> None:
        result = RunnerRegistry().run(Tool(name="a", language="ruby"))
        assert result.exit_code == 1
        assert isinstance(result.error, UnsupportedLanguageError)
        assert str(result.error) == "unsupported language: ruby"

    def test_dispatches_with_args(self, recorder: _Recorder) -> None:
        registry = RunnerRegistry()
        registry.register(PythonRunner("/py"))
        registry.run(Tool(name="a", file=Path("a.py"), language="python"), ["x"])
        assert recorder.calls == [["/py", "a.py", "x"]]
