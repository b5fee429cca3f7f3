"""Directory scanner: walks registered roots and builds a ``Registry``.

Discovery Algorithm:
    1. For each root (in order), skip it silently if it does not exist.
    2. Walk it recursively with ``os.walk``. Excluded directories
       (``SKIP_DIRS`` and ``*.egg-info``) are pruned so their subtrees are
       never visited.
    3. Skip private files (names starting with ``_`` or ``.``) and files
       whose extension no registered parser owns.
    4. Hand each remaining file to the first parser that accepts it. A
       parse error or a "not a tool" result excludes the file and the
       walk continues.
    5. Insert each tool into one shared ``Registry``. A name found again
       in a later file or root replaces the earlier one
       (last-write-wins); the registry records the shadowed tool.

Walk order is sorted, so registry insertion order (and therefore
first-match artifact lookup) is deterministic for a given tree.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from tctl.core.models import Registry
from tctl.exceptions import ParseError
from tctl.parsers.registry import ParserRegistry, default_registry

logger = logging.getLogger(__name__)

SKIP_DIRS: frozenset[str] = frozenset({
    ".venv",
    "venv",
    ".env",
    "env",
    "node_modules",
    "__pycache__",
    ".git",
    ".tox",
    ".nox",
    ".mypy_cache",
    ".pytest_cache",
    "dist",
    "build",
    ".eggs",
    "site-packages",
})


def should_skip_dir(name: str) -> bool:
    """Return True if a directory with this name is pruned from the walk."""
    return name in SKIP_DIRS or name.endswith(".egg-info")


def is_private_file(name: str) -> bool:
    """Return True for files the scanner never parses (``_x.py``, ``.x.py``)."""
    return name.startswith(("_", "."))


def iter_candidate_files(root: Path, extensions: Iterable[str]) -> Iterator[Path]:
    """Yield every scannable file under ``root`` in sorted walk order.

    Args:
        root: Directory to walk.
        extensions: Accepted file extensions (with the leading dot).

    Yields:
        Paths of non-private files with an accepted extension, outside any
        excluded directory.
    """
    accepted = set(extensions)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_dir(d))
        for name in sorted(filenames):
            if is_private_file(name):
                continue
            if os.path.splitext(name)[1] not in accepted:
                continue
            yield Path(dirpath) / name


class DirectoryScanner:
    """Builds a merged ``Registry`` from a set of root directories.

    Usage::

        scanner = DirectoryScanner()
        registry = scanner.scan([Path("~/tools").expanduser()])
        for tool in registry.all():
            print(tool.name, tool.provides)

    Args:
        parsers: Parser registry to dispatch files to. Defaults to
            ``default_registry()``.
    """

    def __init__(self, parsers: ParserRegistry | None = None) -> None:
        self.parsers = parsers if parsers is not None else default_registry()

    def scan(self, roots: Iterable[Path | str]) -> Registry:
        """Scan every root and return one merged registry.

        Args:
            roots: Directories to scan, in priority order (later roots win
                on duplicate tool names).

        Returns:
            The populated registry. Empty when no parser is registered or
            no tools were found.
        """
        registry = Registry()
        extensions = self.parsers.extensions()
        if not extensions:
            return registry

        for root in roots:
            root_path = Path(root)
            if not root_path.is_dir():
                logger.debug("Skipping missing source: %s", root_path)
                continue
            for path in iter_candidate_files(root_path, extensions):
                self._scan_file(path, registry)
        return registry

    def _scan_file(self, path: Path, registry: Registry) -> None:
        """Parse one file into ``registry``; failures exclude the file only."""
        parser = self.parsers.parser_for(path)
        if parser is None:
            return
        try:
            tool = parser.parse(path)
        except ParseError:
            logger.debug("Skipping unparseable file: %s", path, exc_info=True)
            return
        registry.add(tool)


def scan_directories(
    roots: Iterable[Path | str], parsers: ParserRegistry | None = None,
) -> Registry:
    """Scan several roots with a fresh ``DirectoryScanner``."""
    return DirectoryScanner(parsers).scan(roots)


def scan_directory(root: Path | str, parsers: ParserRegistry | None = None) -> Registry:
    """Scan a single root."""
    return scan_directories([root], parsers)
