"""Base interface for language-specific tool parsers.

Every parser implements the ``ToolParser`` abstract base class:

- ``can_parse(path)`` -- Cheap check (by extension) whether this parser
  handles the file.
- ``read_block(path)`` -- Return the file's leading documentation block
  as a ``DocBlock``. This is the only language-specific step.
- ``parse(path)`` -- Extract a ``Tool`` from that block. The default
  implementation runs the shared tag parser and stamps file and language.

The language-independent part of the work (tag parsing) lives in
``tctl.parsers.tags``. A parser only knows how to find the documentation
block in its language and which extensions it owns. The linter uses
``read_block`` too, so every registered language gets lint findings.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from tctl.core.models import Tool
from tctl.parsers.docstring import DocBlock
from tctl.parsers.tags import parse_tags

logger = logging.getLogger(__name__)


class ToolParser(ABC):
    """Abstract base class for tool parsers.

    The two-phase API (check then parse) lets the ``ParserRegistry`` pick
    a handler per file without reading it.
    """

    #: Language identifier stamped on every parsed ``Tool``.
    language: str = ""

    #: File extensions (with the leading dot) this parser owns.
    extensions: tuple[str, ...] = ()

    def can_parse(self, path: Path) -> bool:
        """Return True if ``path`` has one of this parser's extensions."""
        return Path(path).suffix in self.extensions

    @abstractmethod
    def read_block(self, path: Path) -> DocBlock | None:
        """Read ``path`` and return its leading documentation block.

        Returns:
            The block, or None when the file has none.

        Raises:
            ParseError: The file could not be read or decoded.
        """

    def parse(self, path: Path) -> Tool | None:
        """Extract a tool descriptor from a single file.

        Args:
            path: Source file to read.

        Returns:
            The descriptor, or None when the file is not a tool (no
            documentation block, or no ``@tool`` tag).

        Raises:
            ParseError: The file could not be read or decoded.
        """
        block = self.read_block(path)
        if block is None or not block.text:
            return None
        if not block.terminated:
            logger.warning("Unterminated docstring in %s; using partial metadata", path)

        tool = parse_tags(block.text)
        if tool is None:
            return None
        tool.file = Path(path)
        tool.language = self.language
        return tool
