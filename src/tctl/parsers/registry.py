"""Parser registry: explicit, ordered lookup of language parsers.

The registry is built in the composition root (``default_registry()`` or
a test fixture) and passed down to the scanner and linter. Nothing
registers itself at import time, so tests can build registries with
exactly the parsers they need.

Lookup is first-match in registration order: ``parser_for(path)`` asks
each parser's ``can_parse()`` in turn.
"""

from __future__ import annotations

from pathlib import Path

from tctl.parsers.base import ToolParser
from tctl.parsers.python import PythonParser


class ParserRegistry:
    """Ordered collection of ``ToolParser`` instances.

    Attributes:
        parsers: Registered parsers, in lookup order.
    """

    def __init__(self) -> None:
        self.parsers: list[ToolParser] = []

    def register(self, parser: ToolParser) -> None:
        """Append a parser. Earlier registrations win on overlapping files."""
        self.parsers.append(parser)

    def parser_for(self, path: Path) -> ToolParser | None:
        """Return the first parser that accepts ``path``, or None."""
        for parser in self.parsers:
            if parser.can_parse(path):
                return parser
        return None

    def parser_for_language(self, language: str) -> ToolParser | None:
        """Return the parser registered for ``language``, or None."""
        for parser in self.parsers:
            if parser.language == language:
                return parser
        return None

    def extensions(self) -> set[str]:
        """Return every extension some registered parser owns."""
        return {ext for parser in self.parsers for ext in parser.extensions}


def default_registry() -> ParserRegistry:
    """Create a ParserRegistry with all built-in parsers (currently Python)."""
    registry = ParserRegistry()
    registry.register(PythonParser())
    return registry
