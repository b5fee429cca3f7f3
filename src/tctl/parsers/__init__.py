"""Tool metadata parsers: docstring extraction, tag parsing, language handlers."""

from tctl.parsers.base import ToolParser
from tctl.parsers.docstring import DocBlock, extract_docstring
from tctl.parsers.python import PythonParser
from tctl.parsers.registry import ParserRegistry, default_registry
from tctl.parsers.tags import parse_interface_line, parse_tags, render_tags

__all__ = [
    "DocBlock",
    "ParserRegistry",
    "PythonParser",
    "ToolParser",
    "default_registry",
    "extract_docstring",
    "parse_interface_line",
    "parse_tags",
    "render_tags",
]
