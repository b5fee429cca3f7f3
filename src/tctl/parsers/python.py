"""Parser for Python tools (module docstring tags).

A Python tool is any ``.py`` file whose module docstring carries an
``@tool <name>`` line:

.. code-block:: python

    #!/usr/bin/env python3
    \"\"\"
    fetch_prices.py
    Download daily closing prices.

    @tool fetch-prices
    @provides prices
    @output data/prices.csv
    @freshness daily
    \"\"\"
"""

from __future__ import annotations

from pathlib import Path

from tctl.exceptions import ParseError
from tctl.parsers.base import ToolParser
from tctl.parsers.docstring import DocBlock, extract_docstring


class PythonParser(ToolParser):
    """Extracts tool metadata from Python module docstrings."""

    language = "python"
    extensions = (".py",)

    def read_block(self, path: Path) -> DocBlock | None:
        """Read ``path`` and return its module docstring, if any.

        Raises:
            ParseError: The file could not be read or is not valid UTF-8.
        """
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(f"cannot read {path}: {exc}") from exc
        return extract_docstring(content)
