"""Leading docstring extraction for script files.

A tool's metadata lives in the first top-level documentation block of the
file: a run of lines opened by ``\"\"\"`` or ``'''`` that appears before any
other code. Blank lines and ``#`` lines (shebang, encoding declaration,
comments) may precede it.

Extraction never raises. A file with code before any delimiter has no
block (``None``). A block whose closing delimiter is missing is returned
best-effort with ``terminated=False`` so callers can warn about it.
"""

from __future__ import annotations

from dataclasses import dataclass

_DELIMITERS = ('"""', "'''")


@dataclass(frozen=True)
class DocBlock:
    """The extracted documentation block.

    Attributes:
        text: Block content without the delimiters. Lines joined with ``\\n``.
        terminated: False when the file ended before the closing delimiter.
        delimiter: The delimiter that opened the block.
        start_line: 1-based line number of the opening delimiter.
    """

    text: str
    terminated: bool = True
    delimiter: str = '"""'
    start_line: int = 1


def extract_docstring(content: str) -> DocBlock | None:
    """Locate the first top-level documentation block in ``content``.

    Args:
        content: Full text of the source file.

    Returns:
        A ``DocBlock``, or None when code appears before any delimiter.
    """
    lines: list[str] = []
    delimiter = ""
    start_line = 0

    for lineno, line in enumerate(content.splitlines(), start=1):
        trimmed = line.strip()

        if not delimiter:
            if trimmed.startswith("#") or not trimmed:
                continue
            if not trimmed.startswith(_DELIMITERS):
                return None
            delimiter = trimmed[:3]
            start_line = lineno
            rest = trimmed[3:]
            if delimiter in rest:
                return DocBlock(
                    text=rest[: rest.index(delimiter)],
                    delimiter=delimiter,
                    start_line=start_line,
                )
            lines.append(rest)
            continue

        if delimiter in line:
            lines.append(line[: line.index(delimiter)])
            return DocBlock(
                text="\n".join(lines), delimiter=delimiter, start_line=start_line,
            )
        lines.append(line)

    if not delimiter:
        return None
    return DocBlock(
        text="\n".join(lines),
        terminated=False,
        delimiter=delimiter,
        start_line=start_line,
    )
