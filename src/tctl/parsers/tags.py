"""Tag parser: turns a docstring's ``@tag`` lines into a ``Tool``.

The tag syntax is the de facto wire format between annotated scripts and
tctl. Spelling and precedence of the prefixes below must stay stable;
changing them breaks every existing annotated file.

.. code-block:: text

    fetch_prices.py
    Download daily closing prices.

    @tool fetch-prices
    @version 1.2.0
    @provides prices
    @requires symbols
    @output data/prices.csv
    @freshness daily
    @capability Downloads end-of-day prices from the exchange API
    @boundary Does NOT compute indicators (use compute-signals)
    @keywords prices, market stocks
    @interface
      --symbols: string, required - Comma-separated tickers
      --days: int, default=30 - History window
    @example tctl run fetch-prices --symbols AAPL

Parsing is permissive: a malformed line is dropped or yields a default,
never an exception. The only "failure" is returning None when no
``@tool <name>`` line was seen.

Line classification, in priority order:

1. Inside an ``@interface`` block, ``--`` lines are argument lines; an
   ``@`` line closes the block and is re-processed as a tag; anything else
   is skipped.
2. Tag prefixes are matched in the order of ``_TAG_PREFIXES``.
3. Other non-empty lines seen before the name or provides list are
   description candidates. The second candidate wins (the first is
   conventionally the filename); with one candidate, it is used.
"""

from __future__ import annotations

import re

from tctl.core.models import DEFAULT_FRESHNESS, Arg, Tool

_INTERFACE_LINE = re.compile(r"^(--[\w-]+):\s*(.+)$")
_KEYWORD_SPLIT = re.compile(r"[,\s]+")

_TAG_PREFIXES: tuple[str, ...] = (
    "@tool ",
    "@version ",
    "@provides ",
    "@requires ",
    "@output ",
    "@freshness ",
    "@capability ",
    "@boundary ",
    "@keywords ",
    "@interface",
    "@example ",
)


def parse_interface_line(line: str) -> Arg | None:
    """Parse one ``--name: type, modifiers - description`` line.

    Args:
        line: A single line from an ``@interface`` block.

    Returns:
        The argument descriptor, or None when the line does not have the
        ``--name: rest`` shape.
    """
    match = _INTERFACE_LINE.match(line.strip())
    if match is None:
        return None

    name, rest = match.group(1), match.group(2)
    type_part, sep, description = rest.partition(" - ")
    if not sep:
        description = ""

    arg = Arg(name=name, description=description.strip())
    for index, token in enumerate(type_part.split(",")):
        token = token.strip()
        if index == 0:
            arg.type = token
        elif token == "required":
            arg.required = True
        elif token.startswith("default="):
            arg.default = token[len("default="):]
    return arg


def _apply_tag(tool: Tool, prefix: str, value: str) -> bool:
    """Store one tag value on ``tool``. Returns True if the line opens @interface."""
    if prefix == "@tool ":
        tool.name = value.strip()
    elif prefix == "@version ":
        tool.version = value.strip()
    elif prefix == "@provides ":
        tool.provides.extend(value.split())
    elif prefix == "@requires ":
        tool.requires.extend(value.split())
    elif prefix == "@output ":
        tool.output = value.strip()
    elif prefix == "@freshness ":
        tool.freshness = value.strip()
    elif prefix == "@capability ":
        tool.capabilities.append(value.strip())
    elif prefix == "@boundary ":
        tool.boundaries.append(value.strip())
    elif prefix == "@keywords ":
        tool.keywords.extend(kw for kw in _KEYWORD_SPLIT.split(value.strip()) if kw)
    elif prefix == "@interface":
        return True
    elif prefix == "@example ":
        tool.examples.append(value.strip())
    return False


def parse_tags(block: str) -> Tool | None:
    """Build a ``Tool`` from the text of a documentation block.

    ``file`` and ``language`` are left for the calling language parser to
    fill in.

    Args:
        block: Docstring content without delimiters.

    Returns:
        The descriptor, or None if no non-empty ``@tool`` name was found.
    """
    tool = Tool(freshness=DEFAULT_FRESHNESS)
    in_interface = False
    description_lines: list[str] = []

    for line in block.split("\n"):
        trimmed = line.strip()

        if in_interface:
            if trimmed.startswith("--"):
                arg = parse_interface_line(trimmed)
                if arg is not None:
                    tool.interface[arg.name] = arg
                continue
            if not trimmed.startswith("@"):
                continue
            in_interface = False

        for prefix in _TAG_PREFIXES:
            if trimmed.startswith(prefix):
                in_interface = _apply_tag(tool, prefix, trimmed[len(prefix):])
                break
        else:
            if trimmed and not trimmed.startswith("@"):
                if not tool.name and not tool.provides:
                    description_lines.append(trimmed)

    if len(description_lines) > 1:
        tool.description = description_lines[1]
    elif description_lines:
        tool.description = description_lines[0]

    if not tool.name:
        return None
    return tool


def render_tags(tool: Tool, title: str = "") -> str:
    """Render a descriptor back into a tag block.

    Re-parsing the result with :func:`parse_tags` reproduces the name,
    provides, requires, keywords, capabilities, boundaries, examples and
    interface of ``tool``. Values containing a newline cannot be
    represented and are written up to the first newline.

    Args:
        tool: The descriptor to render.
        title: Optional first line (conventionally the filename). The
            description follows it as the second line.

    Returns:
        Block text without the surrounding delimiters.
    """
    lines: list[str] = []
    if title:
        lines.append(title)
    if tool.description:
        lines.append(tool.description)
    if lines:
        lines.append("")

    lines.append(f"@tool {tool.name}")
    if tool.version:
        lines.append(f"@version {tool.version}")
    if tool.provides:
        lines.append(f"@provides {' '.join(tool.provides)}")
    if tool.requires:
        lines.append(f"@requires {' '.join(tool.requires)}")
    if tool.output:
        lines.append(f"@output {tool.output}")
    lines.append(f"@freshness {tool.freshness or DEFAULT_FRESHNESS}")

    for capability in tool.capabilities:
        lines.append(f"@capability {capability}")
    for boundary in tool.boundaries:
        lines.append(f"@boundary {boundary}")
    if tool.keywords:
        lines.append(f"@keywords {', '.join(tool.keywords)}")

    if tool.interface:
        lines.append("@interface")
        for arg in tool.interface.values():
            tokens = [arg.type or "string"]
            if arg.required:
                tokens.append("required")
            if arg.default:
                tokens.append(f"default={arg.default}")
            entry = f"  {arg.name}: {', '.join(tokens)}"
            if arg.description:
                entry += f" - {arg.description}"
            lines.append(entry)

    for example in tool.examples:
        lines.append(f"@example {example}")

    return "\n".join(line.split("\n", 1)[0] for line in lines) + "\n"
