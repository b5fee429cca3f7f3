"""Keyword search over tool metadata.

Powers three commands:

- ``find`` -- rank tools by how well their metadata matches a query.
- ``where`` -- suggest which existing tool a new feature belongs in, and
  list tools whose ``@boundary`` statements explicitly exclude it.
- ``what`` -- build a keyword index from keywords and capability text.

Scoring is additive per query term (case-insensitive substring match):

================  =====  =====
Field             find   where
================  =====  =====
name              10     10
description       5      5
capability        4      4
keyword           3      3
provides          3      6
================  =====  =====

Keywords also match when the keyword is a substring of the term, so the
keyword ``log`` matches the query ``logs``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from tctl.core.models import Tool

STOP_WORDS: frozenset[str] = frozenset({
    "a", "an", "the", "is", "are", "was", "were", "be", "been",
    "and", "or", "but", "for", "to", "from", "with", "in", "on", "of",
    "at", "by", "this", "that", "it", "its", "does", "do",
})

_WORD = re.compile(r"\b[a-zA-Z]{3,}\b")


@dataclass
class Match:
    """A tool that matched a query.

    Attributes:
        tool: The matching tool.
        score: Sum of field weights for every matching term.
        reasons: Human-readable match explanations, in discovery order.
            May contain duplicates; use ``unique_reasons`` for display.
    """

    tool: Tool
    score: int = 0
    reasons: list[str] = field(default_factory=list)

    @property
    def unique_reasons(self) -> list[str]:
        return list(dict.fromkeys(self.reasons))


@dataclass(frozen=True)
class Exclusion:
    """A tool whose boundary statement mentions a query term."""

    tool: Tool
    boundary: str


def _terms(query: str) -> list[str]:
    return query.lower().split()


def _score_tool(tool: Tool, terms: list[str], provides_weight: int, placement: bool) -> Match:
    match = Match(tool=tool)

    def hit(weight: int, reason: str) -> None:
        match.score += weight
        match.reasons.append(reason)

    name = tool.name.lower()
    description = tool.description.lower()
    for term in terms:
        if term in name:
            hit(10, f"name contains '{term}'")
    for term in terms:
        if term in description:
            verb = "mentions" if placement else "contains"
            hit(5, f"description {verb} '{term}'")
    for keyword in tool.keywords:
        kw = keyword.lower()
        for term in terms:
            if term in kw or kw in term:
                hit(3, f"keyword '{keyword}'")
    for capability in tool.capabilities:
        cap = capability.lower()
        for term in terms:
            if term in cap:
                reason = f"capability: {capability}" if placement else f"capability matches '{term}'"
                hit(4, reason)
    for artifact in tool.provides:
        art = artifact.lower()
        for term in terms:
            if term in art:
                hit(provides_weight, f"provides '{artifact}'")
    return match


def _ranked(matches: Iterable[Match]) -> list[Match]:
    return sorted(matches, key=lambda m: (-m.score, m.tool.name))


def find_tools(tools: Iterable[Tool], query: str) -> list[Match]:
    """Rank tools against a free-text query.

    Args:
        tools: Candidate tools (e.g. ``registry.all()``).
        query: Whitespace-separated search terms.

    Returns:
        Matches with a positive score, best first (ties by tool name).
    """
    terms = _terms(query)
    scored = (_score_tool(t, terms, provides_weight=3, placement=False) for t in tools)
    return _ranked(m for m in scored if m.score > 0)


def suggest_placement(
    tools: Iterable[Tool], feature: str,
) -> tuple[list[Match], list[Exclusion]]:
    """Suggest where a feature belongs.

    Args:
        tools: Candidate tools.
        feature: Free-text feature description.

    Returns:
        ``(matches, excluded)``: ranked matches, and one exclusion per tool
        for the first boundary that mentions any term.
    """
    terms = _terms(feature)
    matches: list[Match] = []
    excluded: list[Exclusion] = []
    for tool in tools:
        match = _score_tool(tool, terms, provides_weight=6, placement=True)
        if match.score > 0:
            matches.append(match)
        for boundary in tool.boundaries:
            if any(term in boundary.lower() for term in terms):
                excluded.append(Exclusion(tool=tool, boundary=boundary))
                break
    return _ranked(matches), excluded


def suggest_tool_name(feature: str, max_words: int = 3) -> str:
    """Derive a kebab-case tool name from the first words of a feature."""
    return "-".join(_terms(feature)[:max_words])


def extract_keywords(text: str) -> list[str]:
    """Return lowercase words of 3+ letters from ``text``, minus stop words."""
    return [w for w in _WORD.findall(text.lower()) if w not in STOP_WORDS]


def keyword_index(tools: Iterable[Tool]) -> dict[str, list[str]]:
    """Map each keyword (and capability word) to the tools that carry it.

    Returns:
        Keyword to sorted tool names, ordered by tool count descending and
        then alphabetically.
    """
    index: dict[str, set[str]] = {}
    for tool in tools:
        for keyword in tool.keywords:
            index.setdefault(keyword.lower(), set()).add(tool.name)
        for capability in tool.capabilities:
            for word in extract_keywords(capability):
                index.setdefault(word, set()).add(tool.name)
    ordered = sorted(index.items(), key=lambda item: (-len(item[1]), item[0]))
    return {kw: sorted(names) for kw, names in ordered}
