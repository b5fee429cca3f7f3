"""Core engine: descriptor model, freshness policies, resolver and search.

Common names are re-exported here; the linter lives in ``tctl.core.linter``.
"""

from tctl.core.freshness import THRESHOLDS, VALID_POLICIES, check, format_age, is_fresh
from tctl.core.models import Arg, Intent, Registry, Tool
from tctl.core.resolver import DataResolver, ResolveReporter, ensure
from tctl.core.search import Match, find_tools, keyword_index, suggest_placement

__all__ = [
    "Arg",
    "DataResolver",
    "Intent",
    "Match",
    "Registry",
    "ResolveReporter",
    "THRESHOLDS",
    "Tool",
    "VALID_POLICIES",
    "check",
    "ensure",
    "find_tools",
    "format_age",
    "is_fresh",
    "keyword_index",
    "suggest_placement",
]
