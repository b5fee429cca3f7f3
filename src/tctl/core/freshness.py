"""Freshness policies for tool outputs.

A freshness policy names the maximum age an output file may reach before
the resolver regenerates it:

==========  ==============================
Policy      Maximum age
==========  ==============================
daily       24 hours
weekly      168 hours
monthly     720 hours
manual      ~100 years (never stale)
==========  ==============================

Unknown policy names fall back to ``manual``. Status messages embed a
human-readable age (minutes under an hour, hours under a day, else days);
the ``status`` and ``get`` commands print them verbatim.
"""

from __future__ import annotations

import time
from datetime import timedelta
from pathlib import Path

THRESHOLDS: dict[str, timedelta] = {
    "daily": timedelta(hours=24),
    "weekly": timedelta(hours=7 * 24),
    "monthly": timedelta(hours=30 * 24),
    "manual": timedelta(days=365 * 100),
}

VALID_POLICIES: tuple[str, ...] = tuple(THRESHOLDS)


def threshold_for(policy: str) -> timedelta:
    """Return the maximum age for a policy, defaulting to ``manual``."""
    return THRESHOLDS.get(policy, THRESHOLDS["manual"])


def format_age(age_seconds: float, prefix: str) -> str:
    """Render an age as ``"<prefix> (Nm ago)"``, ``(Nh ago)`` or ``(Nd ago)``.

    Units are whole and truncated: 59 minutes is ``59m``, 23h59m is
    ``23h``, 47 hours is ``1d``.

    Args:
        age_seconds: Age of the file in seconds.
        prefix: Leading word, ``"fresh"`` or ``"stale"``.

    Returns:
        The formatted status string.
    """
    hours = int(age_seconds / 3600)
    days = hours // 24
    if days == 0:
        if hours == 0:
            return f"{prefix} ({int(age_seconds / 60)}m ago)"
        return f"{prefix} ({hours}h ago)"
    return f"{prefix} ({days}d ago)"


def check(path: Path | str, policy: str, now: float | None = None) -> tuple[bool, str]:
    """Decide whether the file at ``path`` satisfies a freshness policy.

    Args:
        path: Output file to inspect.
        policy: Policy name. Unknown names behave as ``manual``.
        now: Reference timestamp (seconds since the epoch). Defaults to the
            current time; tests pass an explicit value.

    Returns:
        ``(is_fresh, message)``. A missing file yields ``(False, "missing")``;
        any other stat failure yields ``(False, "error: ...")``.
    """
    try:
        mtime = Path(path).stat().st_mtime
    except FileNotFoundError:
        return False, "missing"
    except OSError as exc:
        return False, f"error: {exc}"

    reference = time.time() if now is None else now
    age = reference - mtime
    if age < threshold_for(policy).total_seconds():
        return True, format_age(age, "fresh")
    return False, format_age(age, "stale")


def is_fresh(path: Path | str, policy: str) -> bool:
    """Boolean shortcut for :func:`check`."""
    fresh, _ = check(path, policy)
    return fresh
