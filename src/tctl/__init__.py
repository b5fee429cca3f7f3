"""tctl: a personal tool catalog driven by docstring tags."""

from __future__ import annotations

__version__ = "0.2.0"
__license__ = "MIT"
