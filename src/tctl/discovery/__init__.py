"""Discovery of tools across registered source directories.

Public API::

    from tctl.discovery import DirectoryScanner

    registry = DirectoryScanner().scan([Path("tools"), Path("scripts")])
    tool = registry.find_by_provides("prices")
"""

from __future__ import annotations

from tctl.discovery.scanner import (
    SKIP_DIRS,
    DirectoryScanner,
    iter_candidate_files,
    scan_directories,
    scan_directory,
    should_skip_dir,
)

__all__ = [
    "DirectoryScanner",
    "SKIP_DIRS",
    "iter_candidate_files",
    "scan_directories",
    "scan_directory",
    "should_skip_dir",
]
