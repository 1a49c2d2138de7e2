"""
Recent-file discovery: exclusion-aware directory walking.

Usage::

    from recentfiles.scanner import FileScanner, ScanConfig

    scanner = FileScanner(ScanConfig(root=Path("."), extend_exclude=["*.log"]))
    for entry in scanner.scan():
        print(entry.rel_path, entry.modified_at)
"""

from recentfiles.scanner.defaults import DEFAULT_EXCLUDES, DEFAULT_THRESHOLD
from recentfiles.scanner.scanner import FileScanner
from recentfiles.scanner.types import ExclusionSet, FileEntry, ScanConfig

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_THRESHOLD",
    "ExclusionSet",
    "FileEntry",
    "FileScanner",
    "ScanConfig",
]
