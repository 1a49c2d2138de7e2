"""Ordering of scanned files by recency, and timestamp rendering."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from recentfiles.scanner.types import FileEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def rank(entries: Iterable[FileEntry]) -> list[FileEntry]:
    """
    Sort entries by modification time, newest first.

    The sort is stable, so entries with equal timestamps keep their discovery
    order. Nothing is filtered: the output has the same length as the input.
    """
    return sorted(entries, key=lambda e: e.modified_at, reverse=True)


def format_timestamp(ts: float) -> str:
    """Render an epoch timestamp in local time, to the second."""
    return datetime.fromtimestamp(ts).strftime(TIMESTAMP_FORMAT)
