"""Value types shared by the scanner, ranker and picker."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

import pathspec

from recentfiles.scanner.defaults import DEFAULT_EXCLUDES


@dataclass(frozen=True)
class ExclusionSet:
    """
    An immutable set of gitignore-style exclusion patterns.

    A pattern without `/` matches a single path segment at any depth, so
    `node_modules/` excludes every directory of that name and everything below
    it. Patterns containing `/` are anchored to the scan root.
    """

    patterns: frozenset[str] = frozenset()

    @classmethod
    def build(cls, defaults: Iterable[str], extra: Sequence[str] = ()) -> ExclusionSet:
        """Merge default and caller-supplied patterns. No syntax validation happens here."""
        return cls(frozenset(defaults) | frozenset(extra))

    @classmethod
    def default(cls, extra: Sequence[str] = ()) -> ExclusionSet:
        return cls.build(DEFAULT_EXCLUDES, extra)

    @cached_property
    def spec(self) -> pathspec.PathSpec:
        """
        Compiled matcher. Raises whatever `pathspec` raises for a malformed
        pattern; the scanner turns that into a `ScanError`.
        """
        # Sorted so compilation (and any error it raises) is deterministic.
        return pathspec.PathSpec.from_lines("gitignore", sorted(self.patterns))

    def matches(self, rel_path: str, is_dir: bool = False) -> bool:
        """
        True if `rel_path` (relative to the scan root, `/`-separated) or any of
        its parent directories is excluded.
        """
        parts = [p for p in rel_path.split("/") if p]
        for i in range(1, len(parts) + 1):
            prefix = "/".join(parts[:i])
            if i < len(parts) or is_dir:
                prefix += "/"
            if self.spec.match_file(prefix):
                return True
        return False

    def __len__(self) -> int:
        return len(self.patterns)


@dataclass(frozen=True)
class FileEntry:
    """A regular file found by a scan. Immutable once created."""

    path: Path
    rel_path: str
    modified_at: float

    @cached_property
    def is_empty(self) -> bool:
        """Computed on first access, for the preview pane."""
        try:
            return os.stat(self.path).st_size == 0
        except OSError:
            return False


@dataclass
class ScanConfig:
    """
    Configuration for a scan.

    `exclude=None` means use `DEFAULT_EXCLUDES`; providing a list replaces them entirely.
    `extend_exclude` is added on top of either.
    """

    root: Path = field(default_factory=Path.cwd)
    exclude: list[str] | None = None
    extend_exclude: list[str] = field(default_factory=list)
    respect_gitignore: bool = False
    follow_symlinks: bool = True
    tool_name: str = "recentfiles"

    def exclusion_set(self) -> ExclusionSet:
        base = self.exclude if self.exclude is not None else DEFAULT_EXCLUDES
        return ExclusionSet.build(base, self.extend_exclude)
