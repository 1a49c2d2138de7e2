"""
FileScanner: walks a directory tree and yields the regular files that survive
the exclusion rules, each stamped with its modification time.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from pathlib import Path

import pathspec

from recentfiles.errors import ScanError
from recentfiles.log import get_logger
from recentfiles.scanner.ignore_files import load_gitignore, load_tool_ignore
from recentfiles.scanner.types import ExclusionSet, FileEntry, ScanConfig

log = get_logger(__name__)


class FileScanner:
    """
    Recursively enumerates regular files under `config.root`, hidden files
    included, following symbolic links.

    Every call to `scan()` re-walks the filesystem; nothing is cached between
    calls except parsed ignore files.
    """

    def __init__(self, config: ScanConfig, exclusions: ExclusionSet | None = None) -> None:
        self._config: ScanConfig = config
        self._root: Path = Path(config.root)
        self._exclusions: ExclusionSet = (
            exclusions if exclusions is not None else config.exclusion_set()
        )
        try:
            # Compile eagerly so a bad pattern fails before any walking.
            _ = self._exclusions.spec
        except ValueError as e:
            raise ScanError(f"Invalid exclusion pattern: {e}") from e
        self._gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}
        self._tool_ignore: pathspec.PathSpec | None = None

    @property
    def root(self) -> Path:
        return self._root

    @property
    def exclusions(self) -> ExclusionSet:
        return self._exclusions

    def scan(self) -> Iterator[FileEntry]:
        """Yield a `FileEntry` for each matching regular file, in discovery order."""
        for full_path, rel_path in self._walk():
            try:
                st = os.stat(full_path) if self._config.follow_symlinks else os.lstat(full_path)
            except OSError as e:
                # Broken symlink, or the file vanished mid-walk.
                log.debug("Skipping %s: %s", full_path, e)
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            yield FileEntry(path=full_path, rel_path=rel_path, modified_at=st.st_mtime)

    def count(self) -> int:
        """
        Estimate how many files `scan()` would yield. Walks the tree with the same
        pruning but without stat-ing each file.
        """
        return sum(1 for _ in self._walk())

    def _check_root(self) -> Path:
        root = self._root
        if not root.exists():
            raise ScanError(f"Path not found: {root}")
        if not root.is_dir():
            raise ScanError(f"Not a directory: {root}")
        if not os.access(root, os.R_OK | os.X_OK):
            raise ScanError(f"Permission denied: {root}")
        return root.absolute()

    def _walk(self) -> Iterator[tuple[Path, str]]:
        """
        Walk with `os.walk()`, pruning excluded directories in place. Yields
        `(absolute_path, relative_path)` for candidate files.
        """
        root = self._check_root()
        follow = self._config.follow_symlinks
        if self._config.tool_name:
            self._tool_ignore = load_tool_ignore(self._config.tool_name, root)

        visited: set[tuple[int, int]] = set()
        root_st = os.stat(root)
        visited.add((root_st.st_dev, root_st.st_ino))

        def on_error(err: OSError) -> None:
            log.debug("Skipping unreadable directory %s: %s", err.filename, err.strerror)

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=follow):
            current = Path(dirpath)
            rel_dir = current.relative_to(root).as_posix()
            if rel_dir == ".":
                rel_dir = ""
            gitignores = (
                self._gitignore_chain(current, root) if self._config.respect_gitignore else []
            )

            kept: list[str] = []
            for d in sorted(dirnames):
                rel = f"{rel_dir}/{d}" if rel_dir else d
                if self._is_excluded(rel, True, current, gitignores):
                    continue
                if follow:
                    try:
                        st = os.stat(current / d)
                    except OSError:
                        continue
                    key = (st.st_dev, st.st_ino)
                    if key in visited:
                        log.debug("Skipping symlink cycle at %s", current / d)
                        continue
                    visited.add(key)
                kept.append(d)
            dirnames[:] = kept

            for filename in sorted(filenames):
                rel = f"{rel_dir}/{filename}" if rel_dir else filename
                if self._is_excluded(rel, False, current, gitignores):
                    continue
                yield current / filename, rel

    def _is_excluded(
        self,
        rel_path: str,
        is_dir: bool,
        current_dir: Path,
        gitignores: list[tuple[Path, pathspec.PathSpec]],
    ) -> bool:
        if self._exclusions.matches(rel_path, is_dir):
            return True

        candidate = rel_path + "/" if is_dir else rel_path
        if self._tool_ignore is not None and self._tool_ignore.match_file(candidate):
            return True

        name = rel_path.rsplit("/", 1)[-1]
        for spec_dir, spec in gitignores:
            # Gitignore patterns are relative to the directory holding the file.
            rel_to_spec = (current_dir / name).relative_to(spec_dir).as_posix()
            if is_dir:
                rel_to_spec += "/"
            if spec.match_file(rel_to_spec):
                return True
        return False

    def _get_gitignore(self, directory: Path) -> pathspec.PathSpec | None:
        """Load and cache gitignore for a directory."""
        if directory not in self._gitignore_cache:
            self._gitignore_cache[directory] = load_gitignore(directory)
        return self._gitignore_cache[directory]

    def _gitignore_chain(
        self, directory: Path, walk_root: Path
    ) -> list[tuple[Path, pathspec.PathSpec]]:
        """Collect gitignore specs from `walk_root` down to `directory` (inclusive)."""
        specs: list[tuple[Path, pathspec.PathSpec]] = []
        current = walk_root
        for part in directory.relative_to(walk_root).parts:
            spec = self._get_gitignore(current)
            if spec is not None:
                specs.append((current, spec))
            current = current / part
        spec = self._get_gitignore(current)
        if spec is not None:
            specs.append((current, spec))
        return specs
