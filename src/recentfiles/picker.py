"""
Selection over a ranked file list: an interactive fuzzy picker backed by `fzf`,
and a non-interactive "top N" listing.
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from recentfiles.errors import MissingDependency, PickerError
from recentfiles.log import get_logger
from recentfiles.ranking import format_timestamp
from recentfiles.scanner.defaults import DEFAULT_COUNT, DEFAULT_PREVIEW_LINES
from recentfiles.scanner.types import FileEntry

log = get_logger(__name__)

PICKER_TOOL = "fzf"

# fzf exit codes: 1 = no match, 130 = interrupted (Esc or Ctrl-C).
_FZF_NO_MATCH = 1
_FZF_INTERRUPTED = 130


def require_tool(name: str) -> str:
    """Return the full path of `name` on `PATH`, or raise `MissingDependency`."""
    found = shutil.which(name)
    if found is None:
        raise MissingDependency(name)
    return found


def preview_command(root: Path, max_lines: int = DEFAULT_PREVIEW_LINES) -> str:
    """Shell command fzf runs for the highlighted line (`{}` is the line)."""
    argv = [
        sys.executable,
        "-m",
        "recentfiles.preview",
        "--root",
        str(root),
        "--lines",
        str(max_lines),
    ]
    return " ".join(shlex.quote(a) for a in argv) + " {}"


def pick_interactive(
    entries: Sequence[FileEntry],
    root: Path,
    *,
    preview_lines: int = DEFAULT_PREVIEW_LINES,
    fzf_path: str | None = None,
) -> FileEntry | None:
    """
    Show `entries` in fzf with a content preview and return the chosen one.

    Returns `None` when the list is empty or the user exits without choosing.
    Blocks until the user acts.
    """
    if not entries:
        log.info("No files to choose from.")
        return None

    fzf = fzf_path or require_tool(PICKER_TOOL)
    by_rel = {e.rel_path: e for e in entries}
    cmd = [
        fzf,
        "--no-multi",
        "--no-sort",
        "--read0",
        "--print0",
        "--preview",
        preview_command(root, preview_lines),
    ]
    log.debug("Running picker: %s", cmd)
    try:
        result = subprocess.run(
            cmd,
            input="\0".join(e.rel_path for e in entries) + "\0",
            stdout=subprocess.PIPE,
            text=True,
            check=False,
        )
    except KeyboardInterrupt:
        return None

    if result.returncode in (_FZF_NO_MATCH, _FZF_INTERRUPTED):
        return None
    if result.returncode != 0:
        raise PickerError(f"{PICKER_TOOL} exited with status {result.returncode}")

    choice = result.stdout.rstrip("\0")
    if not choice:
        return None
    return by_rel.get(choice)


def list_recent(
    entries: Sequence[FileEntry], count: int = DEFAULT_COUNT, out: TextIO | None = None
) -> int:
    """
    Write the first `count` entries as `<timestamp> <path>` lines and return
    how many were written.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    out = out if out is not None else sys.stdout
    shown = entries[:count]
    for entry in shown:
        out.write(f"{format_timestamp(entry.modified_at)} {entry.rel_path}\n")
    return len(shown)
