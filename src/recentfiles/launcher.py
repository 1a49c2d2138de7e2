"""Opening a selected file in the user's editor."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path

from recentfiles.log import get_logger

log = get_logger(__name__)

DEFAULT_EDITOR = "vi"

NO_SELECTION_MESSAGE = "No file selected."

# Exit status a shell reports for a command it cannot find.
_COMMAND_NOT_FOUND = 127

# Exit status a shell reports for a command it found but cannot execute.
_COMMAND_NOT_EXECUTABLE = 126


def resolve_editor(explicit: str | None = None, environ: Mapping[str, str] | None = None) -> str:
    """
    Pick the editor command: `explicit` (from a flag or config file), then
    `$VISUAL`, then `$EDITOR`, then `vi`.
    """
    env = os.environ if environ is None else environ
    for candidate in (explicit, env.get("VISUAL"), env.get("EDITOR")):
        if candidate and candidate.strip():
            return candidate
    return DEFAULT_EDITOR


def open_in_editor(path: str | Path | None, editor_command: str) -> int:
    """
    Run `editor_command` with `path` appended and return its exit status.

    With no path, prints the no-selection notice and returns 0 without
    spawning anything.
    """
    if path is None or str(path) == "":
        print(NO_SELECTION_MESSAGE)
        return 0

    try:
        argv = shlex.split(editor_command) + [str(path)]
    except ValueError as e:
        print(f"Error: invalid editor command {editor_command!r}: {e}", file=sys.stderr)
        return 1
    log.info("Opening %s", path)
    log.debug("Running editor: %s", argv)
    try:
        return subprocess.call(argv)
    except FileNotFoundError:
        print(f"Error: editor not found: {argv[0]}", file=sys.stderr)
        return _COMMAND_NOT_FOUND
    except PermissionError:
        print(f"Error: editor is not executable: {argv[0]}", file=sys.stderr)
        return _COMMAND_NOT_EXECUTABLE
