"""
Preview pane renderer for the interactive picker.

Run as `python -m recentfiles.preview PATH` from the picker's preview command.
"""

from __future__ import annotations

import argparse
import os
import sys
from itertools import islice
from pathlib import Path

from recentfiles.scanner.defaults import DEFAULT_PREVIEW_LINES

EMPTY_FILE = "[empty file]"
BINARY_FILE = "[binary file]"

# Bytes inspected to decide whether a file is text.
_SNIFF_SIZE = 8192


def is_binary(sample: bytes) -> bool:
    """A NUL byte or invalid UTF-8 in the leading block means binary."""
    if b"\x00" in sample:
        return True
    try:
        sample.decode("utf-8")
    except UnicodeDecodeError as e:
        # A multi-byte character cut off by the sniff limit is still text.
        return not (len(sample) == _SNIFF_SIZE and e.reason == "unexpected end of data")
    return False


def render_preview(path: str | Path, max_lines: int = DEFAULT_PREVIEW_LINES) -> str:
    """
    Text shown for `path` in the preview pane: `[empty file]`, `[binary file]`,
    or the first `max_lines` lines of the file.
    """
    path = Path(path)
    try:
        if os.stat(path).st_size == 0:
            return EMPTY_FILE
        with open(path, "rb") as f:
            sample = f.read(_SNIFF_SIZE)
        if is_binary(sample):
            return BINARY_FILE
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            return "".join(islice(f, max_lines))
    except OSError as e:
        return f"[unreadable file: {e.strerror or e}]"


def main(args: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="recentfiles.preview", description=__doc__)
    parser.add_argument("path", help="File to preview")
    parser.add_argument(
        "--root", type=str, default=None, help="Resolve relative paths against this directory"
    )
    parser.add_argument(
        "--lines",
        type=int,
        default=DEFAULT_PREVIEW_LINES,
        help="Maximum number of lines to show (default: %(default)s)",
    )
    opts = parser.parse_args(args)

    path = Path(opts.path)
    if opts.root and not path.is_absolute():
        path = Path(opts.root) / path
    sys.stdout.write(render_preview(path, opts.lines))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
