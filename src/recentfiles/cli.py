#!/usr/bin/env python3
"""
recentfiles: find and open the most recently modified files under a directory

Common usage:
  recent                  20 most recently modified files under the current directory
  recent 50               50 most recent files
  recent 10 '*.log' tmp/  10 most recent, also excluding *.log files and tmp/
  red                     pick a recent file interactively and open it in $EDITOR

Exclusion patterns use gitignore syntax: `name` matches a file or directory of
that name at any depth, `name/` only directories, and `a/b` is anchored to the
scan root. Defaults skip VCS metadata, dependency trees and build output.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from recentfiles.config import find_config_file, load_config, merge_cli_with_config
from recentfiles.errors import RecentFilesError
from recentfiles.guard import Decision, check, prompt_yes_no
from recentfiles.launcher import open_in_editor, resolve_editor
from recentfiles.log import configure_logging, get_logger
from recentfiles.picker import PICKER_TOOL, list_recent, pick_interactive, require_tool
from recentfiles.ranking import rank
from recentfiles.scanner import FileScanner, ScanConfig
from recentfiles.scanner.defaults import DEFAULT_COUNT, DEFAULT_PREVIEW_LINES, DEFAULT_THRESHOLD

log = get_logger(__name__)

_COUNT_RE = re.compile(r"^\d+$")


@dataclass
class Options:
    """Command-line options shared by `recent` and `red`."""

    root: str
    count: int | None
    patterns: list[str]
    exclude: list[str] | None
    extend_exclude: list[str]
    respect_gitignore: bool | None
    no_config: bool
    verbose: int
    version: bool
    # `red` only
    editor: str | None = None
    threshold: int | None = None
    preview_lines: int | None = None
    yes: bool = False


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def _base_parser(prog: str, summary: str) -> argparse.ArgumentParser:
    # Use the module's docstring as the epilog
    module_doc = __doc__ or ""
    epilog = "\n\n".join(module_doc.split("\n\n")[1:])

    parser = argparse.ArgumentParser(
        prog=prog,
        description=summary,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--root",
        type=str,
        default=".",
        metavar="DIR",
        help="Directory to scan (default: current directory)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace all default exclusion patterns. Can be repeated",
    )
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Add to default exclusion patterns (e.g., 'drafts/'). Can be repeated",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        default=None,
        dest="respect_gitignore",
        help="Also skip paths ignored by .gitignore files",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help="Do not read .recentfiles.toml / recentfiles.toml / pyproject.toml",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (repeat for debug output)",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    return parser


def _explicit_flags(opts: argparse.Namespace) -> set[str]:
    """Flags the user actually passed. Tracked flags default to `None` in argparse."""
    tracked = [
        "count",
        "exclude",
        "extend_exclude",
        "respect_gitignore",
        "editor",
        "threshold",
        "preview_lines",
    ]
    return {name for name in tracked if getattr(opts, name, None) is not None}


def _parse_recent_args(args: list[str] | None) -> tuple[Options, set[str]]:
    parser = _base_parser("recent", "List the most recently modified files, newest first.")
    parser.add_argument(
        "positionals",
        nargs="*",
        metavar="[count] [pattern]",
        help=f"Number of files to show (default: {DEFAULT_COUNT}), "
        "then extra exclusion patterns",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=_non_negative_int,
        default=None,
        help=f"Number of files to show (default: {DEFAULT_COUNT})",
    )
    opts = parser.parse_args(args)

    positionals: list[str] = list(opts.positionals)
    if positionals and _COUNT_RE.match(positionals[0]):
        if opts.count is None:
            opts.count = int(positionals[0])
        positionals = positionals[1:]

    options = Options(
        root=opts.root,
        count=opts.count,
        patterns=positionals,
        exclude=opts.exclude,
        extend_exclude=opts.extend_exclude or [],
        respect_gitignore=opts.respect_gitignore,
        no_config=opts.no_config,
        verbose=opts.verbose,
        version=opts.version,
    )
    return options, _explicit_flags(opts)


def _parse_red_args(args: list[str] | None) -> tuple[Options, set[str]]:
    parser = _base_parser(
        "red", "Pick a recently modified file with a fuzzy finder and open it in an editor."
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        metavar="pattern",
        help="Extra exclusion patterns",
    )
    parser.add_argument(
        "--editor",
        type=str,
        default=None,
        metavar="CMD",
        help="Editor command (default: $VISUAL, then $EDITOR, then vi)",
    )
    parser.add_argument(
        "--threshold",
        type=_non_negative_int,
        default=None,
        metavar="N",
        help=f"Ask before picking among more than N files (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "--preview-lines",
        type=_non_negative_int,
        default=None,
        dest="preview_lines",
        metavar="N",
        help=f"Lines shown in the preview pane (default: {DEFAULT_PREVIEW_LINES})",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation on large trees",
    )
    opts = parser.parse_args(args)

    options = Options(
        root=opts.root,
        count=None,
        patterns=list(opts.patterns),
        exclude=opts.exclude,
        extend_exclude=opts.extend_exclude or [],
        respect_gitignore=opts.respect_gitignore,
        no_config=opts.no_config,
        verbose=opts.verbose,
        version=opts.version,
        editor=opts.editor,
        threshold=opts.threshold,
        preview_lines=opts.preview_lines,
        yes=opts.yes,
    )
    return options, _explicit_flags(opts)


def _print_version() -> int:
    try:
        version = importlib.metadata.version("recentfiles")
        print(f"v{version}")
    except importlib.metadata.PackageNotFoundError:
        print("unknown (package not installed)")
    return 0


def _apply_config(options: Options, explicit_flags: set[str]) -> None:
    """Merge config file settings into `options` unless `--no-config` was given."""
    if options.no_config:
        return
    config_path = find_config_file(Path.cwd())
    if config_path:
        log.info("Using config %s", config_path)
        try:
            config = load_config(config_path)
        except (ValueError, OSError) as e:
            raise RecentFilesError(f"Could not read config {config_path}: {e}") from e
        merge_cli_with_config(options, config, explicit_flags)


def _make_scanner(options: Options) -> FileScanner:
    config = ScanConfig(
        root=Path(options.root),
        exclude=options.exclude,
        extend_exclude=options.extend_exclude + options.patterns,
        respect_gitignore=bool(options.respect_gitignore),
    )
    return FileScanner(config)


def recent_main(args: list[str] | None = None) -> int:
    """
    Entry point for `recent`: print the most recently modified files.

    Returns:
        Exit code: 0, including when nothing matched; 1 if the scan root is unusable.
    """
    options, explicit_flags = _parse_recent_args(args)
    configure_logging(options.verbose)

    if options.version:
        return _print_version()

    try:
        _apply_config(options, explicit_flags)
        count = options.count if options.count is not None else DEFAULT_COUNT
        scanner = _make_scanner(options)
        ranked = rank(scanner.scan())
        shown = list_recent(ranked, count)
    except (RecentFilesError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log.info("Showed %d of %d files", shown, len(ranked))
    return 0


def red_main(args: list[str] | None = None) -> int:
    """
    Entry point for `red`: pick a recent file interactively and open it.

    Returns:
        The editor's exit code; 0 when nothing was selected; 1 when the picker is
        unavailable, the scan root is unusable, or the user declines a large scan.
    """
    options, explicit_flags = _parse_red_args(args)
    configure_logging(options.verbose)

    if options.version:
        return _print_version()

    try:
        # Fail before any scanning if the picker can't run.
        fzf = require_tool(PICKER_TOOL)
        _apply_config(options, explicit_flags)
        threshold = options.threshold if options.threshold is not None else DEFAULT_THRESHOLD
        preview_lines = (
            options.preview_lines if options.preview_lines is not None else DEFAULT_PREVIEW_LINES
        )
        scanner = _make_scanner(options)

        if not options.yes:
            decision = check(scanner.count(), threshold, prompt_yes_no)
            if decision is Decision.ABORT:
                print("Aborted.", file=sys.stderr)
                return 1

        ranked = rank(scanner.scan())
        choice = pick_interactive(
            ranked, scanner.root.absolute(), preview_lines=preview_lines, fzf_path=fzf
        )
    except RecentFilesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    editor = resolve_editor(options.editor)
    return open_in_editor(choice.path if choice is not None else None, editor)


if __name__ == "__main__":
    sys.exit(recent_main())
