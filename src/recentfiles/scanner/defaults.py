"""
Default exclusion patterns for recent-file scans.

These patterns use gitignore syntax. Directory patterns end with `/`.
"""

from __future__ import annotations

# Trees that are large, machine-written, or both. Excluded directories are pruned
# during traversal (never entered).
DEFAULT_EXCLUDES: list[str] = [
    # Version control
    ".git/",
    ".hg/",
    ".svn/",
    ".bzr/",
    # Python
    ".venv/",
    "venv/",
    "__pycache__/",
    ".tox/",
    ".nox/",
    ".mypy_cache/",
    ".ruff_cache/",
    ".pytest_cache/",
    "*.egg-info/",
    # Build output
    "build/",
    "dist/",
    "target/",
    # JavaScript/Node
    "node_modules/",
    ".next/",
    ".cache/",
    ".turbo/",
    # IDE/Editor
    ".idea/",
    ".vscode/",
    # Other
    "vendor/",
    "Pods/",
    ".terraform/",
    ".DS_Store",
]

# Above this many files `red` asks before launching the picker.
DEFAULT_THRESHOLD: int = 200_000

DEFAULT_COUNT: int = 20

DEFAULT_PREVIEW_LINES: int = 100
