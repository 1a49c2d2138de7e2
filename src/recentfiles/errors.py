"""Exception types raised by recentfiles."""

from __future__ import annotations


class RecentFilesError(Exception):
    """Base class for errors reported to the user by the CLI."""


class ScanError(RecentFilesError):
    """The scan root does not exist, is not a directory, or cannot be read."""


class MissingDependency(RecentFilesError):
    """A required external tool is not available on `PATH`."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"Required tool not found on PATH: {tool}")
        self.tool: str = tool


class PickerError(RecentFilesError):
    """The interactive picker exited abnormally."""
