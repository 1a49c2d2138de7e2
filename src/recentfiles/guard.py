"""
Confirmation gate for very large result sets.

A scan rooted at the wrong place (a home directory full of vendored
dependencies, say) can take minutes to rank and preview. Before launching the
picker on such a tree we ask once.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from recentfiles.log import get_logger
from recentfiles.scanner.defaults import DEFAULT_THRESHOLD

log = get_logger(__name__)


class Decision(Enum):
    PROCEED = "proceed"
    ABORT = "abort"


def prompt_yes_no(question: str = "Continue? [y/N] ") -> bool:
    """Ask on the terminal. Only `y` or `Y` counts as yes; EOF or Ctrl-C count as no."""
    try:
        answer = input(question)
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer.strip() in ("y", "Y")


def check(
    count: int,
    threshold: int = DEFAULT_THRESHOLD,
    confirm: Callable[[], bool] = prompt_yes_no,
) -> Decision:
    """
    `PROCEED` unconditionally when `count <= threshold`. Otherwise warn and
    proceed only if `confirm()` returns true.
    """
    if count <= threshold:
        return Decision.PROCEED

    log.warning("Warning: %d files found (threshold %d). This may be slow.", count, threshold)
    if confirm():
        return Decision.PROCEED
    return Decision.ABORT
