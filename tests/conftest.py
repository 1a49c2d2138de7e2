from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest


def touch(path: Path, mtime: float, content: str = "x") -> Path:
    """Create `path` (and parents) with `content` and a fixed modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers a CLI run bound to this test's captured stderr."""
    yield
    logger = logging.getLogger("recentfiles")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
