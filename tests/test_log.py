from __future__ import annotations

import io
import logging

from recentfiles.log import configure_logging, get_logger


def test_get_logger_children_share_namespace():
    assert get_logger().name == "recentfiles"
    assert get_logger("recentfiles.scanner.scanner").name == "recentfiles.scanner.scanner"
    assert get_logger("other").name == "recentfiles.other"


def test_configure_logging_levels():
    stream = io.StringIO()
    configure_logging(0, stream=stream)
    get_logger("t").info("hidden")
    get_logger("t").warning("shown")
    assert stream.getvalue() == "shown\n"

    configure_logging(2, stream=stream)
    assert get_logger().level == logging.DEBUG
    assert len(get_logger().handlers) == 1
    configure_logging(0)
