"""Process-wide logging configuration."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _CheckoutHandler(logging.StreamHandler):
    """Marker type so repeated configuration replaces rather than stacks."""


def configure_logging(level: str | int = "INFO") -> None:
    """Send log records to stderr so they never mix with CLI output."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for handler in [h for h in root.handlers if isinstance(h, _CheckoutHandler)]:
        root.removeHandler(handler)

    handler = _CheckoutHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
