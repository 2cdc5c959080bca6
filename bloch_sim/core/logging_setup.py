"""Logging configuration for entry points.

Library modules only create loggers; handlers are installed here, once,
by whatever process is hosting the simulator.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "WARNING") -> None:
    """Attach a single stream handler to the ``bloch_sim`` logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger("bloch_sim")
    root.setLevel(level)
    if not any(getattr(h, "_bloch_sim", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._bloch_sim = True
        root.addHandler(handler)
