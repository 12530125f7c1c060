"""Logging setup for hosts (the Streamlit app, scripts).

Library modules only create loggers; handlers are configured here.
"""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Suppress noisy matplotlib debug messages
    logging.getLogger("matplotlib.font_manager").setLevel(logging.INFO)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger(__name__).debug(
        "Logging configured (level=%s)", logging.getLevelName(level)
    )
