"""Logging configuration shared by the TUI and the terminal demo."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None, to_file: bool = False) -> None:
    """Set up root logging from ``CAREERCOMPASS_LOG_LEVEL``.

    The TUI owns the terminal, so it logs to ``CAREERCOMPASS_LOG_FILE``
    instead of stderr.
    """
    level_name = (level or os.getenv("CAREERCOMPASS_LOG_LEVEL", "INFO")).upper()
    kwargs = {}
    if to_file:
        kwargs["filename"] = os.getenv("CAREERCOMPASS_LOG_FILE", "careercompass.log")
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT, **kwargs)
    # The SDK's HTTP client logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
