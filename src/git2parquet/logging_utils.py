"""Logging configuration utilities for git2parquet."""

import logging
import os
import sys
from typing import Optional

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Optional[str] = None, default_level: str = "INFO") -> None:
    """Configure application-wide logging once.

    Records go to stderr; stdout is reserved for command output.
    """
    if logging.getLogger().handlers:
        return

    log_level = level or os.getenv("LOG_LEVEL") or default_level
    logging.basicConfig(level=log_level.upper(), format=_LOG_FORMAT, stream=sys.stderr)
