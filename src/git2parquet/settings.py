"""Application-wide settings and environment loading."""

import logging
import os
import shlex
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "gitlog.parquet"
DEFAULT_VIEWER = "npx hyperparam"

load_dotenv()
logger.debug("Environment variables loaded from .env if present")


@lru_cache(maxsize=1)
def get_default_filename() -> str:
    """Return the output filename used when none is given."""
    filename = os.getenv("GIT2PARQUET_FILENAME", "").strip()
    if filename:
        logger.debug("Default filename overridden", extra={"output_file": filename})
        return filename
    return DEFAULT_FILENAME


@lru_cache(maxsize=1)
def get_viewer_command() -> List[str]:
    """Return the viewer command as an argument list."""
    command = os.getenv("GIT2PARQUET_VIEWER", "").strip() or DEFAULT_VIEWER
    return shlex.split(command)
