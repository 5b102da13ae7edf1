"""Meta endpoints for git2parquet API."""

import logging
import subprocess
from typing import Optional

import pyarrow
from fastapi import APIRouter

from .. import __version__
from ...settings import get_default_filename, get_viewer_command
from ..models import HealthResponse

router = APIRouter(tags=["meta"])

logger = logging.getLogger(__name__)


def _git_version() -> Optional[str]:
    """Installed git version, or None when git cannot run."""
    try:
        output = subprocess.run(
            ["git", "--version"], capture_output=True, text=True, timeout=5, check=True
        ).stdout
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("git is not available", extra={"reason": str(exc)})
        return None
    return output.strip().rsplit(" ", 1)[-1]


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Report whether exports can run and which defaults apply."""
    git_version = _git_version()
    return HealthResponse(
        status="healthy" if git_version else "degraded",
        version=__version__,
        git_version=git_version,
        pyarrow_version=pyarrow.__version__,
        default_filename=get_default_filename(),
        viewer_command=get_viewer_command(),
    )


@router.get("/", include_in_schema=False)
def root() -> dict:
    """Name, version and the export endpoint."""
    return {
        "name": "git2parquet API",
        "version": __version__,
        "export": "POST /export",
    }
