"""Export routes for git2parquet API."""

import logging
from typing import Any, Dict

from fastapi import APIRouter

from ..models import ExportRequest
from ..services import ExportService

router = APIRouter(tags=["export"])

logger = logging.getLogger(__name__)

export_service = ExportService()


@router.post("/export")
def create_export(request: ExportRequest) -> Dict[str, Any]:
    """Export the history of a repository to a Parquet file."""
    logger.info(
        "Received export request",
        extra={"repo": request.repo_path, "output": request.filename},
    )
    result = export_service.export(
        repo_path=request.repo_path,
        filename=request.filename,
        diff_workers=request.diff_workers,
    )
    return {"ok": True, "data": result.to_dict()}
