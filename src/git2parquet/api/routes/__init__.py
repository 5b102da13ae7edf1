"""API route registration for git2parquet."""

from fastapi import APIRouter

from . import export, meta

router = APIRouter()
router.include_router(meta.router)
router.include_router(export.router)

__all__ = ["router"]
