"""Service layer for git2parquet API."""

from .export import ExportService

__all__ = ["ExportService"]
