"""git2parquet.

Exports a Git repository's commit history, including per-commit unified
diffs, to a Parquet file for downstream analysis.
"""

__version__ = "1.0.0"

from .config import ExportOptions
from .export import ExportResult, write_git_log_parquet

__all__ = ["ExportOptions", "ExportResult", "write_git_log_parquet"]
