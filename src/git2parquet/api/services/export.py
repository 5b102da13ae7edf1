"""Export service backing the HTTP API."""

import logging
from typing import Optional

from ...config import ExportOptions
from ...errors import Git2ParquetError
from ...export import ExportResult, write_git_log_parquet

logger = logging.getLogger(__name__)


class ExportService:
    """Runs exports for repositories on the server's filesystem."""

    def export(
        self,
        repo_path: str,
        filename: Optional[str] = None,
        diff_workers: int = 1,
    ) -> ExportResult:
        """Export ``repo_path``; failures propagate as Git2ParquetError."""
        options = ExportOptions(filename=filename, cwd=repo_path, diff_workers=diff_workers)
        try:
            result = write_git_log_parquet(options)
        except Git2ParquetError as exc:
            logger.warning("Export failed", extra={"repo": repo_path, "code": exc.code})
            raise

        logger.info(
            "Export succeeded",
            extra={"repo": repo_path, "commits": result.commit_count},
        )
        return result
