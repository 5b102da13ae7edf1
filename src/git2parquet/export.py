"""Export orchestration: git history in, Parquet file out."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .columns import assemble_columns
from .config import ExportOptions
from .errors import EmptyRepositoryError
from .serialize import ParquetSerializer
from .settings import get_default_filename
from .vcs import CommandRunner, GitRepository, GitRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a successful export."""

    commit_count: int
    filename: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {"commitCount": self.commit_count, "filename": self.filename}


def resolve_output_path(filename: Optional[str], cwd: Union[str, Path]) -> Path:
    """Return the absolute output path, relative names resolved against ``cwd``."""
    path = Path(filename or get_default_filename()).expanduser()
    if not path.is_absolute():
        path = Path(cwd) / path
    return Path(os.path.abspath(path))


def write_git_log_parquet(
    options: Union[ExportOptions, Mapping[str, Any], None] = None,
    runner: Optional[CommandRunner] = None,
) -> ExportResult:
    """Write the history of the repository at ``options.cwd`` to Parquet.

    Args:
        options: Export options, or a mapping validated into them
        runner: Command runner for git; a ``GitRunner`` configured from
            ``options`` when omitted

    Returns:
        Number of commits written and the absolute output path

    Raises:
        InvalidOptionsError: If ``options`` is malformed
        NotARepositoryError: If the working directory is not in a repository
        LogReadFailedError: If ``git log`` fails
        MalformedLogLineError: If a log line lacks fields
        EmptyRepositoryError: If the repository has no commits
        DateParseError: If a commit date cannot be parsed
        WriteFailedError: If the Parquet file cannot be written
    """
    if not isinstance(options, ExportOptions):
        options = ExportOptions.from_mapping(options)

    cwd = Path(options.cwd) if options.cwd else Path.cwd()
    if runner is None:
        runner = GitRunner(
            env=options.git_env,
            timeout=options.command_timeout,
            max_output_bytes=options.max_output_bytes,
        )

    repo = GitRepository(cwd, runner, diff_workers=options.diff_workers)
    logger.info("Starting export", extra={"cwd": str(cwd)})

    # collect data
    records = repo.read_commits()
    if not records:
        raise EmptyRepositoryError(str(cwd))

    # repo metadata
    repo_info = repo.read_repo_info()

    columns = assemble_columns(records)
    output_path = resolve_output_path(options.filename, cwd)

    ParquetSerializer().write(output_path, columns, repo_info.to_kv_metadata())
    logger.info(
        "Export complete",
        extra={"commits": len(columns), "output": str(output_path)},
    )

    return ExportResult(commit_count=len(columns), filename=str(output_path))
