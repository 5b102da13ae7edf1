"""Error definitions and handling for git2parquet."""

from typing import Any, Dict, List, Optional


class Git2ParquetError(Exception):
    """Base exception for git2parquet errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with code, message, and optional details."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class NotARepositoryError(Git2ParquetError):
    """Working directory is not inside a Git repository."""

    def __init__(self, path: str):
        super().__init__(
            code="NOT_A_REPOSITORY",
            message="Not in a git repository",
            details={"path": path},
        )


class LogReadFailedError(Git2ParquetError):
    """The commit log enumeration failed."""

    def __init__(self, reason: str):
        super().__init__(
            code="LOG_READ_FAILED",
            message=f"Failed to read git log: {reason}",
            details={"reason": reason},
        )


class MalformedLogLineError(Git2ParquetError):
    """A log line did not carry the expected number of fields."""

    def __init__(self, line: str, expected_fields: int, found_fields: int):
        super().__init__(
            code="MALFORMED_LOG_LINE",
            message=f"Invalid git log format: {line}",
            details={
                "line": line,
                "expected_fields": expected_fields,
                "found_fields": found_fields,
            },
        )


class DateParseError(Git2ParquetError):
    """A commit date could not be converted to an absolute timestamp."""

    def __init__(self, commit_hash: str, value: str, reason: str):
        super().__init__(
            code="DATE_PARSE_FAILED",
            message=f"Invalid date {value!r} for commit {commit_hash}: {reason}",
            details={"hash": commit_hash, "value": value, "reason": reason},
        )


class EmptyRepositoryError(Git2ParquetError):
    """The repository has no commits to export."""

    def __init__(self, path: str):
        super().__init__(
            code="EMPTY_REPOSITORY",
            message="No commits found in repository",
            details={"path": path},
        )


class WriteFailedError(Git2ParquetError):
    """The Parquet file could not be written."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            code="WRITE_FAILED",
            message=f"Failed to write parquet file: {reason}",
            details={"filename": filename, "reason": reason},
        )


class InvalidOptionsError(Git2ParquetError):
    """Export options are malformed."""

    def __init__(self, reason: str):
        super().__init__(
            code="INVALID_OPTIONS",
            message=f"Invalid options: {reason}",
            details={"reason": reason},
        )


class GitCommandError(Git2ParquetError):
    """A git invocation failed, timed out, or produced unusable output."""

    def __init__(self, args: List[str], reason: str, returncode: Optional[int] = None):
        super().__init__(
            code="GIT_COMMAND_FAILED",
            message=f"git {' '.join(args)} failed: {reason}",
            details={"args": list(args), "reason": reason, "returncode": returncode},
        )
        self.reason = reason
        self.returncode = returncode
