"""Configuration management for git2parquet."""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidOptionsError

MAX_OUTPUT_BYTES = 50 * 1024 * 1024  # 50 MB


@dataclass(frozen=True)
class ExportOptions:
    """Options for a single export run."""

    # Output options
    filename: Optional[str] = None

    # Directory the export runs in; relative filenames resolve against it
    cwd: Optional[str] = None

    # Diff retrieval
    diff_workers: int = 1

    # Git invocation limits
    max_output_bytes: int = MAX_OUTPUT_BYTES
    command_timeout: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate options after initialization."""
        if self.filename is not None:
            if not isinstance(self.filename, str):
                raise InvalidOptionsError("filename must be a string")
            if not self.filename.strip():
                raise InvalidOptionsError("filename cannot be empty")
        if self.cwd is not None and not isinstance(self.cwd, str):
            raise InvalidOptionsError("cwd must be a string")
        if not isinstance(self.diff_workers, int) or isinstance(self.diff_workers, bool):
            raise InvalidOptionsError("diff_workers must be an integer")
        if self.diff_workers < 1:
            raise InvalidOptionsError("diff_workers must be at least 1")
        if not isinstance(self.max_output_bytes, int) or self.max_output_bytes <= 0:
            raise InvalidOptionsError("max_output_bytes must be a positive integer")
        if self.command_timeout is not None and (
            not isinstance(self.command_timeout, int) or self.command_timeout <= 0
        ):
            raise InvalidOptionsError("command_timeout must be a positive integer")

    @classmethod
    def from_mapping(cls, options: Any) -> "ExportOptions":
        """Build options from a loosely-typed mapping, rejecting unknown keys."""
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            raise InvalidOptionsError("options must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in options if key not in known)
        if unknown:
            raise InvalidOptionsError(f"unknown option(s): {', '.join(unknown)}")
        return cls(**dict(options))

    @property
    def git_env(self) -> Dict[str, str]:
        """Get Git environment variables for deterministic output."""
        env = os.environ.copy()
        env.update(
            {
                "LC_ALL": "C",
                "GIT_TERMINAL_PROMPT": "0",
                "GIT_PAGER": "cat",
            }
        )
        return env
