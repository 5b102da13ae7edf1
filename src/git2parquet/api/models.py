"""Pydantic models for git2parquet API requests and responses."""

from pathlib import PurePath
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ExportRequest(BaseModel):
    """Request model for export endpoint."""

    repo_path: str = Field(
        ...,
        description="Absolute path of a directory inside the repository",
        examples=["/srv/checkouts/project"],
    )
    filename: Optional[str] = Field(
        None,
        description="Output filename; relative names resolve against repo_path",
        examples=["commits.parquet"],
    )
    diff_workers: int = Field(
        1,
        description="Number of concurrent diff fetches",
        ge=1,
        le=32,
    )

    @field_validator("repo_path")
    @classmethod
    def repo_path_must_be_absolute(cls, v):
        """Only absolute paths are accepted."""
        v = v.strip()
        if not v:
            raise ValueError("repo_path cannot be empty")
        if not (v.startswith("/") or (len(v) > 2 and v[1] == ":")):
            raise ValueError("repo_path must be an absolute path")
        return v

    @field_validator("filename")
    @classmethod
    def filename_must_not_be_blank(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v or not PurePath(v).name:
            raise ValueError("filename cannot be empty")
        return v


class HealthResponse(BaseModel):
    """Export prerequisites and defaults."""

    status: str = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.0.0"])
    git_version: Optional[str] = Field(None, examples=["2.43.0"])
    pyarrow_version: str = Field(..., examples=["16.1.0"])
    default_filename: str = Field(..., examples=["gitlog.parquet"])
    viewer_command: List[str] = Field(..., examples=[["npx", "hyperparam"]])
