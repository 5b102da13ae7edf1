"""HTTP API for git2parquet."""

from .. import __version__

__all__ = ["__version__"]
