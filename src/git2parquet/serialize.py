"""Parquet serialization for git2parquet."""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import pyarrow.parquet as pq

from .columns import ColumnSet
from .errors import WriteFailedError

logger = logging.getLogger(__name__)


def _output_mode(target: Path) -> int:
    """Mode for the written file: the existing target's, else 0666 minus umask."""
    if target.exists():
        return stat.S_IMODE(target.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class ParquetSerializer:
    """Writes a column set and file-level metadata to a Parquet file."""

    def __init__(self, compression: str = "snappy"):
        """Initialize with the column compression codec."""
        self.compression = compression

    def write(
        self,
        filename: Union[str, Path],
        columns: ColumnSet,
        metadata: Optional[Sequence[Tuple[str, str]]] = None,
    ) -> Path:
        """Write ``columns`` to ``filename``.

        The file is written next to its target and renamed into place, so
        a failed write leaves no partial file behind.
        """
        target = Path(filename)
        logger.debug(
            "Serializing columns",
            extra={"rows": len(columns), "target": str(target)},
        )

        tmp_path: Optional[str] = None
        try:
            table = columns.to_arrow_table(metadata)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            os.close(fd)
            pq.write_table(table, tmp_path, compression=self.compression)
            os.chmod(tmp_path, _output_mode(target))
            os.replace(tmp_path, target)
            tmp_path = None
        except Exception as e:
            raise WriteFailedError(str(target), str(e)) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug("Serialization finished", extra={"target": str(target)})
        return target


def read_parquet_summary(filename: Union[str, Path]) -> Dict[str, Any]:
    """Return row count, column names and key/value metadata of a file."""
    parquet_file = pq.ParquetFile(filename)
    raw_metadata = parquet_file.metadata.metadata or {}
    metadata = {
        key.decode("utf-8"): value.decode("utf-8")
        for key, value in raw_metadata.items()
        if not key.startswith(b"ARROW:")
    }
    return {
        "rows": parquet_file.metadata.num_rows,
        "columns": parquet_file.schema_arrow.names,
        "metadata": metadata,
    }
