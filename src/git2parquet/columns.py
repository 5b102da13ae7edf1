"""Row-to-column transposition of commit records."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

import pyarrow as pa

from .errors import DateParseError
from .vcs import CommitRecord

COLUMN_SCHEMA = pa.schema(
    [
        pa.field("hash", pa.string()),
        pa.field("authorName", pa.string()),
        pa.field("authorEmail", pa.string()),
        pa.field("date", pa.timestamp("ms", tz="UTC")),
        pa.field("subject", pa.string()),
        pa.field("diff", pa.string()),
    ]
)


@dataclass
class ColumnSet:
    """Six parallel columns, index ``i`` describing the same commit."""

    hash: List[str] = field(default_factory=list)
    author_name: List[str] = field(default_factory=list)
    author_email: List[str] = field(default_factory=list)
    date: List[datetime] = field(default_factory=list)
    subject: List[str] = field(default_factory=list)
    diff: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.hash)

    def to_arrow_table(
        self, metadata: Optional[Sequence[Tuple[str, str]]] = None
    ) -> pa.Table:
        """Build an Arrow table carrying ``metadata`` as schema key/values."""
        schema = COLUMN_SCHEMA
        if metadata:
            schema = schema.with_metadata({key: value for key, value in metadata})

        return pa.Table.from_arrays(
            [
                pa.array(self.hash, type=pa.string()),
                pa.array(self.author_name, type=pa.string()),
                pa.array(self.author_email, type=pa.string()),
                pa.array(self.date, type=pa.timestamp("ms", tz="UTC")),
                pa.array(self.subject, type=pa.string()),
                pa.array(self.diff, type=pa.string()),
            ],
            schema=schema,
        )


def parse_commit_date(value: str, commit_hash: str = "") -> datetime:
    """Parse an ISO-8601 date with offset into an aware UTC datetime."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise DateParseError(commit_hash, value, str(e)) from e

    if parsed.tzinfo is None:
        raise DateParseError(commit_hash, value, "missing timezone offset")

    return parsed.astimezone(timezone.utc)


def assemble_columns(records: Iterable[CommitRecord]) -> ColumnSet:
    """Transpose commit records into columns, preserving their order."""
    columns = ColumnSet()
    for record in records:
        columns.hash.append(record.hash)
        columns.author_name.append(record.author_name)
        columns.author_email.append(record.author_email)
        columns.date.append(parse_commit_date(record.date, record.hash))
        columns.subject.append(record.subject)
        columns.diff.append(record.diff)
    return columns
