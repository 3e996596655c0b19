from __future__ import annotations
from typing import Optional

from ..errors import LookupFileError
from ..models import LineTable
from .lookup_file import LookupWriter, LookupFile


def save_table(table: LineTable, path: str, source_size: int) -> None:
    """Persist ``table`` atomically (tmp file + os.replace)."""
    LookupWriter().save(path, table, source_size)


def load_table(path: str, *, expected_size: Optional[int] = None) -> LineTable:
    """Load a persisted table; ``expected_size`` guards against a stale index."""
    with LookupFile(path) as lf:
        if expected_size is not None and lf.source_size != int(expected_size):
            raise LookupFileError(
                f"{path} indexes a {lf.source_size}-byte buffer, source has {int(expected_size)} bytes"
            )
        return lf.to_table()
