# src/csvigo/models.py
"""
Data models for the line index.

- LineTable: the ordered (offset, length) table returned by build_line_index().

A record is a plain ``(offset, length)`` tuple: ``offset`` is the index of the
line's first byte in the buffer, ``length`` the number of content bytes
(delimiters excluded). The table keeps every record in one flat
``array("q")`` laid out as ``[off0, len0, off1, len1, ...]``, i.e. the
``N x 2`` lookup matrix stored row-major.
"""

from __future__ import annotations
from array import array
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

Record = Tuple[int, int]


@dataclass(eq=False, slots=True)
class LineTable:
    """
    Ordered line records in document order.

    Attributes
    ----------
    data : array
        Flat ``array("q")`` of ``2 * N`` integers.
    """
    data: array = field(default_factory=lambda: array("q"))

    @classmethod
    def allocate(cls, n: int) -> "LineTable":
        """Zero-filled table with room for exactly ``n`` records."""
        if n < 0:
            raise ValueError(f"negative table size: {n}")
        return cls(array("q", [0]) * (2 * n))

    @classmethod
    def from_records(cls, records) -> "LineTable":
        data = array("q")
        for off, ln in records:
            data.append(int(off))
            data.append(int(ln))
        return cls(data)

    def __len__(self) -> int:
        return len(self.data) // 2

    def __getitem__(self, i: int) -> Record:
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"line {i} out of range (0-{n - 1})" if n else "empty line table")
        return self.data[2 * i], self.data[2 * i + 1]

    def __iter__(self) -> Iterator[Record]:
        d = self.data
        for k in range(0, len(d), 2):
            yield d[k], d[k + 1]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LineTable):
            return self.data == other.data
        return NotImplemented

    def __repr__(self) -> str:
        return f"LineTable(lines={len(self)})"

    # ---- Convenience ----
    def to_list(self) -> List[Record]:
        return list(self)

    def span(self, i: int) -> Tuple[int, int]:
        """Half-open byte range ``(start, end)`` of line ``i``."""
        off, ln = self[i]
        return off, off + ln

    def slice(self, buffer, i: int) -> bytes:
        """Content bytes of line ``i`` (no delimiter) taken from ``buffer``."""
        start, end = self.span(i)
        return bytes(buffer[start:end])

    @property
    def nbytes(self) -> int:
        return self.data.itemsize * len(self.data)
