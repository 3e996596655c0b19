from __future__ import annotations
import mmap
import os
import struct
import sys
from array import array
from typing import Iterator, Tuple

from ..errors import LookupFileError
from ..models import LineTable

_MAGIC = b"LIX1"
_U64 = struct.Struct("<Q")  # little-endian uint64
_HEADER = 4 + 8 + 8
_RECORD = 16


class LookupWriter:
    """
    Write a memory-mappable lookup table file.
    Layout:
      0..3   : 'LIX1'
      4..11  : N (uint64) number of records
      12..19 : L (uint64) size of the indexed buffer
      Then N entries:
         [offset:u64][length:u64]
    """
    def save(self, path: str, table: LineTable, source_size: int) -> None:
        path = os.path.abspath(path)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        body = array("q", table.data)
        if sys.byteorder != "little":
            body.byteswap()
        tmp = f"{path}.tmp"
        with open(tmp, "wb") as f:
            f.write(_MAGIC)
            f.write(_U64.pack(len(table)))
            f.write(_U64.pack(int(source_size)))
            f.write(body.tobytes())
        os.replace(tmp, path)


class LookupFile:
    """
    Read-only memory-mapped lookup table. Records are decoded on access;
    to_table() copies the whole body into a LineTable.
    """
    def __init__(self, path: str):
        self._path = os.path.abspath(path)
        if not os.path.isfile(self._path):
            raise FileNotFoundError(self._path)
        self._fd = open(self._path, "rb")
        try:
            self._mm = mmap.mmap(self._fd.fileno(), length=0, access=mmap.ACCESS_READ)
        except ValueError:
            # zero-byte file
            self._fd.close()
            raise LookupFileError(f"Invalid lookup file: {self._path} is empty")
        self.count = 0
        self.source_size = 0
        try:
            self._parse_header()
        except LookupFileError:
            self.close()
            raise

    @property
    def path(self) -> str:
        return self._path

    def _parse_header(self) -> None:
        mm = self._mm
        if len(mm) < _HEADER or mm[:4] != _MAGIC:
            raise LookupFileError(f"Invalid lookup file: {self._path}")
        self.count = _U64.unpack_from(mm, 4)[0]
        self.source_size = _U64.unpack_from(mm, 12)[0]
        need = _HEADER + self.count * _RECORD
        if len(mm) < need:
            raise LookupFileError(
                f"Truncated lookup file: {self._path} holds {len(mm)} bytes, expected {need}"
            )

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, i: int) -> Tuple[int, int]:
        n = self.count
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"line {i} out of range (0-{n - 1})" if n else "empty lookup file")
        pos = _HEADER + i * _RECORD
        return _U64.unpack_from(self._mm, pos)[0], _U64.unpack_from(self._mm, pos + 8)[0]

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        for i in range(self.count):
            yield self[i]

    def to_table(self) -> LineTable:
        start = _HEADER
        end = start + self.count * _RECORD
        data = array("q")
        data.frombytes(self._mm[start:end])
        if sys.byteorder != "little":
            data.byteswap()
        return LineTable(data)

    def close(self) -> None:
        try:
            self._mm.close()
        finally:
            self._fd.close()

    def __enter__(self) -> "LookupFile":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
