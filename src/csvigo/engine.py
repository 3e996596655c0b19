# csvigo/engine.py
from __future__ import annotations

import os
import logging
from typing import Iterator, List, Optional

from . import config as CFG
from .indexer import build_line_index
from .loader import Buffer, load_buffer
from .models import LineTable, Record
from .DB.storage import save_table, load_table

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - buffer acquisition (mmap or plain read) via loader.load_buffer,
      - the line index (indexer.build_line_index / a persisted .lix table),
      - random access to lines of the indexed file.

    Public API (used by CLI/Flask):
      * build(path, ...): load -> index -> (optional) persist
      * load(path, ...):  load -> read persisted index
      * line(i) / record(i) / fields(i) / iter_lines(): random access
      * stats():          summary dict
      * shutdown():       close underlying resources
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.table: Optional[LineTable] = None
        self._buffer: Optional[Buffer] = None
        self._index_path: Optional[str] = None

    # /* ~~~ Index a file from scratch ~~~ */
    def build(
        self,
        path: str,
        *,
        index_out: Optional[str] = None,       # where to persist the table (.lix)
        workers: Optional[int] = None,
        use_mmap: Optional[bool] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            CFG.VERBOSE = True

        self._release()
        log.info("Loading %s", path)
        buf = load_buffer(path, use_mmap=use_mmap)
        try:
            log.info("Building line index (%d bytes)", buf.size)
            table = build_line_index(buf.data, buf.size, workers=workers)
            if index_out:
                log.info("Saving lookup table to %s", index_out)
                save_table(table, index_out, buf.size)
        except Exception:
            buf.close()
            raise

        self._buffer = buf
        self.table = table
        self._index_path = index_out
        log.info("Engine build() complete: lines=%d", len(table))

    # /* ~~~ Reuse a persisted table for an unchanged file ~~~ */
    def load(
        self,
        path: str,
        *,
        index: Optional[str] = None,           # defaults to path + LOOKUP_SUFFIX
        use_mmap: Optional[bool] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            CFG.VERBOSE = True

        index = index or default_index_path(path)
        if not os.path.exists(index):
            raise FileNotFoundError(index)

        self._release()
        log.info("Loading %s", path)
        buf = load_buffer(path, use_mmap=use_mmap)
        try:
            log.info("Loading lookup table from %s", index)
            table = load_table(index, expected_size=buf.size)
        except Exception:
            buf.close()
            raise

        self._buffer = buf
        self.table = table
        self._index_path = index
        log.info("Engine load() complete: lines=%d", len(table))

    # ------------- access -------------

    def __len__(self) -> int:
        return len(self._require())

    def record(self, i: int) -> Record:
        return self._require()[i]

    def line(self, i: int) -> bytes:
        table = self._require()
        return table.slice(self._buffer.data, i)

    def fields(self, i: int, sep: bytes = b",") -> List[bytes]:
        """Split line ``i`` on ``sep``. No quoting rules apply."""
        if not sep:
            raise ValueError("separator must be non-empty")
        return self.line(i).split(sep)

    def iter_lines(self, start: int = 0, stop: Optional[int] = None) -> Iterator[bytes]:
        table = self._require()
        n = len(table)
        stop = n if stop is None else min(int(stop), n)
        for i in range(max(0, int(start)), stop):
            yield table.slice(self._buffer.data, i)

    def stats(self) -> dict:
        table = self._require()
        return {
            "path": self._buffer.path,
            "bytes": self._buffer.size,
            "lines": len(table),
            "mapped": self._buffer.mapped,
            "index": self._index_path,
            "table_bytes": table.nbytes,
        }

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (mmap, file handles) ~~~ */
    def shutdown(self) -> None:
        try:
            self._release()
        finally:
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require(self) -> LineTable:
        if self.table is None or self._buffer is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return self.table

    def _release(self) -> None:
        try:
            if self._buffer is not None:
                self._buffer.close()
        finally:
            self._buffer = None
            self.table = None
            self._index_path = None


def default_index_path(path: str) -> str:
    return f"{path}{CFG.LOOKUP_SUFFIX}"
