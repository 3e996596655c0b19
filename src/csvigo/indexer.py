"""
Line index construction.

build_line_index() is the one entry point most callers need: it counts the
lines of a resident byte buffer (in parallel), allocates a table of exactly
that size and fills it with a single sequential scan.

Example:
    >>> from csvigo import build_line_index
    >>> table = build_line_index(b"a,b\\r\\nc,d\\r\\n")
    >>> table.to_list()
    [(0, 3), (5, 3)]
"""

from __future__ import annotations
import logging
import time
from typing import Optional

from . import config as CFG
from .counter import as_byte_buffer, count_lines, resolve_length
from .errors import LineIndexIntegrityError
from .extractor import extract_lines
from .models import LineTable

__all__ = ["build_line_index", "create_lookup"]

log = logging.getLogger(__name__)


def build_line_index(buffer, length: Optional[int] = None, *, workers: Optional[int] = None) -> LineTable:
    """
    Build the (offset, length) table for every line of ``buffer``.

    Args:
        buffer: bytes-like object (bytes, bytearray, memoryview, mmap).
        length: expected size of ``buffer``; must match when given.
        workers: threads for the counting pass (default: config.DEFAULT_WORKERS).

    Returns:
        LineTable: one record per line, in document order.

    Raises:
        ValueError: ``length`` disagrees with the buffer.
        LineIndexIntegrityError: the two passes found different line counts.
    """
    buffer = as_byte_buffer(buffer)
    n = resolve_length(buffer, length)
    if n == 0:
        return LineTable.allocate(0)

    t0 = time.perf_counter()
    count = count_lines(buffer, n, workers=workers)
    table = extract_lines(buffer, count, n)
    if len(table) != count:
        raise LineIndexIntegrityError(count, len(table))

    if CFG.VERBOSE:
        log.info("indexed %d lines over %d bytes in %.3fs", count, n, time.perf_counter() - t0)
    else:
        log.debug("indexed %d lines over %d bytes", count, n)
    return table


# historical csvigo name for build_line_index()
def create_lookup(buffer) -> LineTable:
    return build_line_index(buffer)
