from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from . import config as CFG

__all__ = ["count_lines", "partition", "as_byte_buffer", "resolve_length", "last_byte"]

log = logging.getLogger(__name__)

_LF = b"\n"
_LF_BYTE = 0x0A


def as_byte_buffer(buffer):
    """Reject text; flatten typed memoryviews to unsigned bytes."""
    if isinstance(buffer, str):
        raise TypeError("expected a bytes-like buffer, got str")
    if isinstance(buffer, memoryview) and (buffer.format != "B" or buffer.ndim != 1):
        return buffer.cast("B")
    return buffer


def resolve_length(buffer, length: Optional[int] = None) -> int:
    """Return the usable buffer length, checking an explicit ``length`` against it."""
    actual = len(buffer)
    if length is None:
        return actual
    length = int(length)
    if length < 0:
        raise ValueError(f"negative buffer length: {length}")
    if length != actual:
        raise ValueError(f"length {length} does not match buffer size {actual}")
    return length


def last_byte(buffer, length: int) -> int:
    """Byte value at ``length - 1``; callers guarantee ``length >= 1``."""
    return buffer[length - 1]


def partition(length: int, parts: int, min_chunk: int = 1) -> List[Tuple[int, int]]:
    """
    Split ``[0, length)`` into at most ``parts`` contiguous, disjoint ranges.

    Every range holds at least ``min_chunk`` bytes except possibly the last;
    an empty buffer yields no ranges.
    """
    if length <= 0:
        return []
    parts = max(1, int(parts))
    min_chunk = max(1, int(min_chunk))
    parts = min(parts, max(1, length // min_chunk), length)
    step, rem = divmod(length, parts)
    ranges: List[Tuple[int, int]] = []
    start = 0
    for k in range(parts):
        end = start + step + (1 if k < rem else 0)
        ranges.append((start, end))
        start = end
    return ranges


def _count_range(buffer, start: int, end: int) -> int:
    if isinstance(buffer, (bytes, bytearray)):
        return buffer.count(_LF, start, end)
    # mapped/viewed buffers: copy one bounded window at a time
    window = CFG.MIN_CHUNK_SIZE
    total = 0
    with memoryview(buffer) as mv:
        for a in range(start, end, window):
            total += mv[a:min(a + window, end)].tobytes().count(_LF)
    return total


def count_lines(buffer,
                length: Optional[int] = None,
                *,
                workers: Optional[int] = None,
                chunk_size: Optional[int] = None) -> int:
    """
    Count the lines of ``buffer``.

    Every LF ends a line; a buffer whose last byte is not LF has one more,
    unterminated, line. Ranges are counted independently and summed once all
    workers are joined. An empty buffer has zero lines.

    Workers are threads sharing the one buffer. The per-range count holds the
    GIL, so the pool splits the work without speeding it up on CPython.
    """
    buffer = as_byte_buffer(buffer)
    n = resolve_length(buffer, length)
    if n == 0:
        return 0

    workers = CFG.DEFAULT_WORKERS if workers is None else int(workers)
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    min_chunk = CFG.MIN_CHUNK_SIZE if chunk_size is None else max(1, int(chunk_size))

    if workers == 1 or (chunk_size is None and n < CFG.PARALLEL_THRESHOLD):
        total = _count_range(buffer, 0, n)
    else:
        ranges = partition(n, workers, min_chunk)
        log.debug("counting %d bytes in %d ranges", n, len(ranges))
        if len(ranges) == 1:
            total = _count_range(buffer, 0, n)
        else:
            with ThreadPoolExecutor(max_workers=min(workers, len(ranges))) as ex:
                partials = list(ex.map(lambda r: _count_range(buffer, r[0], r[1]), ranges))
            total = sum(partials)

    if last_byte(buffer, n) != _LF_BYTE:
        total += 1
    return total
