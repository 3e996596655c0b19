from __future__ import annotations
import re
from typing import Optional

from .counter import as_byte_buffer, resolve_length, last_byte
from .errors import LineIndexIntegrityError
from .models import LineTable

__all__ = ["extract_lines"]

_DELIM_RE = re.compile(rb"[\r\n]")
_CR = 0x0D
_LF = 0x0A


def extract_lines(buffer, count: int, length: Optional[int] = None) -> LineTable:
    """
    Walk ``buffer`` once and record ``(offset, length)`` for every line.

    A line ends at LF or CR. CR consumes the following byte as well (CRLF),
    whatever that byte is; at the very end of the buffer the skip stops at the
    last byte. If the buffer does not end in LF, the trailing bytes after the
    last delimiter form one more line.

    The table is allocated for exactly ``count`` records up front. Producing
    more or fewer raises LineIndexIntegrityError.
    """
    buffer = as_byte_buffer(buffer)
    n = resolve_length(buffer, length)
    count = int(count)
    table = LineTable.allocate(count)
    if n == 0:
        if count:
            raise LineIndexIntegrityError(count, 0, "empty buffer")
        return table

    data = table.data
    written = 0
    offset = 0
    pos = 0
    while True:
        m = _DELIM_RE.search(buffer, pos)
        if m is None:
            break
        i = m.start()
        if written == count:
            raise LineIndexIntegrityError(count, written + 1, f"extra line end at byte {i}")
        data[2 * written] = offset
        data[2 * written + 1] = i - offset
        written += 1

        j = i
        if buffer[i] == _CR:
            j = min(i + 1, n - 1)
        offset = j + 1
        pos = offset
        if pos >= n:
            break

    if last_byte(buffer, n) != _LF:
        if written == count:
            raise LineIndexIntegrityError(count, written + 1, "unterminated final line")
        data[2 * written] = offset
        data[2 * written + 1] = n - offset
        written += 1

    if written != count:
        raise LineIndexIntegrityError(count, written)
    return table
