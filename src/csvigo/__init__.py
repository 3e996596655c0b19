"""
csvigo: random-access line index for delimited text buffers.

Given the raw bytes of a file (e.g. a large CSV loaded or memory-mapped into
memory), build a table of (offset, length) pairs, one per line, so that any
line can be sliced out in O(1) without rescanning the buffer.

Main Functions:
    build_line_index(buffer): count lines in parallel, then extract records
    load_buffer(path): memory-map (or read) a file for indexing
    Engine: build/load an index for a file and serve lines from it

Example Usage:
    from csvigo import load_buffer, build_line_index

    with load_buffer("data.csv") as buf:
        table = build_line_index(buf.data)
        header = table.slice(buf.data, 0)
"""

# src/csvigo/__init__.py
from .indexer import build_line_index, create_lookup
from .counter import count_lines
from .extractor import extract_lines
from .loader import Buffer, load_buffer
from .models import LineTable
from .engine import Engine
from .errors import LineIndexError, LineIndexIntegrityError, LookupFileError

__version__ = "1.0.0"
__all__ = [
    "build_line_index",
    "create_lookup",
    "count_lines",
    "extract_lines",
    "Buffer",
    "load_buffer",
    "LineTable",
    "Engine",
    "LineIndexError",
    "LineIndexIntegrityError",
    "LookupFileError",
]
