from __future__ import annotations
import os

def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return max(1, int(raw))
    except ValueError:
        return default

# workers for the counting pass (threads over disjoint byte ranges)
_cpu = os.cpu_count() or 4
DEFAULT_WORKERS: int = _env_int("CSVIGO_WORKERS", _cpu)

# buffers smaller than this are counted inline, no pool
PARALLEL_THRESHOLD: int = 1 << 20     # 1 MiB

# smallest byte range handed to a single worker
MIN_CHUNK_SIZE: int = 256 << 10       # 256 KiB

# how files are loaded: read-only mmap (True) or a plain read (False)
USE_MMAP: bool = True

# default suffix for a persisted lookup table next to its source file
LOOKUP_SUFFIX: str = ".lix"

# CLI preview size
TOP_LINES: int = 10

# Progress logging (set CSVIGO_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("CSVIGO_VERBOSE") == "1"
