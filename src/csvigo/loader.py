from __future__ import annotations
import logging
import mmap
import os
from typing import Optional

from . import config as CFG

__all__ = ["Buffer", "load_buffer"]

log = logging.getLogger(__name__)


class Buffer:
    """
    A file's bytes held resident for indexing.

    ``data`` is either a read-only mmap or a ``bytes`` object. Use as a
    context manager or call close(); the mapping stays valid until then.
    """
    def __init__(self, path: str, data, fd=None) -> None:
        self.path = path
        self.data = data
        self._fd = fd

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def mapped(self) -> bool:
        return isinstance(self.data, mmap.mmap)

    def __len__(self) -> int:
        return self.size

    def close(self) -> None:
        try:
            if isinstance(self.data, mmap.mmap) and not self.data.closed:
                self.data.close()
        finally:
            if self._fd is not None:
                self._fd.close()
                self._fd = None

    def __enter__(self) -> "Buffer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def load_buffer(path: str, *, use_mmap: Optional[bool] = None) -> Buffer:
    """Map (or read) ``path`` into memory. Empty files are read, since mmap cannot map zero bytes."""
    path = os.path.abspath(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    use_mmap = CFG.USE_MMAP if use_mmap is None else bool(use_mmap)

    size = os.path.getsize(path)
    if use_mmap and size > 0:
        fd = open(path, "rb")
        try:
            mm = mmap.mmap(fd.fileno(), length=0, access=mmap.ACCESS_READ)
        except (OSError, ValueError):
            fd.close()
            raise
        log.debug("mapped %s (%d bytes)", path, size)
        return Buffer(path, mm, fd)

    with open(path, "rb") as f:
        data = f.read()
    log.debug("read %s (%d bytes)", path, len(data))
    return Buffer(path, data)
