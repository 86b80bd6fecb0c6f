"""Acquisition of raw stack dumps."""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

INITIAL_BUFFER_SIZE = 2048

_GZIP_MAGIC = b"\x1f\x8b"


class StackSource(Protocol):
    """Writes a stack dump into ``buf`` and returns the number of bytes written.

    A return value equal to ``len(buf)`` means the dump did not fit.
    """

    def __call__(self, buf: bytearray, all_routines: bool) -> int:
        ...


def capture_stack(source: StackSource, all_routines: bool, initial_size: int = INITIAL_BUFFER_SIZE) -> bytes:
    """Capture a dump, doubling the buffer until it fits.

    Args:
        source: Stack dump provider
        all_routines: Capture every goroutine instead of only the caller
        initial_size: First buffer size tried

    Returns:
        The dump bytes
    """
    if initial_size <= 0:
        raise ValueError("initial_size must be positive")
    buf = bytearray(initial_size)
    while True:
        n = source(buf, all_routines)
        if n < len(buf):
            return bytes(buf[:n])
        logger.debug("Stack dump truncated at %d bytes, retrying with %d", len(buf), 2 * len(buf))
        buf = bytearray(2 * len(buf))


class DumpSource:
    """Replays a previously captured dump through the buffer protocol."""

    def __init__(self, data: bytes):
        self.data = data

    def __call__(self, buf: bytearray, all_routines: bool) -> int:
        n = min(len(self.data), len(buf))
        buf[:n] = self.data[:n]
        return n

    @classmethod
    def from_file(cls, path: Path) -> "DumpSource":
        return cls(read_dump(path))


def read_dump(path: Path) -> bytes:
    """Return raw dump bytes, transparently handling gzip."""
    data = Path(path).read_bytes()
    if data.startswith(_GZIP_MAGIC):
        return gzip.decompress(data)
    return data
