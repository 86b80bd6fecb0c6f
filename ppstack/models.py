"""Data models for parsed goroutine snapshots.

These are produced by a snapshot engine (the parser/aggregator) and are
treated as read-only by the rendering layers.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO, List, Optional, Protocol, TextIO


class Location(IntEnum):
    """Where the source of a call lives."""
    LOCATION_UNKNOWN = 0
    GO_MOD = 1
    GOPATH = 2
    GO_PKG = 3  # vendored or otherwise non-module dependency
    STDLIB = 4


class Similarity(IntEnum):
    """How aggressively goroutines are merged into buckets."""
    EXACT_FLAGS = 0
    EXACT_LINES = 1
    ANY_POINTER = 2
    ANY_VALUE = 3


@dataclass(frozen=True)
class Func:
    name: str
    dir_name: str = ""
    is_exported: bool = False
    is_pkg_main: bool = False


@dataclass(frozen=True)
class Arg:
    value: int = 0
    name: str = ""

    def __str__(self) -> str:
        if self.name:
            return self.name
        if self.value == 0:
            return "0"
        return f"0x{self.value:x}"


@dataclass(frozen=True)
class Args:
    """Rendered argument list of a call."""
    values: tuple = ()
    processed: tuple = ()
    elided: bool = False

    def __str__(self) -> str:
        if self.processed:
            parts = list(self.processed)
        else:
            parts = [str(v) for v in self.values]
        if self.elided:
            parts.append("...")
        return ", ".join(parts)


@dataclass
class Call:
    """One stack frame."""
    func: Func
    line: int = 0
    location: Location = Location.LOCATION_UNKNOWN
    remote_src_path: str = ""
    local_src_path: str = ""
    rel_src_path: str = ""
    src_name: str = ""
    args: Args = field(default_factory=Args)

    def __post_init__(self):
        if not self.src_name:
            self.src_name = posixpath.basename(self.remote_src_path.replace("\\", "/"))


@dataclass
class Stack:
    calls: List[Call] = field(default_factory=list)
    elided: bool = False


@dataclass
class Signature:
    """A stack plus the scheduling details used to group goroutines."""
    stack: Stack = field(default_factory=Stack)
    created_by: Stack = field(default_factory=Stack)
    state: str = ""
    sleep_min: int = 0
    sleep_max: int = 0
    locked: bool = False

    def sleep_string(self) -> str:
        """Human readable sleep duration, empty when not sleeping."""
        if self.sleep_max == 0:
            return ""
        if self.sleep_min != self.sleep_max:
            return f"{self.sleep_min}~{self.sleep_max} minutes"
        return f"{self.sleep_max} minutes"


@dataclass
class Goroutine:
    id: int
    signature: Signature = field(default_factory=Signature)
    first: bool = False
    current: bool = False  # the goroutine that captured the dump
    race_write: bool = False
    race_addr: int = 0


@dataclass
class Bucket:
    """Goroutines sharing an equivalent signature."""
    signature: Signature
    ids: List[int] = field(default_factory=list)
    first: bool = False


@dataclass
class Snapshot:
    goroutines: List[Goroutine] = field(default_factory=list)
    race_detected: bool = False

    def is_race(self) -> bool:
        return self.race_detected


class SnapshotEngine(Protocol):
    """Parser and aggregator for raw stack dumps."""

    def scan(self, stream: BinaryIO, diagnostics: TextIO) -> Optional[Snapshot]:
        """Parse a raw dump.

        Raises EOFError on a clean end of input and any other exception on
        a parse failure.
        """
        ...

    def aggregate(self, snapshot: Snapshot, similarity: Similarity) -> List[Bucket]:
        """Group the snapshot's goroutines into ordered buckets."""
        ...
