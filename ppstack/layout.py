"""Column widths for aligned call lines."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .models import Bucket, Signature, Snapshot
from .paths import PathFormat


def calc_lengths(signatures: Iterable[Signature], pf: PathFormat) -> Tuple[int, int]:
    """Return the maximum length of the source locations and package names.

    Widths are used for padding only; longer values are never truncated.
    """
    src_len = 0
    pkg_len = 0
    for signature in signatures:
        for call in signature.stack.calls:
            src_len = max(src_len, len(pf.format_call(call)))
            pkg_len = max(pkg_len, len(call.func.dir_name))
    return src_len, pkg_len


def calc_buckets_lengths(buckets: List[Bucket], pf: PathFormat) -> Tuple[int, int]:
    return calc_lengths((b.signature for b in buckets), pf)


def calc_goroutines_lengths(snapshot: Snapshot, pf: PathFormat) -> Tuple[int, int]:
    return calc_lengths((g.signature for g in snapshot.goroutines), pf)
