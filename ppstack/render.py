"""Rendering of a captured goroutine snapshot to a text sink."""

from __future__ import annotations

import io
import logging
from typing import Optional, TextIO

from .capture import StackSource, capture_stack
from .config import load_config
from .layout import calc_buckets_lengths, calc_goroutines_lengths
from .lines import bucket_header, goroutine_header, stack_lines
from .models import Similarity, Snapshot, SnapshotEngine
from .palette import DEFAULT_PALETTE, Palette
from .paths import PathFormat

logger = logging.getLogger(__name__)


class NoSnapshotError(RuntimeError):
    """The snapshot engine produced nothing to render."""

    def __init__(self, message: str = "no snapshot obtained"):
        super().__init__(message)


def strip_self_frames(snapshot: Snapshot) -> None:
    """Drop the renderer's own frames from the capturing goroutine.

    Applies only when the first goroutine is the one that captured the dump.
    Every frame sharing the source path of its first frame is removed.
    """
    if not snapshot.goroutines or not snapshot.goroutines[0].current:
        return
    stack = snapshot.goroutines[0].signature.stack
    if not stack.calls:
        return
    own_path = stack.calls[0].remote_src_path
    kept = [call for call in stack.calls if call.remote_src_path != own_path]
    logger.debug("Stripped %d frame(s) from %s", len(stack.calls) - len(kept), own_path)
    stack.calls = kept


def _write(target: TextIO, text: str) -> None:
    # Rendering usually happens on a failure path and must not raise.
    try:
        target.write(text)
    except Exception as exc:
        logger.debug("Dropped %d characters of stack output: %s", len(text), exc)


def render_snapshot(
    target: TextIO,
    snapshot: Snapshot,
    engine: SnapshotEngine,
    palette: Palette = DEFAULT_PALETTE,
    path_format: PathFormat = PathFormat.REL,
    similarity: Similarity = Similarity.ANY_POINTER,
) -> None:
    """Write an already parsed snapshot to ``target``.

    Without a data race goroutines are aggregated into buckets; with one
    every goroutine is printed on its own so race annotations stay visible.
    """
    if not snapshot.is_race():
        buckets = engine.aggregate(snapshot, similarity)
        src_len, pkg_len = calc_buckets_lengths(buckets, path_format)
        multiple = len(buckets) > 1
        logger.debug("Rendering %d bucket(s)", len(buckets))
        for bucket in buckets:
            _write(target, bucket_header(palette, bucket, path_format, multiple))
            _write(target, stack_lines(palette, bucket.signature, src_len, pkg_len, path_format))
        return

    src_len, pkg_len = calc_goroutines_lengths(snapshot, path_format)
    multiple = len(snapshot.goroutines) > 1
    logger.debug("Data race detected, rendering %d goroutine(s)", len(snapshot.goroutines))
    for goroutine in snapshot.goroutines:
        _write(target, goroutine_header(palette, goroutine, path_format, multiple))
        _write(target, stack_lines(palette, goroutine.signature, src_len, pkg_len, path_format))


class SnapshotRenderer:
    """Captures, parses and prints goroutine stacks."""

    def __init__(
        self,
        engine: SnapshotEngine,
        source: StackSource,
        palette: Palette = DEFAULT_PALETTE,
        path_format: PathFormat = PathFormat.REL,
        similarity: Similarity = Similarity.ANY_POINTER,
        all_routines: bool = True,
    ):
        """Initialize SnapshotRenderer.

        Args:
            engine: Parser and aggregator for raw dumps
            source: Provider of raw dumps
            palette: Colors to use; the default palette is shared and never mutated
            path_format: How source paths are displayed
            similarity: Policy used when aggregating into buckets
            all_routines: Default for capturing every goroutine or only the caller
        """
        self.engine = engine
        self.source = source
        self.palette = palette
        self.path_format = path_format
        self.similarity = similarity
        self.all_routines = all_routines

    @classmethod
    def from_config(cls, engine: SnapshotEngine, source: StackSource) -> "SnapshotRenderer":
        config = load_config()
        return cls(
            engine,
            source,
            palette=config.palette,
            path_format=config.path_format,
            similarity=config.similarity,
            all_routines=config.all_routines,
        )

    def snapshot(self, all_routines: bool) -> Snapshot:
        """Capture and parse a snapshot, without the renderer's own frames.

        Raises:
            NoSnapshotError: The engine returned no snapshot.
        """
        raw = capture_stack(self.source, all_routines)
        snapshot: Optional[Snapshot]
        try:
            snapshot = self.engine.scan(io.BytesIO(raw), io.StringIO())
        except EOFError:
            snapshot = None
        if snapshot is None:
            raise NoSnapshotError()
        strip_self_frames(snapshot)
        return snapshot

    def render(self, target: TextIO, all_routines: Optional[bool] = None) -> None:
        """Print the current stacks to ``target``.

        ``all_routines`` defaults to the renderer's configured value. Parse
        failures propagate before anything is written; write failures are
        ignored.
        """
        if all_routines is None:
            all_routines = self.all_routines
        snapshot = self.snapshot(all_routines)
        render_snapshot(
            target,
            snapshot,
            self.engine,
            palette=self.palette,
            path_format=self.path_format,
            similarity=self.similarity,
        )


def render(target: TextIO, all_routines: bool, engine: SnapshotEngine, source: StackSource, **options) -> None:
    """Convenience wrapper around :meth:`SnapshotRenderer.render`."""
    SnapshotRenderer(engine, source, **options).render(target, all_routines)


def render_to_string(all_routines: bool, engine: SnapshotEngine, source: StackSource, **options) -> str:
    out = io.StringIO()
    render(out, all_routines, engine, source, **options)
    return out.getvalue()
