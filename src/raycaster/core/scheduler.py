"""Recursive fork/join row scheduler and frame buffers.

The image is rendered by splitting its row range [y_min, y_max) in half
recursively until a span holds at most leaf_rows rows; each leaf span is then
computed sequentially by a single task.

Frame buffers are three flat uint8 arrays (red, green, blue) indexed by
y * width + x. A span of rows maps to one contiguous index range, so every
leaf is handed a BufferSlice holding NumPy views restricted to its own rows.
Sibling spans never overlap, so no index is written by two tasks and no
locking is needed.

With an executor, each split submits its right half to the pool, computes the
left half in the calling thread, and then joins the right half. A right half
that no worker has picked up yet is cancelled and run inline, so a thread
waiting on a join always waits on a task that is already running; the pool
cannot deadlock however small it is.

Example:
    >>> from concurrent.futures import ThreadPoolExecutor
    >>> buffers = FrameBuffers(64, 48)
    >>> with ThreadPoolExecutor() as pool:
    ...     RowScheduler(leaf_rows=16, executor=pool).run(buffers, fill_slice)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from concurrent.futures import Executor, Future, wait
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.raycaster.core.config import LEAF_ROWS

logger = logging.getLogger(__name__)

# Per-pixel colors for one row, as (R, G, B) triples
RowColors = list[tuple[int, int, int]]


@dataclass(frozen=True)
class RowSpan:
    """A half-open range of image rows [y_min, y_max)."""

    y_min: int
    y_max: int

    @property
    def rows(self) -> int:
        return self.y_max - self.y_min

    def split(self) -> tuple[RowSpan, RowSpan]:
        """Split the span at its midpoint into two adjacent halves."""
        mid = (self.y_min + self.y_max) // 2
        return RowSpan(self.y_min, mid), RowSpan(mid, self.y_max)


def split_rows(y_min: int, y_max: int, leaf_rows: int = LEAF_ROWS) -> Iterator[RowSpan]:
    """Yield the leaf spans of the recursive partition of [y_min, y_max).

    Spans are yielded top to bottom and follow exactly the splits
    RowScheduler performs.
    """
    span = RowSpan(y_min, y_max)
    if span.rows <= leaf_rows:
        yield span
        return
    left, right = span.split()
    yield from split_rows(left.y_min, left.y_max, leaf_rows)
    yield from split_rows(right.y_min, right.y_max, leaf_rows)


# =============================================================================
# Frame Buffers
# =============================================================================


@dataclass(frozen=True)
class BufferSlice:
    """Writable views of the frame buffers restricted to one row span.

    Attributes:
        span: The rows this slice owns.
        width: Image width in pixels.
        red: View of the red buffer for the span's rows.
        green: View of the green buffer for the span's rows.
        blue: View of the blue buffer for the span's rows.
    """

    span: RowSpan
    width: int
    red: npt.NDArray[np.uint8]
    green: npt.NDArray[np.uint8]
    blue: npt.NDArray[np.uint8]

    def write_row(self, y: int, colors: RowColors) -> None:
        """Store the colors of one full image row.

        Args:
            y: Absolute image row; must lie inside this slice's span.
            colors: One clamped (R, G, B) triple per column.

        Raises:
            IndexError: If y is outside the span.
            ValueError: If colors does not hold exactly width entries.
        """
        if not self.span.y_min <= y < self.span.y_max:
            raise IndexError(f"Row {y} is outside the owned span {self.span}")
        if len(colors) != self.width:
            raise ValueError(f"Expected {self.width} colors, got {len(colors)}")

        start = (y - self.span.y_min) * self.width
        stop = start + self.width
        row = np.asarray(colors, dtype=np.uint8).reshape(self.width, 3)
        self.red[start:stop] = row[:, 0]
        self.green[start:stop] = row[:, 1]
        self.blue[start:stop] = row[:, 2]


class FrameBuffers:
    """Three flat row-major uint8 channel buffers for one render request.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        red: Red channel, length width * height.
        green: Green channel, length width * height.
        blue: Blue channel, length width * height.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        size = width * height
        self.red: npt.NDArray[np.uint8] = np.zeros(size, dtype=np.uint8)
        self.green: npt.NDArray[np.uint8] = np.zeros(size, dtype=np.uint8)
        self.blue: npt.NDArray[np.uint8] = np.zeros(size, dtype=np.uint8)

    def slice_rows(self, span: RowSpan) -> BufferSlice:
        """Hand out the views covering the rows of span."""
        start = span.y_min * self.width
        stop = span.y_max * self.width
        return BufferSlice(
            span=span,
            width=self.width,
            red=self.red[start:stop],
            green=self.green[start:stop],
            blue=self.blue[start:stop],
        )

    def channels(self) -> tuple[npt.NDArray[np.uint8], npt.NDArray[np.uint8], npt.NDArray[np.uint8]]:
        """Return the (red, green, blue) buffers."""
        return self.red, self.green, self.blue


# =============================================================================
# Scheduler
# =============================================================================

# A leaf task fills every pixel of the slice it is given
SliceTask = Callable[[BufferSlice], None]


class RowScheduler:
    """Recursive divide-and-conquer scheduler over image rows.

    Attributes:
        leaf_rows: Largest span computed directly by one task.
        executor: Pool the partition tree runs on; None runs everything
            in the calling thread.
    """

    def __init__(self, leaf_rows: int = LEAF_ROWS, executor: Executor | None = None) -> None:
        if leaf_rows < 1:
            raise ValueError(f"leaf_rows must be at least 1, got {leaf_rows}")
        self.leaf_rows = leaf_rows
        self.executor = executor

    def run(
        self,
        buffers: FrameBuffers,
        task: SliceTask,
        y_min: int = 0,
        y_max: int | None = None,
    ) -> None:
        """Compute rows [y_min, y_max) of buffers and block until done.

        Args:
            buffers: Output buffers shared by all leaf tasks.
            task: Called once per leaf with that leaf's BufferSlice.
            y_min: First row to compute.
            y_max: One past the last row; defaults to buffers.height.

        Raises:
            Exception: Whatever the first failing leaf task raised.
        """
        if y_max is None:
            y_max = buffers.height
        self._compute(RowSpan(y_min, y_max), buffers, task)

    def _compute(self, span: RowSpan, buffers: FrameBuffers, task: SliceTask) -> None:
        if span.rows <= self.leaf_rows:
            logger.debug("Computing rows [%d, %d)", span.y_min, span.y_max)
            task(buffers.slice_rows(span))
            return

        left, right = span.split()
        if self.executor is None:
            self._compute(left, buffers, task)
            self._compute(right, buffers, task)
        else:
            self._invoke_all(left, right, buffers, task)

    def _invoke_all(
        self,
        left: RowSpan,
        right: RowSpan,
        buffers: FrameBuffers,
        task: SliceTask,
    ) -> None:
        future: Future[None] = self.executor.submit(self._compute, right, buffers, task)
        try:
            self._compute(left, buffers, task)
        except BaseException:
            # Let a running sibling finish before reporting the failure
            if not future.cancel():
                wait([future])
            raise

        if future.cancel():
            self._compute(right, buffers, task)
        else:
            future.result()
