"""
Coarse splitting of one axis into chunks for distributing work.

Chunks are laid out from the end of the axis backward in equal steps; the
leftover at the front becomes chunk 0. Chunk 0 is therefore never longer
than any other chunk, which suits callers whose first worker also
coordinates the others.
"""

import logging
import math
import operator
from fractions import Fraction
from typing import Iterator, List, Sequence, Tuple, Union

from .axis import Axis, AxisLike, make_axis, unit_axis
from .errors import InvalidParameterError, TileBoundsError

logger = logging.getLogger(__name__)

Real = Union[int, float, Fraction]


def _chunk_count(m: Real) -> Fraction:
    try:
        exact = Fraction(m)
    except (TypeError, ValueError, OverflowError):
        raise InvalidParameterError(f"Chunk count must be a finite real number, got {m!r}") from None
    if exact < 1:
        raise InvalidParameterError(f"Chunk count must be at least 1, got {m!r}")
    return exact


def compute_splits(axis: Axis, m: Real) -> List[int]:
    """
    Compute the split points of an axis.

    Chunk ``k`` covers ``splits[k] + 1`` to ``splits[k + 1]``.

    Args:
        axis: Unit-step axis to split
        m: Requested number of chunks (may be fractional)

    Returns:
        ``ceil(m) + 1`` strictly increasing split points, starting at
        ``axis.first - 1`` and ending at ``axis.last``
    """
    exact = _chunk_count(m)
    if axis.step != 1:
        raise InvalidParameterError(f"Only unit-step axes can be split, got {axis!r}")
    length = len(axis)
    if length < 1:
        raise InvalidParameterError(f"Cannot split the empty axis {axis!r}")

    nchunks = math.ceil(exact)
    if nchunks > length:
        raise InvalidParameterError(
            f"Cannot split {axis!r} of length {length} into {nchunks} non-empty chunks")

    step = math.ceil(length / exact)
    first_length = length - (nchunks - 1) * step
    if first_length >= 1:
        lengths = [first_length] + [step] * (nchunks - 1)
    else:
        # The backward layout overshoots the front; balance instead, shorter
        # chunks first.
        base, extra = divmod(length, nchunks)
        lengths = [base] * (nchunks - extra) + [base + 1] * extra
        logger.debug("Split of %r into %s chunks of %d overshoots; balanced to %s",
                     axis, m, step, lengths)

    splits = [axis.first - 1]
    for n in lengths:
        splits.append(splits[-1] + n)
    return splits


class SplitAxis:
    """
    Chunks of a unit-step axis.

    Attributes:
        axis: The axis being split
        splits: Split points; chunk ``k`` is ``splits[k]+1 .. splits[k+1]``

    Example:
        ``SplitAxis(unit_axis(1, 16), 3.5)`` gives ``1..1, 2..6, 7..11, 12..16``.
    """

    def __init__(self, axis: AxisLike, m: Real):
        """
        Initialize axis splitter.

        Args:
            axis: Unit-step axis (or ``range`` with step 1)
            m: Requested number of chunks, at least 1; ``ceil(m)`` chunks are
               produced

        Raises:
            InvalidParameterError: If ``m < 1``, the axis is empty or not
                unit-step, or it is shorter than ``ceil(m)``
        """
        self.axis = make_axis(axis).as_scalar()
        self.splits = tuple(compute_splits(self.axis, m))
        logger.debug("Split %r into %d chunks", self.axis, len(self))

    def __len__(self) -> int:
        return len(self.splits) - 1

    def __getitem__(self, k: int) -> Axis:
        k = operator.index(k)
        if -len(self) <= k < 0:
            k += len(self)
        if not 0 <= k < len(self):
            raise TileBoundsError(f"Chunk index {k} out of range for {len(self)} chunks")
        return unit_axis(self.splits[k] + 1, self.splits[k + 1])

    def __iter__(self) -> Iterator[Axis]:
        for k in range(len(self)):
            yield self[k]

    def __repr__(self) -> str:
        return f"SplitAxis({self.axis!r}, splits={list(self.splits)})"


class SplitAxes:
    """
    Chunks of an N-dimensional index space split along its last axis.

    Each chunk keeps the full extent of the leading axes.

    Attributes:
        axes: The axes being split
        split: SplitAxis of the last axis
    """

    def __init__(self, axes: Sequence[AxisLike], m: Real):
        """
        Initialize splitter.

        Args:
            axes: Axes of the index space; only the last one is split
            m: Requested number of chunks
        """
        self.axes = tuple(make_axis(ax) for ax in axes)
        if not self.axes:
            raise InvalidParameterError("SplitAxes needs at least one axis")
        self.split = SplitAxis(self.axes[-1], m)

    def __len__(self) -> int:
        return len(self.split)

    def __getitem__(self, k: int) -> Tuple[Axis, ...]:
        return self.axes[:-1] + (self.split[k],)

    def __iter__(self) -> Iterator[Tuple[Axis, ...]]:
        for k in range(len(self)):
            yield self[k]

    def __repr__(self) -> str:
        return f"SplitAxes({self.axes!r}, splits={list(self.split.splits)})"
