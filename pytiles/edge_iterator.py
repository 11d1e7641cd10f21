"""
Iteration over the boundary of a box: the coordinates of an outer box that
are not in a nested inner box.

Coordinates come out in the outer box's own order (first axis fastest). A
"row" is the run of coordinates along the first axis with all other
coordinates fixed. Rows that cross the inner box jump over the inner run
in one step, so the cost is proportional to the number of boundary
coordinates, not to the size of the outer box.
"""

import logging
import operator
from typing import Any, Iterator, Sequence, Tuple

from .axis import BoxLike, make_box
from .errors import GeometryViolationError, InvalidParameterError, TileBoundsError
from .space_filling_curve import SpaceFillingCurve

logger = logging.getLogger(__name__)


class EdgeIterator:
    """
    The coordinates of ``outer`` minus those of ``inner``.

    Attributes:
        outer: The enclosing box
        inner: The box whose coordinates are skipped
    """

    def __init__(self, outer: BoxLike, inner: BoxLike):
        """
        Initialize edge iterator.

        Args:
            outer: Enclosing box (CartesianBox or anything make_box accepts)
            inner: Nested box; its first and last corners must lie in outer

        Raises:
            InvalidParameterError: If either box has a non-unit step
            GeometryViolationError: If inner is not nested in outer
        """
        self.outer = make_box(outer)
        self.inner = make_box(inner)

        if not (self.outer.is_unit_step() and self.inner.is_unit_step()):
            raise InvalidParameterError(
                f"EdgeIterator needs unit-step boxes, got {self.outer!r} and {self.inner!r}")
        if self.outer.ndim != self.inner.ndim:
            raise GeometryViolationError(
                f"Outer box {self.outer!r} has {self.outer.ndim} dimensions, "
                f"inner box {self.inner!r} has {self.inner.ndim}")

        self._has_inner = not self.inner.is_empty()
        if self._has_inner and (self.inner.first not in self.outer
                                or self.inner.last not in self.outer):
            raise GeometryViolationError(
                f"Inner box {self.inner!r} is not contained in outer box {self.outer!r}")

        # Inner box in outer positions, per axis
        self._lo = tuple(i.first - o.first for i, o in zip(self.inner.axes, self.outer.axes))
        self._widths = self.inner.shape if self._has_inner else (0,) * self.outer.ndim

        self.row_length = self.outer.shape[0]
        self._rows = SpaceFillingCurve(self.outer.shape[1:])
        self.length = len(self.outer) - (len(self.inner) if self._has_inner else 0)
        logger.debug("EdgeIterator %r minus %r: %d coordinates",
                     self.outer, self.inner, self.length)

    def __len__(self) -> int:
        return self.length

    def _is_interior_row(self, rest: Sequence[int]) -> bool:
        if not self._has_inner:
            return False
        return all(
            lo <= p < lo + w
            for p, lo, w in zip(rest, self._lo[1:], self._widths[1:])
        )

    def _interior_rows_before(self, rest: Sequence[int]) -> int:
        """Count interior rows that come before the row at ``rest``."""
        if not self._has_inner:
            return 0
        count = 0
        for d in range(len(rest) - 1, -1, -1):
            rows_per_slice = 1
            for w in self._widths[1:d + 1]:
                rows_per_slice *= w
            lo, w = self._lo[d + 1], self._widths[d + 1]
            count += min(max(rest[d] - lo, 0), w) * rows_per_slice
            if not lo <= rest[d] < lo + w:
                break
        return count

    def _edges_before_row(self, row: int) -> int:
        if row >= self._rows.get_num_of_access():
            return self.length
        rest = self._rows.get_index(row)
        return row * self.row_length - self._interior_rows_before(rest) * self._widths[0]

    def _coordinate(self, p0: int, rest: Sequence[int]) -> Tuple[int, ...]:
        return (self.outer.axes[0].first + p0,) + tuple(
            ax.first + p for ax, p in zip(self.outer.axes[1:], rest))

    def __getitem__(self, k: int) -> Tuple[int, ...]:
        """
        Get the k-th boundary coordinate without enumerating the ones before.

        Raises:
            TileBoundsError: If k is out of range
        """
        k = operator.index(k)
        if -self.length <= k < 0:
            k += self.length
        if not 0 <= k < self.length:
            raise TileBoundsError(
                f"Edge index {k} out of range for {self.length} boundary coordinates")

        # Smallest row whose boundary run reaches past k
        low, high = 0, self._rows.get_num_of_access() - 1
        while low < high:
            mid = (low + high) // 2
            if self._edges_before_row(mid + 1) > k:
                high = mid
            else:
                low = mid + 1

        rest = self._rows.get_index(low)
        p0 = k - self._edges_before_row(low)
        if self._is_interior_row(rest) and p0 >= self._lo[0]:
            p0 += self._widths[0]
        return self._coordinate(p0, rest)

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        lo0, w0 = self._lo[0], self._widths[0]
        for row in range(self._rows.get_num_of_access()):
            rest = self._rows.get_index(row)
            if self._is_interior_row(rest):
                for p0 in range(lo0):
                    yield self._coordinate(p0, rest)
                for p0 in range(lo0 + w0, self.row_length):
                    yield self._coordinate(p0, rest)
            else:
                for p0 in range(self.row_length):
                    yield self._coordinate(p0, rest)

    def __contains__(self, item: Any) -> bool:
        return item in self.outer and not (self._has_inner and item in self.inner)

    def __repr__(self) -> str:
        return f"EdgeIterator({self.outer!r}, {self.inner!r})"
