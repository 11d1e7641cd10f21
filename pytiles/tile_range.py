"""
Splitting one axis into an ordered sequence of tiles.

A tile range is a lazy, random-access sequence of sub-axes of a parent
axis. Tiles are computed from their position on demand; nothing is
materialized. Positions are element positions along the parent axis, so
strided and Cartesian axes tile exactly like unit axes and their tiles keep
the parent's kind and step.
"""

import logging
import operator
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Iterator, List, Optional, Union

from .axis import Axis, AxisLike, make_axis
from .errors import InvalidParameterError, TileBoundsError

logger = logging.getLogger(__name__)


class TilePolicy(Enum):
    """How the tiles of one axis are laid out."""
    KEEP_LAST = auto()
    DISCARD_LAST = auto()
    RELAXED = auto()


def ceil_div(a: int, b: int) -> int:
    """Integer ``ceil(a / b)`` for ``b > 0``."""
    return -(-a // b)


def check_positive(value: Any, name: str) -> int:
    """
    Check that a tile parameter is a positive integer.

    Raises:
        InvalidParameterError: If the value is not a positive integer
    """
    try:
        value = operator.index(value)
    except TypeError:
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}") from None
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return value


class TileRange(ABC):
    """
    Base class for tile ranges.

    Attributes:
        parent: The axis being tiled
        n: Nominal tile length (in elements)
        length: Number of tiles, computed once
    """

    def __init__(self, parent: AxisLike, n: int):
        self.parent = make_axis(parent)
        self.n = check_positive(n, "Tile length")

    @property
    @abstractmethod
    def policy(self) -> TilePolicy:
        """The TilePolicy this range implements."""

    @abstractmethod
    def tile_start(self, i: int) -> int:
        """Position along the parent of the first element of tile ``i``."""

    @abstractmethod
    def tile_length(self, i: int) -> int:
        """Number of elements in tile ``i``."""

    def __len__(self) -> int:
        return self.length

    def _normalize(self, i: int) -> int:
        if -self.length <= i < 0:
            i += self.length
        if not 0 <= i < self.length:
            raise TileBoundsError(
                f"Tile index {i} out of range for {self!r} with {self.length} tiles")
        return i

    def __getitem__(self, i: Union[int, slice]) -> Union[Axis, List[Axis]]:
        if isinstance(i, slice):
            return [self[j] for j in range(*i.indices(self.length))]
        i = self._normalize(operator.index(i))
        return self.parent.sub_axis(self.tile_start(i), self.tile_length(i))

    def __iter__(self) -> Iterator[Axis]:
        for i in range(self.length):
            yield self[i]

    def first(self) -> Axis:
        """Get the first tile."""
        return self[0]

    def last(self) -> Axis:
        """Get the last tile."""
        return self[-1]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TileRange):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None


class FixedTileRange(TileRange):
    """
    Tiles of a fixed length placed at a fixed stride.

    With ``keep_last=True`` the last tile may be shorter than ``n`` so the
    whole axis is covered. With ``keep_last=False`` that short tile is
    dropped and every tile has exactly ``n`` elements. A stride smaller than
    ``n`` makes adjacent tiles overlap; a stride larger than ``n`` leaves
    gaps.

    Examples (unit axis ``2..10``):
        ``FixedTileRange(unit_axis(2, 10), 4)`` -> ``2..5, 6..9, 10..10``
        ``FixedTileRange(unit_axis(2, 10), 4, keep_last=False)`` -> ``2..5, 6..9``
        ``FixedTileRange(unit_axis(2, 10), 4, 2)`` -> ``2..5, 4..7, 6..9, 8..10``
    """

    def __init__(self, parent: AxisLike, n: int, stride: Optional[int] = None,
                 keep_last: bool = True):
        """
        Initialize a fixed tile range.

        Args:
            parent: Axis to tile
            n: Tile length in elements
            stride: Distance in elements between consecutive tile starts
                    (defaults to ``n``)
            keep_last: Whether to keep a trailing tile shorter than ``n``
        """
        super().__init__(parent, n)
        self.stride = self.n if stride is None else check_positive(stride, "Tile stride")
        self.keep_last = bool(keep_last)
        self.length = self._compute_length()
        logger.debug("%r: %d tiles", self, self.length)

    def _compute_length(self) -> int:
        L, n, stride = len(self.parent), self.n, self.stride
        if self.keep_last:
            if L == 0:
                return 0
            if n >= L:
                return 1
            # The second bound only applies when stride > n: no tile may
            # start past the end of the axis.
            return min(ceil_div(L - n, stride) + 1, ceil_div(L, stride))
        if n > L:
            return 0
        return (L - n) // stride + 1

    @property
    def policy(self) -> TilePolicy:
        return TilePolicy.KEEP_LAST if self.keep_last else TilePolicy.DISCARD_LAST

    def tile_start(self, i: int) -> int:
        return i * self.stride

    def tile_length(self, i: int) -> int:
        return min(self.n, len(self.parent) - i * self.stride)

    def __repr__(self) -> str:
        return (f"FixedTileRange({self.parent!r}, {self.n}, {self.stride}, "
                f"keep_last={self.keep_last})")


class RelaxedTileRange(TileRange):
    """
    Tiles of exactly ``n`` elements spread evenly over the whole axis.

    The first tile starts at the first element, the last tile ends at the
    last element, and the starts in between are evenly spaced, rounded half
    up. Adjacent tiles overlap whenever the axis length is not a multiple of
    ``n``. Starts are strictly increasing and never leave a gap, since the
    ideal spacing lies in ``[1, n]``.

    Example (unit axis ``1..10``, ``n=4``): ``1..4, 4..7, 7..10``.
    """

    def __init__(self, parent: AxisLike, n: int):
        """
        Initialize a relaxed tile range.

        Args:
            parent: Axis to tile
            n: Tile length in elements; must not exceed the axis length

        Raises:
            InvalidParameterError: If ``n`` is larger than the axis
        """
        super().__init__(parent, n)
        if self.n > len(self.parent):
            raise InvalidParameterError(
                f"Tile length {self.n} exceeds the length {len(self.parent)} "
                f"of {self.parent!r}; relaxed tiles cannot be shortened")
        self.span = len(self.parent) - self.n
        self.length = 1 if self.span == 0 else ceil_div(self.span, self.n) + 1
        logger.debug("%r: %d tiles", self, self.length)

    @property
    def policy(self) -> TilePolicy:
        return TilePolicy.RELAXED

    def tile_start(self, i: int) -> int:
        if self.length == 1:
            return 0
        intervals = self.length - 1
        # round(i * span / intervals) with halves rounded up, in integers
        return (2 * i * self.span + intervals) // (2 * intervals)

    def tile_length(self, i: int) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"RelaxedTileRange({self.parent!r}, {self.n})"
