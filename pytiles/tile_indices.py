"""
N-dimensional tile containers.

TileIndices is the Cartesian product of independent per-axis tile ranges.
It behaves like a read-only array of shape ``(n0, n1, ...)``, where ``ni``
is the number of tiles along axis ``i``. Tiles are computed on demand from
their position, with the first axis varying fastest in linear order.
"""

import logging
import operator
from typing import Any, Iterator, Sequence, Tuple, Union

from .axis import Axis, CartesianBox, axes_of, make_axis
from .errors import InvalidParameterError, TileBoundsError
from .space_filling_curve import SpaceFillingCurve
from .tile_range import TileRange
from .tile_strategy import FixedTile, IntOrInts, RelaxedTile, TileStrategy

logger = logging.getLogger(__name__)

Tile = Union[Tuple[Axis, ...], CartesianBox]


class TileIndices:
    """
    Tiles of an N-dimensional index space.

    Attributes:
        tile_ranges: One tile range per axis
        is_cartesian: Whether tiles are returned as CartesianBox objects
        strategy: The strategy the tiles were built with (None when built
                  directly from tile ranges)
        shape: Number of tiles along each axis
    """

    def __init__(self, indices: Any, tile_spec: Union[TileStrategy, IntOrInts],
                 stride: IntOrInts = None, keep_last: bool = True):
        """
        Tile an index space.

        Args:
            indices: A sequence of axes (or ranges, or ``(first, last)``
                     pairs), a single axis, or a CartesianBox
            tile_spec: A TileStrategy, or the tile length(s) of a FixedTile
            stride: Tile stride(s) when ``tile_spec`` is a length
            keep_last: Whether to keep short trailing tiles when
                       ``tile_spec`` is a length

        Example:
            ``TileIndices((range(1, 5), range(0, 6)), (3, 4), (2, 3))`` has
            shape ``(2, 2)``; its first tile is ``(Axis(1..3), Axis(0..3))``.
        """
        if isinstance(tile_spec, TileStrategy):
            if stride is not None or not keep_last:
                raise InvalidParameterError(
                    "stride and keep_last are set by the strategy; "
                    "pass them to the strategy instead")
            strategy = tile_spec
        else:
            strategy = FixedTile(tile_spec, stride, keep_last=keep_last)

        if isinstance(indices, CartesianBox):
            tile_ranges = strategy.tile_axes(indices.cartesian_axes())
            is_cartesian = True
        else:
            if isinstance(indices, (Axis, range)):
                indices = (indices,)
            tile_ranges = strategy.tile_axes(tuple(make_axis(ax) for ax in indices))
            is_cartesian = False

        self._setup(tile_ranges, is_cartesian)
        self.strategy = strategy

    @classmethod
    def from_tile_ranges(cls, tile_ranges: Sequence[TileRange],
                         cartesian: bool = False) -> 'TileIndices':
        """
        Combine existing per-axis tile ranges.

        Args:
            tile_ranges: One tile range per axis; policies may differ
            cartesian: Return tiles as CartesianBox objects
        """
        tiles = cls.__new__(cls)
        tiles._setup(tuple(tile_ranges), cartesian)
        tiles.strategy = None
        return tiles

    def _setup(self, tile_ranges: Tuple[TileRange, ...], is_cartesian: bool) -> None:
        if not tile_ranges:
            raise InvalidParameterError("Cannot tile an index space with no axes")
        self.tile_ranges = tile_ranges
        self.is_cartesian = is_cartesian
        self.shape = tuple(len(r) for r in tile_ranges)
        self._curve = SpaceFillingCurve(self.shape)
        logger.debug("Tiled %d axes into shape %s", len(tile_ranges), self.shape)

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        return self._curve.get_num_of_access()

    def __len__(self) -> int:
        return self.size

    def _tile(self, positions: Sequence[int]) -> Tile:
        parts = tuple(r[p] for r, p in zip(self.tile_ranges, positions))
        if self.is_cartesian:
            return CartesianBox(parts)
        return parts

    def _positions(self, key: Tuple[int, ...]) -> Tuple[int, ...]:
        if len(key) != self.ndim:
            raise TileBoundsError(
                f"Tile index {key} has {len(key)} entries, tiles have shape {self.shape}")
        positions = []
        for i, n in zip(key, self.shape):
            i = operator.index(i)
            if -n <= i < 0:
                i += n
            if not 0 <= i < n:
                raise TileBoundsError(f"Tile index {key} out of range for shape {self.shape}")
            positions.append(i)
        return tuple(positions)

    def __getitem__(self, key: Union[int, Tuple[int, ...]]) -> Tile:
        """
        Get a tile by linear index or by multi-index.

        Args:
            key: Linear index (first axis fastest, negative allowed) or one
                 index per axis

        Raises:
            TileBoundsError: If the index is outside the tile shape
        """
        if isinstance(key, tuple):
            return self._tile(self._positions(key))
        return self._tile(self._curve.get_index(operator.index(key)))

    def __iter__(self) -> Iterator[Tile]:
        for i in range(self.size):
            yield self._tile(self._curve.get_index(i))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TileIndices):
            return NotImplemented
        return self.shape == other.shape and all(a == b for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self) -> str:
        kind = "CartesianBox" if self.is_cartesian else "axes"
        return f"TileIndices(shape={self.shape}, tiles={kind}, ranges={self.tile_ranges!r})"


def make_tile_indices(indices: Any, size: IntOrInts, stride: IntOrInts = None,
                      keep_last: bool = True) -> TileIndices:
    """
    Create fixed-length tiles; same as ``TileIndices(indices, FixedTile(size, stride, keep_last))``.
    """
    return TileIndices(indices, FixedTile(size, stride, keep_last=keep_last))


def make_tile_iterator(axes: Any, tile_size: IntOrInts, relaxed: bool = False) -> TileIndices:
    """
    Create tiles covering the whole of an array's index space.

    By default the last tile along each axis may be short. With
    ``relaxed=True`` every tile has exactly ``tile_size`` elements and
    neighbouring tiles overlap where needed.

    Args:
        axes: Sequence of axes, a CartesianBox, or an array / shape whose
              0-based axes should be tiled
        tile_size: Tile length, scalar or per axis
        relaxed: Use uniform-length overlapping tiles
    """
    if isinstance(axes, CartesianBox):
        pass
    elif hasattr(axes, 'shape') or isinstance(axes, int) or (
            isinstance(axes, tuple) and axes and all(isinstance(n, int) for n in axes)):
        axes = axes_of(axes)
    strategy = RelaxedTile(tile_size) if relaxed else FixedTile(tile_size)
    return TileIndices(axes, strategy)
