"""
Tile strategies: the named policies that decide how each axis is tiled.

A strategy is an immutable value. Calling it on an index space applies the
same per-axis policy to every axis independently:

    FixedTile(4)(unit_axis(2, 10))                  # one axis
    FixedTile((3, 4), (2, 3))((range(1, 5), range(0, 6)))  # per-axis parameters
    RelaxedTile(4)(make_box((10, 10)))             # a Cartesian box

Scalar parameters are broadcast to every axis; sequences supply one value
per axis.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from .axis import Axis, CartesianBox, make_axis
from .errors import InvalidParameterError
from .tile_range import (
    FixedTileRange,
    RelaxedTileRange,
    TilePolicy,
    TileRange,
    check_positive,
)

IntOrInts = Union[int, Sequence[int]]


def _check_parameter(value: IntOrInts, name: str) -> Union[int, Tuple[int, ...]]:
    if isinstance(value, (tuple, list)):
        if not value:
            raise InvalidParameterError(f"{name} must not be an empty sequence")
        return tuple(check_positive(v, name) for v in value)
    return check_positive(value, name)


def _broadcast(value: Union[int, Tuple[int, ...]], ndim: int, name: str) -> Tuple[int, ...]:
    """Expand a scalar parameter to ``ndim`` values, or check a per-axis one."""
    if isinstance(value, tuple):
        if len(value) != ndim:
            raise InvalidParameterError(
                f"{name} has {len(value)} entries but the index space has {ndim} axes")
        return value
    return (value,) * ndim


class TileStrategy(ABC):
    """Base class for tile strategies."""

    @property
    @abstractmethod
    def policy(self) -> TilePolicy:
        """The per-axis policy of this strategy."""

    @abstractmethod
    def tile_axes(self, axes: Sequence[Axis]) -> Tuple[TileRange, ...]:
        """Build one tile range per axis."""

    def __call__(self, indices: Any) -> Union[TileRange, Tuple[TileRange, ...]]:
        """
        Apply the strategy to an index space.

        Args:
            indices: One axis (or ``range``), a sequence of axes, or a
                     CartesianBox

        Returns:
            A single tile range for one axis, otherwise a tuple with one
            tile range per axis. A CartesianBox is tiled over its Cartesian
            axes so its tiles can be reassembled into boxes.
        """
        if isinstance(indices, CartesianBox):
            return self.tile_axes(indices.cartesian_axes())
        if isinstance(indices, (Axis, range)):
            if isinstance(self.size, tuple) and len(self.size) != 1:
                raise InvalidParameterError(
                    f"{type(self).__name__} with per-axis sizes {self.size} "
                    f"cannot tile a single axis")
            return self.tile_axes((make_axis(indices),))[0]
        return self.tile_axes(tuple(make_axis(ax) for ax in indices))


@dataclass(frozen=True)
class FixedTile(TileStrategy):
    """
    Fixed-length tiles at a fixed stride.

    Attributes:
        size: Tile length, scalar or per axis
        stride: Distance between tile starts, scalar or per axis
                (defaults to ``size``)
        keep_last: Keep (True) or discard (False) a trailing short tile
    """
    size: IntOrInts
    stride: Optional[IntOrInts] = None
    keep_last: bool = True

    def __post_init__(self):
        """Validate parameters; stride defaults to size."""
        object.__setattr__(self, 'size', _check_parameter(self.size, "Tile length"))
        stride = self.size if self.stride is None else _check_parameter(self.stride, "Tile stride")
        object.__setattr__(self, 'stride', stride)
        object.__setattr__(self, 'keep_last', bool(self.keep_last))

    @property
    def policy(self) -> TilePolicy:
        return TilePolicy.KEEP_LAST if self.keep_last else TilePolicy.DISCARD_LAST

    def tile_axes(self, axes: Sequence[Axis]) -> Tuple[TileRange, ...]:
        sizes = _broadcast(self.size, len(axes), "Tile length")
        strides = _broadcast(self.stride, len(axes), "Tile stride")
        return tuple(
            FixedTileRange(ax, n, stride, keep_last=self.keep_last)
            for ax, n, stride in zip(axes, sizes, strides)
        )


@dataclass(frozen=True)
class RelaxedTile(TileStrategy):
    """
    Uniform-length tiles spread over the whole axis, overlapping as needed.

    The stride is derived from the axis length so that the first tile starts
    at the first element and the last tile ends at the last element.

    Attributes:
        size: Tile length, scalar or per axis
    """
    size: IntOrInts

    def __post_init__(self):
        object.__setattr__(self, 'size', _check_parameter(self.size, "Tile length"))

    @property
    def policy(self) -> TilePolicy:
        return TilePolicy.RELAXED

    def tile_axes(self, axes: Sequence[Axis]) -> Tuple[TileRange, ...]:
        sizes = _broadcast(self.size, len(axes), "Tile length")
        return tuple(RelaxedTileRange(ax, n) for ax, n in zip(axes, sizes))


def make_tile_strategy(policy: TilePolicy, size: IntOrInts,
                       stride: Optional[IntOrInts] = None) -> TileStrategy:
    """
    Create the strategy for a named policy.

    Args:
        policy: One of the TilePolicy members
        size: Tile length, scalar or per axis
        stride: Stride for the fixed policies; not accepted for RELAXED
    """
    if policy == TilePolicy.RELAXED:
        if stride is not None:
            raise InvalidParameterError("The relaxed policy derives its own stride")
        return RelaxedTile(size)
    return FixedTile(size, stride, keep_last=(policy == TilePolicy.KEEP_LAST))
