"""
Applying a function to every tile of a NumPy array.

Tiles are expressed in the array's own coordinates (its axes may start
anywhere); these helpers translate a tile into the slices that select it
from the array.
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .axis import Axis, AxisLike, CartesianBox, axes_of, make_axis
from .errors import InvalidParameterError, TileBoundsError

Tile = Union[Sequence[AxisLike], CartesianBox]


def _axis_slice(tile_axis: Axis, array_axis: Axis) -> slice:
    if len(tile_axis) == 0:
        return slice(0, 0)
    if tile_axis.step % array_axis.step != 0:
        raise InvalidParameterError(
            f"Tile axis {tile_axis!r} does not line up with array axis {array_axis!r}")
    if tile_axis.last not in array_axis.as_scalar():
        raise TileBoundsError(f"Tile axis {tile_axis!r} leaves array axis {array_axis!r}")
    start = array_axis.position_of(tile_axis.first)
    step = tile_axis.step // array_axis.step
    return slice(start, start + (len(tile_axis) - 1) * step + 1, step)


def tile_to_slices(tile: Tile, array_axes: Optional[Sequence[AxisLike]] = None) -> Tuple[slice, ...]:
    """
    Get the slices that select a tile from an array.

    Args:
        tile: Tuple of axes (one per array dimension) or a CartesianBox
        array_axes: Coordinates of the array's axes; defaults to 0-based

    Returns:
        Tuple of slices usable as ``array[slices]``
    """
    tile_axes = tile.axes if isinstance(tile, CartesianBox) else tuple(
        make_axis(ax).as_scalar() for ax in tile)
    if array_axes is None:
        array_axes = axes_of(tuple(ax.last + 1 for ax in tile_axes))
    array_axes = tuple(make_axis(ax).as_scalar() for ax in array_axes)
    if len(array_axes) != len(tile_axes):
        raise InvalidParameterError(
            f"Tile has {len(tile_axes)} axes but the array has {len(array_axes)}")
    return tuple(_axis_slice(t, a) for t, a in zip(tile_axes, array_axes))


def sweep_tiles(array: np.ndarray, tiles: Sequence[Tile],
                func: Callable[[np.ndarray, Tile], Any],
                array_axes: Optional[Sequence[AxisLike]] = None) -> List[Any]:
    """
    Call ``func(view, tile)`` for every tile, in order.

    Args:
        array: Array being tiled
        tiles: Iterable of tiles, e.g. a TileIndices
        func: Receives the NumPy view of the tile (writable) and the tile
        array_axes: Coordinates of the array's axes; defaults to 0-based

    Returns:
        List of the values returned by ``func``
    """
    if array_axes is None:
        array_axes = axes_of(array)
    return [func(array[tile_to_slices(tile, array_axes)], tile) for tile in tiles]
