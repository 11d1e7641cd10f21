"""
Reusable scratch storage for tiles of varying shape.

A TileBuffer is an active OffsetView plus the BufferView it lives in.
Reshaping produces a new TileBuffer over a new index region that shares the
same backing buffer, so a stream of same-or-smaller tiles (for instance the
short tiles at the edge of a decomposition) can be processed without
allocating per tile. The base address is the same for every reshape.

Only one view should be in use at a time: finish with the current tile
before reshaping for the next one. Concurrent workers each need their own
TileBuffer.

    buf = make_tile_buffer(np.float64, ((1, 16), (1, 4)))
    for tile in make_tile_indices(axes, (16, 4)):
        buf = buf.reshape(tile)
        ...
"""

import logging
from typing import Any, Sequence, Tuple, Union

import numpy as np

from .axis import Axis, BoxLike, CartesianBox, make_box
from .buffer_view import BufferView, make_buffer_view, wrap_buffer_view
from .errors import InvalidParameterError, SizeMismatchError
from .offset_view import OffsetView, make_offset_view_from_flat

logger = logging.getLogger(__name__)


def _as_region(region: BoxLike) -> CartesianBox:
    region = make_box(region)
    if not region.is_unit_step():
        raise InvalidParameterError(f"Tile buffer regions must be unit-step, got {region!r}")
    return region


class TileBuffer:
    """
    Active view over a shared backing buffer.

    Attributes:
        buffer: The backing BufferView
        view: The OffsetView for the current region
    """

    def __init__(self, buffer: BufferView, region: BoxLike):
        """
        Initialize a tile buffer over an existing backing buffer.

        Args:
            buffer: Backing storage
            region: Unit-step index region of the active view

        Raises:
            SizeMismatchError: If the region has more elements than the buffer
        """
        region = _as_region(region)
        if len(region) > buffer.capacity:
            raise SizeMismatchError(
                f"Region {region!r} needs {len(region)} elements but the backing "
                f"buffer holds {buffer.capacity}",
                requested=len(region), available=buffer.capacity)
        self.buffer = buffer
        self.view: OffsetView = make_offset_view_from_flat(buffer.window(buffer.capacity), region)

    def reshape(self, region: BoxLike) -> 'TileBuffer':
        """
        Get a TileBuffer over a new region sharing this backing buffer.

        Raises:
            SizeMismatchError: If the region has more elements than the
                backing buffer holds
        """
        reshaped = TileBuffer(self.buffer, region)
        logger.debug("Reshaped tile buffer %r -> %r", self.region, reshaped.region)
        return reshaped

    @property
    def region(self) -> CartesianBox:
        return self.view.region

    @property
    def axes(self) -> Tuple[Axis, ...]:
        return self.view.axes

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.view.shape

    @property
    def ndim(self) -> int:
        return self.view.ndim

    @property
    def dtype(self) -> np.dtype:
        return self.buffer.dtype

    @property
    def capacity(self) -> int:
        return self.buffer.capacity

    @property
    def pointer(self) -> int:
        """Base address of the active view."""
        return self.view.pointer

    @property
    def parent(self) -> np.ndarray:
        """The flat backing array."""
        return self.buffer.data

    def to_numpy(self) -> np.ndarray:
        """Get the active view as a NumPy array (shares memory)."""
        return self.view.data

    def __getitem__(self, idx: Union[int, Sequence[int]]) -> Any:
        return self.view.get_element(idx)

    def __setitem__(self, idx: Union[int, Sequence[int]], value: Any) -> None:
        self.view.set_element(idx, value)

    def __len__(self) -> int:
        return len(self.view)

    def __repr__(self) -> str:
        return (f"TileBuffer({self.region!r}, dtype={self.dtype}, "
                f"capacity={self.capacity}, data_ptr={hex(self.pointer)})")


def make_tile_buffer(dtype: Any, region: BoxLike) -> TileBuffer:
    """
    Allocate backing storage sized to a region and view it.

    Args:
        dtype: NumPy dtype-like of the elements
        region: Unit-step index region; its element count is the capacity
    """
    region = _as_region(region)
    return TileBuffer(make_buffer_view(dtype, len(region)), region)


def wrap_tile_buffer(array: np.ndarray, region: BoxLike) -> TileBuffer:
    """
    Use an existing contiguous array as the backing storage.

    Raises:
        SizeMismatchError: If the region has more elements than the array
        InvalidParameterError: If the array is not contiguous
    """
    return TileBuffer(wrap_buffer_view(array), region)


def reshape_tile_buffer(buffer: TileBuffer, region: BoxLike) -> TileBuffer:
    """Same as ``buffer.reshape(region)``."""
    return buffer.reshape(region)
