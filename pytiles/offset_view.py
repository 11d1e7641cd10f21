"""
Coordinate-indexed views whose index region may start anywhere.

An OffsetView pairs a NumPy array with a CartesianBox of the same shape
and translates region coordinates (which may be negative or start at any
integer) into array positions. Reads and writes go straight through to the
array, so a view over a window of a BufferView writes into the buffer.
"""

import operator
from typing import Any, Sequence, Tuple, Union

import numpy as np

from .axis import Axis, BoxLike, make_box
from .errors import SizeMismatchError, TileBoundsError


class OffsetView:
    """
    Array view indexed by region coordinates.

    Attributes:
        data: The underlying array, shaped like the region
        region: The index region the view answers to
    """

    def __init__(self, data: np.ndarray, region: BoxLike):
        """
        Initialize offset view.

        Args:
            data: Array whose shape equals the region's shape
            region: Index region (CartesianBox or anything make_box accepts)

        Raises:
            SizeMismatchError: If the array and region shapes differ
        """
        self.region = make_box(region)
        if data.shape != self.region.shape:
            raise SizeMismatchError(
                f"Array of shape {data.shape} cannot back region {self.region!r} "
                f"of shape {self.region.shape}",
                requested=len(self.region), available=data.size)
        self.data = data

    @property
    def axes(self) -> Tuple[Axis, ...]:
        return self.region.axes

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.region.shape

    @property
    def ndim(self) -> int:
        return self.region.ndim

    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype

    @property
    def pointer(self) -> int:
        """Address of the element at the region's first corner."""
        return self.data.__array_interface__['data'][0]

    def _positions(self, idx: Union[int, Sequence[int]]) -> Tuple[int, ...]:
        if not isinstance(idx, tuple):
            idx = (idx,)
        if len(idx) != self.ndim:
            raise TileBoundsError(
                f"Index {idx} has {len(idx)} entries, view {self.region!r} has {self.ndim}")
        try:
            return tuple(
                ax.position_of(operator.index(i)) for ax, i in zip(self.region.axes, idx))
        except TileBoundsError:
            raise TileBoundsError(f"Index {idx} is outside view region {self.region!r}") from None

    def get_element(self, idx: Union[int, Sequence[int]]) -> Any:
        """Get a single element at region coordinates."""
        return self.data[self._positions(idx)]

    def set_element(self, idx: Union[int, Sequence[int]], value: Any) -> None:
        """Set a single element at region coordinates."""
        self.data[self._positions(idx)] = value

    __getitem__ = get_element
    __setitem__ = set_element

    def __len__(self) -> int:
        return len(self.region)

    def __repr__(self) -> str:
        return f"OffsetView({self.region!r}, dtype={self.dtype})"


def make_offset_view(data: np.ndarray, region: BoxLike) -> OffsetView:
    """Create an offset view; data and region must have the same shape."""
    return OffsetView(data, region)


def make_offset_view_from_flat(flat: np.ndarray, region: BoxLike) -> OffsetView:
    """
    Create an offset view over the first elements of a flat array.

    The first region axis varies fastest in memory (column-major), so the
    region's first corner is ``flat[0]`` and the next coordinate along axis
    0 is ``flat[1]``.

    Raises:
        SizeMismatchError: If the region has more elements than ``flat``
    """
    region = make_box(region)
    count = len(region)
    if count > flat.size:
        raise SizeMismatchError(
            f"Region {region!r} has {count} elements but only {flat.size} are available",
            requested=count, available=flat.size)
    return OffsetView(flat[:count].reshape(region.shape, order='F'), region)
