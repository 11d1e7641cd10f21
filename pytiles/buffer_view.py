"""
Flat backing storage for tile buffers.

A BufferView owns (or wraps) one contiguous, one-dimensional NumPy array
and hands out windows onto its leading elements. Every window is a NumPy
view of the same memory, so the base address never changes for the
lifetime of the buffer.
"""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .errors import InvalidParameterError, SizeMismatchError


@dataclass
class BufferView:
    """
    Flat buffer that windows are carved from.

    Attributes:
        data: One-dimensional array holding the elements
        buffer_size: Number of usable elements (the capacity)
        owner: The array this buffer was wrapped from, if any; kept so
               writes through windows are visible in it
    """
    data: np.ndarray
    buffer_size: int = 0
    owner: Optional[np.ndarray] = None

    def __post_init__(self):
        """Validate buffer view after dataclass initialization."""
        if self.data is None or self.data.ndim != 1:
            raise InvalidParameterError("BufferView data must be a one-dimensional array")
        if self.buffer_size == 0:
            self.buffer_size = self.data.size
        if not 0 <= self.buffer_size <= self.data.size:
            raise SizeMismatchError(
                f"Buffer size {self.buffer_size} does not fit array of {self.data.size} elements",
                requested=self.buffer_size, available=self.data.size)

    @property
    def capacity(self) -> int:
        """Number of elements a window may span."""
        return self.buffer_size

    @property
    def dtype(self) -> np.dtype:
        """Get the data type of the buffer."""
        return self.data.dtype

    @property
    def address(self) -> int:
        """Address of the first element."""
        return self.data.__array_interface__['data'][0]

    def window(self, count: int) -> np.ndarray:
        """
        Get a view of the first ``count`` elements.

        Raises:
            SizeMismatchError: If ``count`` exceeds the capacity
        """
        if count > self.buffer_size:
            raise SizeMismatchError(
                f"Requested {count} elements but the buffer holds {self.buffer_size}",
                requested=count, available=self.buffer_size)
        return self.data[:count]

    def __getitem__(self, index: int) -> Any:
        """Get element at a flat index."""
        return self.data[:self.buffer_size][index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.data[:self.buffer_size][index] = value

    def __repr__(self) -> str:
        return (f"BufferView(buffer_size={self.buffer_size}, dtype={self.dtype}, "
                f"data_ptr={hex(self.address)})")


def make_buffer_view(dtype: Any, buffer_size: int) -> BufferView:
    """
    Allocate a new zero-filled buffer.

    Args:
        dtype: NumPy dtype-like of the elements
        buffer_size: Number of elements
    """
    if buffer_size < 0:
        raise InvalidParameterError(f"Buffer size must be non-negative, got {buffer_size}")
    return BufferView(data=np.zeros(buffer_size, dtype=dtype), buffer_size=buffer_size)


def wrap_buffer_view(array: np.ndarray) -> BufferView:
    """
    Use an existing contiguous array as backing storage.

    Elements are taken in the array's memory order, so writes through any
    window land in ``array``.

    Raises:
        InvalidParameterError: If the array is not contiguous in memory
    """
    array = np.asarray(array)
    if array.flags['C_CONTIGUOUS']:
        flat = array.reshape(-1)
    elif array.flags['F_CONTIGUOUS']:
        flat = array.reshape(-1, order='F')
    else:
        raise InvalidParameterError(
            "Backing array must be contiguous; copy it with np.ascontiguousarray first")
    return BufferView(data=flat, buffer_size=flat.size, owner=array)
