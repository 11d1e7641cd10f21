"""
Cache-friendly tile sizes for stencil-style computations.

If ``kernel_size - 1`` is the amount of padding a stencil needs and ``s``
is the extra width of a tile along each axis, the fraction of useful to
total work is ``prod(s) / prod(s + kernel_size)``. That ratio is best when
``s`` is proportional to ``kernel_size``, so tiles are the kernel footprint
scaled by one common factor, as large as the L1 cache allows.
"""

import logging
import operator
import warnings
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .config import CacheConfig, get_default_cache_config
from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

MIN_SCALE = 2


def _itemsize(dtype: Any) -> int:
    if isinstance(dtype, int) and not isinstance(dtype, bool):
        itemsize = dtype
    else:
        try:
            itemsize = np.dtype(dtype).itemsize
        except TypeError:
            raise InvalidParameterError(f"Cannot interpret {dtype!r} as a dtype") from None
    if itemsize <= 0:
        raise InvalidParameterError(f"Element size must be positive, got {itemsize}")
    return itemsize


def _largest_scale(budget: int, footprint: int, nd: int) -> int:
    """Largest integer ``f`` with ``footprint * f**nd <= budget`` (0 if none)."""
    if footprint > budget:
        return 0
    f = int((budget / footprint) ** (1.0 / nd))
    # Correct the float estimate in exact integers
    while footprint * (f + 1) ** nd <= budget:
        f += 1
    while f > 0 and footprint * f ** nd > budget:
        f -= 1
    return f


def padded_tilesize(dtype: Any, kernel_size: Sequence[int], num_buffers: int = 2,
                    config: Optional[CacheConfig] = None) -> Tuple[int, ...]:
    """
    Suggest a tile shape for a stencil of the given footprint.

    The first axis is assumed to be the fastest-varying one in memory and is
    widened to at least two cache lines. All axes longer than 1 are then
    scaled by the largest common factor (at least 2) that keeps
    ``num_buffers`` tiles within the L1 cache.

    Args:
        dtype: NumPy dtype-like, or the element size in bytes
        kernel_size: Extent of the stencil footprint along each axis
        num_buffers: Number of tile-sized buffers that must fit together
        config: Cache geometry; defaults to get_default_cache_config()

    Returns:
        Suggested tile length along each axis

    Examples:
        ``padded_tilesize(np.uint8, (1,))`` -> ``(16384,)``
        ``padded_tilesize(np.float64, (2, 2))`` -> ``(128, 16)``
    """
    config = config or get_default_cache_config()
    itemsize = _itemsize(dtype)
    sz = tuple(operator.index(x) for x in kernel_size)
    if not sz:
        raise InvalidParameterError("kernel_size must have at least one axis")
    if any(x <= 0 for x in sz):
        raise InvalidParameterError(f"Kernel extents must be positive, got {sz}")
    if num_buffers <= 0:
        raise InvalidParameterError(f"num_buffers must be positive, got {num_buffers}")

    nd = max(1, sum(1 for x in sz if x > 1))
    dim1_min_length = 2 * config.cache_line_size // itemsize
    padded = (max(sz[0], dim1_min_length),) + sz[1:]

    footprint = num_buffers * itemsize
    for x in padded:
        footprint *= x

    f = max(_largest_scale(config.l1_cache_size, footprint, nd), MIN_SCALE)
    result = tuple(x if x <= 1 else f * x for x in padded)

    total = num_buffers * itemsize
    for x in result:
        total *= x
    if total > config.l1_cache_size:
        warnings.warn(
            f"Tile shape {result} for kernel {sz} needs {total} bytes for {num_buffers} "
            f"buffers, more than the {config.l1_cache_size} byte L1 cache")
    logger.debug("padded_tilesize(itemsize=%d, kernel=%s) -> %s (scale %d)",
                 itemsize, sz, result, f)
    return result
