"""
PyTiles - tiled iteration over multi-dimensional index spaces

This package splits index spaces into tiles for cache blocking, work
distribution and boundary handling, and provides reusable scratch buffers
for processing those tiles.
"""

import logging

# Errors
from .errors import (
    PyTilesError,
    InvalidParameterError,
    GeometryViolationError,
    TileBoundsError,
    SizeMismatchError
)

# Configuration
from .config import (
    CacheConfig,
    DEFAULT_CACHE_CONFIG,
    get_default_cache_config
)

# Axes and boxes
from .axis import (
    AxisKind,
    Axis,
    CartesianBox,
    unit_axis,
    strided_axis,
    cartesian_axis,
    make_axis,
    make_box,
    axes_of
)

# Index ordering
from .space_filling_curve import SpaceFillingCurve

# Per-axis tiling
from .tile_range import (
    TilePolicy,
    TileRange,
    FixedTileRange,
    RelaxedTileRange
)

# Tile strategies
from .tile_strategy import (
    TileStrategy,
    FixedTile,
    RelaxedTile,
    make_tile_strategy
)

# N-dimensional tiles
from .tile_indices import (
    TileIndices,
    make_tile_indices,
    make_tile_iterator
)

# Boundary iteration
from .edge_iterator import EdgeIterator

# Work splitting
from .split_axis import (
    SplitAxis,
    SplitAxes,
    compute_splits
)

# Buffers and views
from .buffer_view import (
    BufferView,
    make_buffer_view,
    wrap_buffer_view
)
from .offset_view import (
    OffsetView,
    make_offset_view,
    make_offset_view_from_flat
)
from .tile_buffer import (
    TileBuffer,
    make_tile_buffer,
    wrap_tile_buffer,
    reshape_tile_buffer
)

# Tile sizing
from .cache_sizer import padded_tilesize

# Sweeping arrays
from .sweep_tile import (
    tile_to_slices,
    sweep_tiles
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Errors
    'PyTilesError',
    'InvalidParameterError',
    'GeometryViolationError',
    'TileBoundsError',
    'SizeMismatchError',

    # Configuration
    'CacheConfig',
    'DEFAULT_CACHE_CONFIG',
    'get_default_cache_config',

    # Axes and boxes
    'AxisKind',
    'Axis',
    'CartesianBox',
    'unit_axis',
    'strided_axis',
    'cartesian_axis',
    'make_axis',
    'make_box',
    'axes_of',

    # Index ordering
    'SpaceFillingCurve',

    # Per-axis tiling
    'TilePolicy',
    'TileRange',
    'FixedTileRange',
    'RelaxedTileRange',

    # Tile strategies
    'TileStrategy',
    'FixedTile',
    'RelaxedTile',
    'make_tile_strategy',

    # N-dimensional tiles
    'TileIndices',
    'make_tile_indices',
    'make_tile_iterator',

    # Boundary iteration
    'EdgeIterator',

    # Work splitting
    'SplitAxis',
    'SplitAxes',
    'compute_splits',

    # Buffers and views
    'BufferView',
    'make_buffer_view',
    'wrap_buffer_view',
    'OffsetView',
    'make_offset_view',
    'make_offset_view_from_flat',
    'TileBuffer',
    'make_tile_buffer',
    'wrap_tile_buffer',
    'reshape_tile_buffer',

    # Tile sizing
    'padded_tilesize',

    # Sweeping arrays
    'tile_to_slices',
    'sweep_tiles',
]

__version__ = '0.1.0'
