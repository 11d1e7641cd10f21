"""
Tests for cache-based tile sizing.
"""

import math

import pytest
import numpy as np

from pytiles.cache_sizer import padded_tilesize
from pytiles.config import CacheConfig, DEFAULT_CACHE_CONFIG, get_default_cache_config
from pytiles.errors import InvalidParameterError


class TestPaddedTilesize:
    """Test cases for padded_tilesize."""

    def test_one_dimensional(self):
        """Test 1-D kernels fill the cache budget exactly."""
        assert padded_tilesize(np.uint8, (1,)) == (2 ** 14,)
        assert padded_tilesize(np.uint16, (1,)) == (2 ** 13,)
        assert padded_tilesize(np.float64, (1,)) == (2 ** 11,)

    def test_trailing_unit_axes(self):
        """Test that axes of length 1 stay 1."""
        assert padded_tilesize(np.float64, (1, 1)) == (2 ** 11, 1)
        assert padded_tilesize(np.float64, (2, 1)) == (2 ** 11, 1)

    @pytest.mark.parametrize("kernel", [(2, 2), (3, 3, 3)])
    def test_multi_dimensional(self, kernel):
        """Test tiles are larger than the kernel and fill half to all of L1."""
        ts = padded_tilesize(np.float64, kernel)
        assert all(t > k for t, k in zip(ts, kernel))
        nbytes = math.prod(ts) * 8
        assert 2 ** 13 <= nbytes <= 2 ** 14

    def test_known_shapes(self):
        """Test exact results for common kernels."""
        assert padded_tilesize(np.float64, (2, 2)) == (128, 16)
        assert padded_tilesize(np.float64, (3, 3, 3)) == (32, 6, 6)

    def test_itemsize_as_int(self):
        """Test passing the element size in bytes."""
        assert padded_tilesize(8, (2, 2)) == padded_tilesize(np.float64, (2, 2))

    def test_custom_cache(self):
        """Test a larger L1 cache and a single buffer."""
        assert padded_tilesize(np.float64, (1,), config=CacheConfig(l1_cache_size=2 ** 16)) == (4096,)
        assert padded_tilesize(np.float64, (1,), num_buffers=1) == (4096,)

    def test_warns_when_over_budget(self):
        """Test that a kernel too large for L1 still gets a tile, with a warning."""
        with pytest.warns(UserWarning):
            ts = padded_tilesize(np.float64, (64, 64))
        assert ts == (128, 128)

    def test_invalid(self):
        """Test invalid kernels, buffer counts and element sizes."""
        with pytest.raises(InvalidParameterError):
            padded_tilesize(np.float64, (0,))
        with pytest.raises(InvalidParameterError):
            padded_tilesize(np.float64, ())
        with pytest.raises(InvalidParameterError):
            padded_tilesize(np.float64, (2, 2), num_buffers=0)
        with pytest.raises(InvalidParameterError):
            padded_tilesize(0, (2, 2))


class TestCacheConfig:
    """Test cases for the cache configuration."""

    def test_defaults(self):
        """Test the default cache geometry."""
        assert DEFAULT_CACHE_CONFIG.l1_cache_size == 2 ** 15
        assert DEFAULT_CACHE_CONFIG.cache_line_size == 64
        assert get_default_cache_config() is DEFAULT_CACHE_CONFIG

    def test_invalid(self):
        """Test non-positive sizes."""
        with pytest.raises(InvalidParameterError):
            CacheConfig(l1_cache_size=0)
        with pytest.raises(InvalidParameterError):
            CacheConfig(cache_line_size=-64)
