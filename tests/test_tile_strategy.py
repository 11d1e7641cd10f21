"""
Tests for tile strategies.
"""

import dataclasses

import pytest

from pytiles.axis import unit_axis, cartesian_axis, make_box
from pytiles.tile_range import TilePolicy, FixedTileRange, RelaxedTileRange
from pytiles.tile_strategy import FixedTile, RelaxedTile, make_tile_strategy
from pytiles.errors import InvalidParameterError


class TestFixedTile:
    """Test cases for the FixedTile strategy."""

    def test_defaults(self):
        """Test that the stride defaults to the size and keep_last to True."""
        s = FixedTile(4)
        assert s.size == 4
        assert s.stride == 4
        assert s.keep_last is True
        assert s.policy == TilePolicy.KEEP_LAST
        assert FixedTile(4, keep_last=False).policy == TilePolicy.DISCARD_LAST

    def test_value_equality(self):
        """Test that strategies compare by value."""
        assert FixedTile(4, 2) == FixedTile(4, 2, keep_last=True)
        assert FixedTile(4) == FixedTile(4, 4)
        assert FixedTile([4, 4]) == FixedTile((4, 4))
        assert FixedTile(4, 2) != FixedTile(4, 2, keep_last=False)

    def test_sequence_parameters(self):
        """Test that lists are stored as tuples."""
        s = FixedTile([3, 4], [2, 3])
        assert s.size == (3, 4)
        assert s.stride == (2, 3)

    def test_immutable(self):
        """Test that strategies cannot be modified."""
        s = FixedTile(4)
        with pytest.raises(dataclasses.FrozenInstanceError):
            s.size = 5

    def test_single_axis(self, axis_2_10):
        """Test applying a strategy to one axis."""
        r = FixedTile(4, 2)(axis_2_10)
        assert isinstance(r, FixedTileRange)
        assert r == FixedTileRange(axis_2_10, 4, 2)
        assert FixedTile(4)(range(2, 11)) == FixedTileRange(axis_2_10, 4)
        assert FixedTile((4,))(axis_2_10) == FixedTileRange(axis_2_10, 4)

    @pytest.mark.parametrize("ndim", [2, 3])
    def test_multiple_axes(self, axis_2_10, ndim):
        """Test scalar and per-axis parameters over several axes."""
        indices = (axis_2_10,) * ndim
        expected = FixedTileRange(axis_2_10, 4, 2)
        for size, stride in [(4, 2), ((4,) * ndim, (2,) * ndim), ([4] * ndim, [2] * ndim)]:
            ranges = FixedTile(size, stride)(indices)
            assert isinstance(ranges, tuple)
            assert len(ranges) == ndim
            assert all(r == expected for r in ranges)

    def test_cartesian_box(self, axis_2_10):
        """Test that a box is tiled over its Cartesian axes."""
        ranges = FixedTile(4, 2)(make_box((axis_2_10, axis_2_10)))
        expected = FixedTileRange(cartesian_axis(2, 10), 4, 2)
        assert all(r == expected for r in ranges)
        assert ranges[0].first() == cartesian_axis(2, 5)

    def test_per_axis_mismatch(self):
        """Test that per-axis sequences must match the dimension count."""
        with pytest.raises(InvalidParameterError):
            FixedTile((3, 4))((range(5),) * 3)
        with pytest.raises(InvalidParameterError):
            FixedTile(3, (1, 2))((range(5),) * 3)
        with pytest.raises(InvalidParameterError):
            FixedTile((3, 4))(range(5))

    def test_invalid_parameters(self):
        """Test that non-positive parameters raise."""
        with pytest.raises(InvalidParameterError):
            FixedTile(0)
        with pytest.raises(InvalidParameterError):
            FixedTile(3, 0)
        with pytest.raises(InvalidParameterError):
            FixedTile((3, -1))
        with pytest.raises(InvalidParameterError):
            FixedTile(())


class TestRelaxedTile:
    """Test cases for the RelaxedTile strategy."""

    def test_policy_and_application(self):
        """Test the relaxed policy over one and several axes."""
        s = RelaxedTile(4)
        assert s.policy == TilePolicy.RELAXED
        assert s(unit_axis(1, 10)) == RelaxedTileRange(unit_axis(1, 10), 4)
        ranges = RelaxedTile((4, 3))((range(10), range(7)))
        assert ranges == (RelaxedTileRange(range(10), 4), RelaxedTileRange(range(7), 3))

    def test_invalid(self):
        """Test invalid sizes and axes that are too short."""
        with pytest.raises(InvalidParameterError):
            RelaxedTile(-1)
        with pytest.raises(InvalidParameterError):
            RelaxedTile(5)(unit_axis(1, 4))


class TestMakeTileStrategy:
    """Test creation of strategies from policies."""

    def test_policies(self):
        """Test each policy maps to the matching strategy."""
        assert make_tile_strategy(TilePolicy.KEEP_LAST, 4, 2) == FixedTile(4, 2)
        assert make_tile_strategy(TilePolicy.DISCARD_LAST, 4) == FixedTile(4, keep_last=False)
        assert make_tile_strategy(TilePolicy.RELAXED, (4, 4)) == RelaxedTile((4, 4))

    def test_relaxed_rejects_stride(self):
        """Test that the relaxed policy takes no stride."""
        with pytest.raises(InvalidParameterError):
            make_tile_strategy(TilePolicy.RELAXED, 4, 2)
