import pytest
from pytiles.space_filling_curve import SpaceFillingCurve
from pytiles.errors import InvalidParameterError, TileBoundsError


class TestSpaceFillingCurve:

    def test_initialization(self):
        """Test basic initialization of the space-filling curve."""
        sfc = SpaceFillingCurve([10, 20])
        assert sfc.size == 200
        assert sfc.ndim == 2
        assert sfc.get_num_of_access() == 200

    def test_default_order_first_dimension_fastest(self):
        """Test that dimension 0 varies fastest by default."""
        sfc = SpaceFillingCurve([2, 3])
        assert sfc.dim_access_order == (1, 0)
        assert [sfc.get_index(i) for i in range(6)] == [
            (0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2)
        ]

    def test_explicit_order_last_dimension_fastest(self):
        """Test index calculation with the last dimension varying fastest."""
        sfc = SpaceFillingCurve([2, 2], dim_access_order=[0, 1])
        assert sfc.get_index(0) == (0, 0)
        assert sfc.get_index(1) == (0, 1)
        assert sfc.get_index(2) == (1, 0)
        assert sfc.get_index(3) == (1, 1)

    def test_ordered_lengths(self):
        """Test lengths listed in traversal order, slowest first."""
        sfc = SpaceFillingCurve([4, 5, 6])
        assert sfc.ordered_lengths == (6, 5, 4)

    def test_get_access_inverts_get_index(self):
        """Test that get_access is the inverse of get_index."""
        sfc = SpaceFillingCurve([3, 4, 2])
        for i in range(sfc.size):
            assert sfc.get_access(sfc.get_index(i)) == i

    def test_negative_index(self):
        """Test that negative access numbers count from the end."""
        sfc = SpaceFillingCurve([3, 4])
        assert sfc.get_index(-1) == (2, 3)
        assert sfc.get_index(-12) == (0, 0)

    def test_out_of_range(self):
        """Test that out-of-range access numbers raise."""
        sfc = SpaceFillingCurve([3, 4])
        with pytest.raises(TileBoundsError):
            sfc.get_index(12)
        with pytest.raises(TileBoundsError):
            sfc.get_index(-13)
        with pytest.raises(IndexError):
            sfc.get_access((3, 0))
        with pytest.raises(TileBoundsError):
            sfc.get_access((0,))

    def test_zero_length_grid(self):
        """Test that a grid with an empty dimension has no points."""
        sfc = SpaceFillingCurve([10, 0])
        assert sfc.get_num_of_access() == 0
        with pytest.raises(TileBoundsError):
            sfc.get_index(0)

    def test_zero_dimensional_grid(self):
        """Test that a grid with no dimensions has a single point."""
        sfc = SpaceFillingCurve([])
        assert sfc.get_num_of_access() == 1
        assert sfc.get_index(0) == ()

    def test_invalid_initialization(self):
        """Test that invalid lengths and orders raise."""
        with pytest.raises(InvalidParameterError):
            SpaceFillingCurve([3, -1])
        with pytest.raises(InvalidParameterError):
            SpaceFillingCurve([3, 4], dim_access_order=[0, 0])
        with pytest.raises(ValueError):
            SpaceFillingCurve([3, 4], dim_access_order=[0, 1, 2])

    def test_get_step_between(self):
        """Test step calculation between access positions."""
        sfc = SpaceFillingCurve([2, 2])
        assert sfc.get_step_between(0, 1) == [1, 0]
        assert sfc.get_step_between(1, 2) == [-1, 1]
        assert sfc.get_forward_step(2) == [1, 0]
