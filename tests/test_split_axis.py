"""
Tests for splitting axes into work chunks.
"""

import math
from fractions import Fraction

import pytest

from pytiles.axis import unit_axis, strided_axis
from pytiles.split_axis import SplitAxis, SplitAxes, compute_splits
from pytiles.errors import InvalidParameterError, TileBoundsError


class TestSplitAxis:
    """Test cases for SplitAxis."""

    def test_even_split(self):
        """Test an axis that divides evenly."""
        s = SplitAxis(unit_axis(1, 16), 4)
        assert len(s) == 4
        assert s.splits == (0, 4, 8, 12, 16)
        assert list(s) == [unit_axis(1, 4), unit_axis(5, 8), unit_axis(9, 12), unit_axis(13, 16)]

    def test_fractional_split(self):
        """Test that a fractional count makes a short first chunk."""
        s = SplitAxis(unit_axis(1, 16), 3.5)
        assert len(s) == 4
        assert list(s) == [unit_axis(1, 1), unit_axis(2, 6), unit_axis(7, 11), unit_axis(12, 16)]
        assert SplitAxis(unit_axis(1, 16), Fraction(7, 2)).splits == s.splits

    def test_single_chunk(self):
        """Test m=1."""
        s = SplitAxis(range(-5, 5), 1)
        assert list(s) == [unit_axis(-5, 4)]

    def test_offset_axis(self):
        """Test an axis that starts below zero."""
        s = SplitAxis(range(-5, 5), 3)
        assert list(s) == [unit_axis(-5, -4), unit_axis(-3, 0), unit_axis(1, 4)]

    def test_balanced_fallback(self):
        """Test that an overshooting layout is balanced instead."""
        s = SplitAxis(unit_axis(1, 10), 6)
        assert [len(chunk) for chunk in s] == [1, 1, 2, 2, 2, 2]
        assert s.splits == (0, 1, 2, 4, 6, 8, 10)

    def test_indexing(self):
        """Test negative and out-of-range chunk indices."""
        s = SplitAxis(unit_axis(1, 16), 4)
        assert s[-1] == unit_axis(13, 16)
        with pytest.raises(TileBoundsError):
            s[4]
        with pytest.raises(IndexError):
            s[-5]

    def test_invalid(self):
        """Test invalid chunk counts and axes."""
        for m in (0, 0.5, -2, float('nan'), float('inf'), "x", None):
            with pytest.raises(InvalidParameterError):
                SplitAxis(unit_axis(1, 16), m)
        with pytest.raises(InvalidParameterError):
            SplitAxis(unit_axis(1, 3), 5)
        with pytest.raises(InvalidParameterError):
            SplitAxis(unit_axis(1, 3), 3.01)
        with pytest.raises(InvalidParameterError):
            SplitAxis(unit_axis(1, 0), 1)
        with pytest.raises(ValueError):
            SplitAxis(strided_axis(1, 2, 15), 2)

    def test_exhaustive(self):
        """Test chunk properties over many lengths and counts."""
        for length in range(1, 41):
            axis = unit_axis(7, 7 + length - 1)
            for m in (1, 1.5, 2, 2.3, 3, 4.75, 7, length, Fraction(length, 3)):
                if m < 1 or math.ceil(m) > length:
                    continue
                s = SplitAxis(axis, m)
                chunks = list(s)
                assert len(chunks) == math.ceil(m)
                assert [v for chunk in chunks for v in chunk] == list(axis)
                assert all(len(chunk) > 0 for chunk in chunks)
                assert len(chunks[0]) <= min(len(chunk) for chunk in chunks)
                assert s.splits[0] == axis.first - 1
                assert s.splits[-1] == axis.last
                assert list(s.splits) == compute_splits(axis, m)


class TestSplitAxes:
    """Test cases for SplitAxes."""

    def test_split_last_axis(self):
        """Test that only the last axis is split."""
        s = SplitAxes((range(0, 3), range(1, 17)), 4)
        assert len(s) == 4
        assert s[0] == (unit_axis(0, 2), unit_axis(1, 4))
        assert list(s)[-1] == (unit_axis(0, 2), unit_axis(13, 16))
        assert s.split.splits == SplitAxis(range(1, 17), 4).splits

    def test_leading_axes_unchanged(self):
        """Test that each chunk keeps the leading axes."""
        leading = (unit_axis(-1, 4), strided_axis(0, 2, 10))
        s = SplitAxes(leading + (unit_axis(1, 16),), 3.5)
        for chunk in s:
            assert chunk[:2] == leading
        assert [len(chunk[-1]) for chunk in s] == [1, 5, 5, 5]

    def test_no_axes(self):
        """Test that at least one axis is needed."""
        with pytest.raises(InvalidParameterError):
            SplitAxes((), 2)
