"""
Linear <-> multi-index mapping for rectangular index grids.

Tiles, Cartesian boxes and edge coordinates are all enumerated through a
space-filling curve over a grid of lengths. The default curve visits the
first dimension fastest, matching the column-major memory layout the tiles
are meant to index into.
"""

from typing import List, Optional, Sequence, Tuple

from .errors import InvalidParameterError, TileBoundsError


class SpaceFillingCurve:
    """
    Space-filling curve over a rectangular grid.

    ``dim_access_order`` lists the dimensions from slowest to fastest. The
    default, ``[ndim-1, ..., 1, 0]``, makes dimension 0 vary fastest.
    """

    def __init__(self, lengths: Sequence[int],
                 dim_access_order: Optional[Sequence[int]] = None):
        """
        Initialize space-filling curve.

        Args:
            lengths: Length of each dimension (zero allowed)
            dim_access_order: Order to traverse dimensions, slowest first
        """
        self.lengths = tuple(int(length) for length in lengths)
        self.ndim = len(self.lengths)

        if any(length < 0 for length in self.lengths):
            raise InvalidParameterError(
                f"Grid lengths must be non-negative, got {self.lengths}")

        if dim_access_order is None:
            dim_access_order = range(self.ndim - 1, -1, -1)
        self.dim_access_order = tuple(dim_access_order)
        if sorted(self.dim_access_order) != list(range(self.ndim)):
            raise InvalidParameterError(
                f"dim_access_order {self.dim_access_order} is not a permutation "
                f"of {self.ndim} dimensions")

        self.ordered_lengths = tuple(self.lengths[d] for d in self.dim_access_order)

        self.size = 1
        for length in self.lengths:
            self.size *= length

    def get_num_of_access(self) -> int:
        """Get total number of grid points."""
        return self.size

    def normalize(self, i_access: int) -> int:
        """
        Resolve a possibly negative access number and check bounds.

        Raises:
            TileBoundsError: If the access number is outside the grid
        """
        if -self.size <= i_access < 0:
            i_access += self.size
        if not 0 <= i_access < self.size:
            raise TileBoundsError(
                f"Linear index {i_access} out of range for grid of shape "
                f"{self.lengths} ({self.size} points)")
        return i_access

    def get_index(self, i_access: int) -> Tuple[int, ...]:
        """
        Get the multi-index of an access number.

        Args:
            i_access: Access number (negative counts from the end)

        Returns:
            Tuple of 0-based positions, one per dimension
        """
        remaining = self.normalize(i_access)

        indices = [0] * self.ndim
        for i in range(self.ndim - 1, -1, -1):
            length = self.ordered_lengths[i]
            indices[self.dim_access_order[i]] = remaining % length
            remaining //= length

        return tuple(indices)

    def get_access(self, index: Sequence[int]) -> int:
        """
        Get the access number of a multi-index; inverse of get_index.

        Raises:
            TileBoundsError: If the multi-index is outside the grid
        """
        if len(index) != self.ndim:
            raise TileBoundsError(
                f"Index {tuple(index)} has {len(index)} dimensions, "
                f"grid has {self.ndim}")
        for position, length in zip(index, self.lengths):
            if not 0 <= position < length:
                raise TileBoundsError(
                    f"Index {tuple(index)} out of range for grid of shape {self.lengths}")

        i_access = 0
        for d in self.dim_access_order:
            i_access = i_access * self.lengths[d] + index[d]
        return i_access

    def get_step_between(self, start_access: int, end_access: int) -> List[int]:
        """
        Get step between two access numbers.

        Returns:
            List of step sizes for each dimension
        """
        start_indices = self.get_index(start_access)
        end_indices = self.get_index(end_access)

        return [
            end_indices[i] - start_indices[i]
            for i in range(self.ndim)
        ]

    def get_forward_step(self, i_access: int) -> List[int]:
        """Get step to the next access position."""
        return self.get_step_between(i_access, i_access + 1)
