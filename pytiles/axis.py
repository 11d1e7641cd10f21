"""
Axis and CartesianBox: the index spaces that tiles are cut from.

An axis is an ordered, finite, evenly spaced sequence of integer
coordinates. Three variants share one interface:

- ``UNIT``: consecutive integers starting anywhere (``-1, 0, 1, 2``)
- ``STRIDED``: integers with a constant positive step (``1, 3, 5, 7``)
- ``CARTESIAN``: the 1-D Cartesian point analog; elements are 1-tuples
  (``(2,), (3,), (4,)``)

A CartesianBox bundles N scalar axes into one N-dimensional index space
whose elements are N-tuples, visited with the first axis fastest.
"""

import operator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterator, Sequence, Tuple, Union

from .errors import InvalidParameterError, TileBoundsError
from .space_filling_curve import SpaceFillingCurve


class AxisKind(Enum):
    """Representation of an axis."""
    UNIT = auto()
    STRIDED = auto()
    CARTESIAN = auto()


@dataclass(frozen=True, eq=False)
class Axis:
    """
    Evenly spaced integer coordinates.

    Attributes:
        first: First coordinate
        step: Difference between consecutive coordinates (positive)
        length: Number of coordinates (zero allowed)
        kind: Representation of the axis and of its elements
    """
    first: int
    step: int = 1
    length: int = 0
    kind: AxisKind = AxisKind.UNIT

    def __post_init__(self):
        """Validate and normalize the fields."""
        object.__setattr__(self, 'first', operator.index(self.first))
        object.__setattr__(self, 'step', operator.index(self.step))
        object.__setattr__(self, 'length', operator.index(self.length))

        if self.step <= 0:
            raise InvalidParameterError(f"Axis step must be positive, got {self.step}")
        if self.length < 0:
            raise InvalidParameterError(f"Axis length must be non-negative, got {self.length}")
        if self.kind == AxisKind.UNIT and self.step != 1:
            raise InvalidParameterError(
                f"A unit axis has step 1, got {self.step}; use a strided axis")

    @property
    def last(self) -> int:
        """Last coordinate (``first - step`` for an empty axis)."""
        return self.first + (self.length - 1) * self.step

    @property
    def is_cartesian(self) -> bool:
        return self.kind == AxisKind.CARTESIAN

    def is_empty(self) -> bool:
        return self.length == 0

    def __len__(self) -> int:
        return self.length

    def value_at(self, position: int) -> int:
        """
        Get the scalar coordinate at a position, whatever the axis kind.

        Args:
            position: 0-based position (negative counts from the end)

        Raises:
            TileBoundsError: If the position is outside the axis
        """
        if -self.length <= position < 0:
            position += self.length
        if not 0 <= position < self.length:
            raise TileBoundsError(
                f"Position {position} out of range for {self!r} of length {self.length}")
        return self.first + position * self.step

    def __getitem__(self, position: int) -> Union[int, Tuple[int]]:
        value = self.value_at(operator.index(position))
        return (value,) if self.is_cartesian else value

    def __iter__(self) -> Iterator[Union[int, Tuple[int]]]:
        for value in range(self.first, self.first + self.length * self.step, self.step):
            yield (value,) if self.is_cartesian else value

    def _scalar(self, item: Any) -> Any:
        if self.is_cartesian:
            if not (isinstance(item, tuple) and len(item) == 1):
                return None
            item = item[0]
        try:
            return operator.index(item)
        except TypeError:
            return None

    def __contains__(self, item: Any) -> bool:
        value = self._scalar(item)
        if value is None or self.length == 0:
            return False
        offset = value - self.first
        return offset % self.step == 0 and 0 <= offset // self.step < self.length

    def position_of(self, value: int) -> int:
        """
        Get the position of a scalar coordinate.

        Raises:
            TileBoundsError: If the coordinate is not on the axis
        """
        if (value,) not in self.as_cartesian():
            raise TileBoundsError(f"Coordinate {value} is not on {self!r}")
        return (value - self.first) // self.step

    def sub_axis(self, start: int, count: int) -> 'Axis':
        """
        Get the axis of ``count`` consecutive elements starting at a position.

        The result has the same kind and step as this axis.
        """
        if start < 0 or count < 0 or start + count > self.length:
            raise TileBoundsError(
                f"Sub-axis [{start}, {start + count}) out of range for {self!r} "
                f"of length {self.length}")
        return Axis(self.first + start * self.step, self.step, count, self.kind)

    def as_scalar(self) -> 'Axis':
        """Get this axis with integer elements (unwraps a Cartesian axis)."""
        if not self.is_cartesian:
            return self
        kind = AxisKind.UNIT if self.step == 1 else AxisKind.STRIDED
        return Axis(self.first, self.step, self.length, kind)

    def as_cartesian(self) -> 'Axis':
        """Get this axis with 1-tuple elements."""
        if self.is_cartesian:
            return self
        return Axis(self.first, self.step, self.length, AxisKind.CARTESIAN)

    def to_range(self) -> range:
        """Get the scalar coordinates as a Python range."""
        return range(self.first, self.first + self.length * self.step, self.step)

    def _key(self) -> tuple:
        # Equal elements, equal key: an empty axis has no first, a single
        # element has no meaningful step.
        first = self.first if self.length > 0 else None
        step = self.step if self.length > 1 else None
        return (self.is_cartesian, self.length, first, step)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Axis):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if self.length == 0:
            body = f"{self.first}..<empty>"
        else:
            body = f"{self.first}..{self.last}"
        if self.step != 1:
            body += f" step {self.step}"
        if self.is_cartesian:
            return f"CartesianAxis({body})"
        return f"Axis({body})"


def unit_axis(first: int, last: int) -> Axis:
    """Create the axis ``first, first+1, ..., last`` (empty if last < first)."""
    return Axis(first, 1, max(0, last - first + 1), AxisKind.UNIT)


def strided_axis(first: int, step: int, last: int) -> Axis:
    """
    Create the axis ``first, first+step, ...`` up to and including ``last``.

    ``last`` need not be on the axis; the axis stops at the largest element
    not exceeding it.
    """
    if step <= 0:
        raise InvalidParameterError(f"Axis step must be positive, got {step}")
    return Axis(first, step, max(0, (last - first) // step + 1), AxisKind.STRIDED)


def cartesian_axis(first: int, last: int, step: int = 1) -> Axis:
    """Create a Cartesian axis whose elements are ``(first,), ..., (last,)``."""
    if step <= 0:
        raise InvalidParameterError(f"Axis step must be positive, got {step}")
    return Axis(first, step, max(0, (last - first) // step + 1), AxisKind.CARTESIAN)


AxisLike = Union[Axis, range, Tuple[int, int]]


def make_axis(obj: AxisLike) -> Axis:
    """
    Convert an axis-like object into an Axis.

    Accepts an Axis (returned unchanged), a Python ``range`` with positive
    step, or a ``(first, last)`` pair of integers (inclusive).
    """
    if isinstance(obj, Axis):
        return obj
    if isinstance(obj, range):
        if obj.step <= 0:
            raise InvalidParameterError(f"Axis step must be positive, got {obj.step}")
        kind = AxisKind.UNIT if obj.step == 1 else AxisKind.STRIDED
        return Axis(obj.start, obj.step, len(obj), kind)
    if isinstance(obj, (tuple, list)) and len(obj) == 2:
        return unit_axis(operator.index(obj[0]), operator.index(obj[1]))
    raise TypeError(f"Cannot interpret {obj!r} as an axis; expected Axis, range or (first, last)")


def axes_of(shape_or_array: Any) -> Tuple[Axis, ...]:
    """
    Get 0-based unit axes for an array shape.

    Args:
        shape_or_array: An integer, a shape tuple, or anything with ``.shape``
    """
    shape = getattr(shape_or_array, 'shape', shape_or_array)
    if isinstance(shape, int):
        shape = (shape,)
    return tuple(unit_axis(0, operator.index(n) - 1) for n in shape)


@dataclass(frozen=True, eq=False)
class CartesianBox:
    """
    N-dimensional rectangular index space.

    Elements are N-tuples of coordinates, visited with the first axis
    fastest.

    Attributes:
        axes: One scalar axis per dimension
    """
    axes: Tuple[Axis, ...]

    def __post_init__(self):
        """Convert axes to scalar axes and set up the traversal curve."""
        axes = tuple(make_axis(ax).as_scalar() for ax in self.axes)
        if not axes:
            raise InvalidParameterError("A CartesianBox needs at least one axis")
        object.__setattr__(self, 'axes', axes)
        object.__setattr__(self, '_curve', SpaceFillingCurve([len(ax) for ax in axes]))

    @property
    def ndim(self) -> int:
        return len(self.axes)

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(len(ax) for ax in self.axes)

    @property
    def first(self) -> Tuple[int, ...]:
        """First corner."""
        return tuple(ax.first for ax in self.axes)

    @property
    def last(self) -> Tuple[int, ...]:
        """Last corner."""
        return tuple(ax.last for ax in self.axes)

    def is_empty(self) -> bool:
        return self._curve.size == 0

    def is_unit_step(self) -> bool:
        return all(ax.step == 1 for ax in self.axes)

    def __len__(self) -> int:
        return self._curve.size

    def __getitem__(self, i_linear: int) -> Tuple[int, ...]:
        positions = self._curve.get_index(operator.index(i_linear))
        return tuple(ax.value_at(p) for ax, p in zip(self.axes, positions))

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        if self.is_empty():
            return
        ranges = [ax.to_range() for ax in self.axes]
        coord = [r[0] for r in ranges]
        positions = [0] * self.ndim
        while True:
            yield tuple(coord)
            d = 0
            while d < self.ndim:
                positions[d] += 1
                if positions[d] < len(ranges[d]):
                    coord[d] = ranges[d][positions[d]]
                    break
                positions[d] = 0
                coord[d] = ranges[d][0]
                d += 1
            else:
                return

    def __contains__(self, item: Any) -> bool:
        if not isinstance(item, tuple) or len(item) != self.ndim:
            return False
        return all((value,) in ax.as_cartesian() for value, ax in zip(item, self.axes))

    def cartesian_axes(self) -> Tuple[Axis, ...]:
        """Get the axes as 1-D Cartesian axes."""
        return tuple(ax.as_cartesian() for ax in self.axes)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CartesianBox):
            return NotImplemented
        return self.axes == other.axes

    def __hash__(self) -> int:
        return hash(self.axes)

    def __repr__(self) -> str:
        inner = ", ".join(repr(ax)[len("Axis("):-1] for ax in self.axes)
        return f"CartesianBox({inner})"


BoxLike = Union[CartesianBox, int, Sequence[AxisLike]]


def make_box(obj: BoxLike) -> CartesianBox:
    """
    Convert a box-like object into a CartesianBox.

    Accepts a CartesianBox (returned unchanged), an integer length or a
    tuple of integers (a 0-based shape), or a sequence of axis-likes.
    """
    if isinstance(obj, CartesianBox):
        return obj
    if isinstance(obj, int):
        return CartesianBox(axes_of(obj))
    if isinstance(obj, (tuple, list)) and obj and all(isinstance(x, int) for x in obj):
        return CartesianBox(axes_of(tuple(obj)))
    if isinstance(obj, (tuple, list)):
        return CartesianBox(tuple(make_axis(ax) for ax in obj))
    raise TypeError(f"Cannot interpret {obj!r} as a CartesianBox")
