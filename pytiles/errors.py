"""
Exception types raised by pytiles.

Each error kind subclasses the built-in exception that Python code would
normally catch for the same situation, so callers can catch either the
specific pytiles error or the plain ``ValueError`` / ``IndexError``.
"""


class PyTilesError(Exception):
    """Base class for all pytiles errors."""


class InvalidParameterError(PyTilesError, ValueError):
    """A tile length, stride, chunk count or similar parameter is invalid."""


class GeometryViolationError(PyTilesError, ValueError):
    """Two regions are not nested the way an operation requires."""


class TileBoundsError(PyTilesError, IndexError):
    """An index lies outside a computed shape or region."""


class SizeMismatchError(PyTilesError, ValueError):
    """
    A requested region does not fit the storage it should live in.

    Attributes:
        requested: Number of elements requested
        available: Number of elements available
    """

    def __init__(self, message: str, requested: int = None, available: int = None):
        super().__init__(message)
        self.requested = requested
        self.available = available
