from __future__ import annotations


class GeometryException(Exception):
    """A general geometric error occurred."""


class DimensionMismatch(GeometryException, ValueError):
    """The inputs do not share a dimension, or a construction was requested in an unsupported dimension."""


class LengthMismatch(GeometryException, ValueError):
    """The inputs are neither scalar nor of a common length."""


class UnsupportedCombination(GeometryException, TypeError):
    """No known construction matches the given combination of argument kinds."""


class DegenerateConstruction(GeometryException, ValueError):
    """The given values are in a degenerate configuration, making the construction impossible.

    Attributes:
        index (int | None): The position in the input vectors of the degenerate configuration, if known.

    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class ConversionUnsupported(GeometryException, TypeError):
    """The requested conversion between geometric kinds is not defined."""
