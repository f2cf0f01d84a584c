from __future__ import annotations

import math
from collections.abc import Sequence
from numbers import Integral, Rational, Real
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import sympy

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

    from geomvec.utils.typing import ExactCoords, ExactScalar, NumericalScalar


def is_numerical_dtype(dtype: npt.DTypeLike) -> bool:
    """Checks whether a dtype is a real numerical dtype, i.e. an integer or floating point type.

    Unlike numpy, booleans are not considered numbers.

    Args:
        dtype: The dtype to check.

    Returns:
        True if the dtype is an integer or floating point dtype.

    """
    dtype = np.dtype(dtype)
    return np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating)


def is_missing_value(element: object) -> bool:
    """Checks whether an element marks a missing value, i.e. is None or NaN."""
    if element is None or element is sympy.nan:
        return True
    if isinstance(element, (float, np.floating)):
        return bool(np.isnan(element))
    return False


def is_numerical_scalar(element: object) -> TypeGuard[NumericalScalar]:
    """Checks whether an element is a real number that can be converted to an exact number.

    0-dimensional arrays are considered scalars, too. Booleans and complex numbers are not numerical scalars.

    Args:
        element: The element to check.

    Returns:
        True if the element is a numerical scalar.

    """
    if isinstance(element, (bool, np.bool_)):
        return False
    if isinstance(element, sympy.Basic):
        return bool(element.is_Rational or element.is_Float or element is sympy.nan)
    if isinstance(element, (Real, np.integer, np.floating)):
        return True
    if isinstance(element, np.ndarray) and element.ndim == 0:
        return is_numerical_dtype(element.dtype)
    return False


def is_numeric(element: object) -> bool:
    """Checks whether an element is raw numeric input, i.e. a numerical scalar or a flat sequence of them.

    Missing values (None and NaN) are allowed inside sequences.

    Args:
        element: The element to check.

    Returns:
        True if the element can be promoted to a vector of exact numbers.

    """
    if is_numerical_scalar(element):
        return True
    if isinstance(element, np.ndarray):
        if element.ndim != 1:
            return False
        if is_numerical_dtype(element.dtype):
            return True
        if element.dtype != object:
            return False
    elif isinstance(element, (str, bytes)) or not isinstance(element, Sequence):
        return False
    return all(x is None or is_numerical_scalar(x) for x in element)


def to_exact(element: object) -> ExactScalar | None:
    """Converts a numerical scalar to an exact sympy number.

    Floating point values are converted exactly, i.e. ``0.1`` becomes the rational number closest to it in binary.

    Args:
        element: The number to convert.

    Returns:
        The exact number or None if the element is a missing value.

    Raises:
        ValueError: If the element is infinite.
        TypeError: If the element is not a numerical scalar.

    """
    if is_missing_value(element):
        return None
    if isinstance(element, sympy.Rational):
        return element
    if isinstance(element, sympy.Float):
        return sympy.Rational(element)
    if isinstance(element, np.ndarray) and element.ndim == 0:
        return to_exact(element.item())
    if isinstance(element, (bool, np.bool_)):
        raise TypeError("Booleans cannot be converted to exact numbers")
    if isinstance(element, (Integral, np.integer)):
        return sympy.Integer(int(element))
    if isinstance(element, Rational):
        return sympy.Rational(int(element.numerator), int(element.denominator))
    if isinstance(element, (Real, np.floating)):
        if not math.isfinite(element):
            raise ValueError(f"Infinite values cannot be represented exactly, got {element}")
        return sympy.Rational(float(element))
    raise TypeError(f"Cannot convert {type(element).__name__} to an exact number")


def add(a: ExactCoords, b: ExactCoords) -> ExactCoords:
    return tuple(x + y for x, y in zip(a, b))


def sub(a: ExactCoords, b: ExactCoords) -> ExactCoords:
    return tuple(x - y for x, y in zip(a, b))


def scale(a: ExactCoords, factor: ExactScalar) -> ExactCoords:
    return tuple(x * factor for x in a)


def dot(a: ExactCoords, b: ExactCoords) -> ExactScalar:
    return sum((x * y for x, y in zip(a, b)), sympy.Integer(0))


def cross(a: ExactCoords, b: ExactCoords) -> ExactCoords:
    """Calculates the cross product of two 3-dimensional coordinate tuples."""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def is_zero(a: ExactCoords) -> bool:
    return all(x == 0 for x in a)


def solve_linear(rows: Sequence[ExactCoords], rhs: ExactCoords) -> ExactCoords:
    r"""Solves the square linear system :math:`Ax = b` exactly.

    Args:
        rows: The rows of the matrix A.
        rhs: The right hand side b.

    Returns:
        The solution x.

    Raises:
        LinAlgError: If the matrix is singular.

    """
    a = sympy.Matrix(rows)
    if a.rows != a.cols:
        raise np.linalg.LinAlgError(f"Matrix must be square not ({a.rows},{a.cols})")
    if a.det() == 0:
        raise np.linalg.LinAlgError("Singular matrix")
    return tuple(a.LUsolve(sympy.Matrix(rhs)))


def normalize_pivot(a: ExactCoords) -> ExactCoords:
    """Scales coordinates so that the first non-zero entry becomes 1.

    Coordinates that only differ by a non-zero factor give the same result. The input must not be all zero.

    """
    pivot = next(x for x in a if x != 0)
    return tuple(x / pivot for x in a)
