from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from typing_extensions import override

from geomvec.base import GeometryVector, Kind, Primitive
from geomvec.construct import ConstructorTable, Signature, construct
from geomvec.exceptions import ConversionUnsupported
from geomvec.utils import is_numeric, is_numerical_scalar, to_exact

if TYPE_CHECKING:
    from geomvec.utils.typing import ExactScalar, NumericInput, NumericalScalar


class ExactNumber(Primitive):
    """An exact (rational) number.

    Args:
        value: The value of the number. Floating point values are converted exactly.

    """

    kind = Kind.NUMBER

    def __init__(self, value: NumericalScalar) -> None:
        exact = to_exact(value)
        if exact is None:
            raise ValueError("An exact number cannot be missing, use None as element of a vector instead")
        self.value = exact
        self._freeze()

    @property
    @override
    def dim(self) -> None:
        return None

    @override
    def _key(self) -> tuple:
        return (self.value,)

    def __float__(self) -> float:
        return float(self.value)

    @override
    def __repr__(self) -> str:
        return f"ExactNumber({self.value})"


class ExactNumberCollection(GeometryVector[ExactNumber]):
    """A vector of exact numbers. Exact numbers are dimensionless, so the dim of this vector is always None."""

    _element_class = ExactNumber

    @classmethod
    def from_numeric(cls, values: NumericInput) -> ExactNumberCollection:
        """Promote raw numeric input to a vector of exact numbers.

        Args:
            values: A number or a flat sequence or array of numbers. None and NaN become missing values.

        Returns:
            The vector of exact numbers.

        """
        if is_numerical_scalar(values):
            values = [values]
        elements = []
        for v in values:  # type: ignore[union-attr]
            exact = to_exact(v)
            elements.append(None if exact is None else ExactNumber(exact))
        return cls(elements)

    @property
    def values(self) -> list[ExactScalar | None]:
        """The exact values, None for missing values."""
        return self.map(lambda n: n.value)

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        result = np.array([np.nan if v is None else float(v) for v in self.values], dtype=float)
        return result if dtype is None else result.astype(dtype)


ExactNumberCollection._constructors = ConstructorTable(
    Kind.NUMBER,
    Signature({Kind.NUMBER: 1}, "exact_number", "a numeric"),
)


def exact_numeric(*args: object, **named: object) -> ExactNumberCollection:
    """Create a vector of exact numbers.

    Integers, floats, fractions and sympy rationals (or sequences of them) are converted automatically, so
    ``exact_numeric([1, 2.5])`` and ``exact_numeric(exact_numeric([1, 2.5]))`` give the same result.

    Args:
        *args: The numbers to convert.
        **named: Named input, for readability only.

    Returns:
        A vector of exact numbers.

    """
    return construct(Kind.NUMBER, *args, **named)  # type: ignore[return-value]


def is_exact_numeric(x: object) -> bool:
    """Tests whether an object is a vector of exact numbers."""
    return isinstance(x, ExactNumberCollection)


def as_exact_numeric(x: object) -> ExactNumberCollection:
    """Convert raw numeric input to exact numbers. Vectors of exact numbers are returned unchanged.

    Raises:
        ConversionUnsupported: If the input is not numeric.

    """
    if isinstance(x, ExactNumberCollection):
        return x
    if isinstance(x, ExactNumber):
        return ExactNumberCollection([x])
    if not is_numeric(x):
        raise ConversionUnsupported("Don't know how to convert the input to exact numerics")
    return ExactNumberCollection.from_numeric(x)  # type: ignore[arg-type]
