from __future__ import annotations

from collections.abc import Sequence
from numbers import Real
from typing import TYPE_CHECKING, Union

import numpy as np
import sympy
from numpy import typing as npt

if TYPE_CHECKING:
    from typing_extensions import TypeAlias

VectorIndex: TypeAlias = Union[int, np.int_, slice, Sequence[int], Sequence[bool], npt.NDArray[np.int_], npt.NDArray[np.bool_]]

ExactScalar: TypeAlias = sympy.Rational
ExactCoords: TypeAlias = tuple[sympy.Rational, ...]
NumericalScalar: TypeAlias = Union[Real, np.integer, np.floating, sympy.Rational, sympy.Float]
NumericInput: TypeAlias = Union[NumericalScalar, Sequence[Union[NumericalScalar, None]], npt.NDArray[np.number]]
