from fractions import Fraction

import numpy as np
import pytest
import sympy

from geomvec import (
    ConversionUnsupported,
    ExactNumber,
    ExactNumberCollection,
    UnsupportedCombination,
    as_exact_numeric,
    exact_numeric,
    is_exact_numeric,
)


class TestExactNumber:
    def test_value(self) -> None:
        assert ExactNumber(2).value == 2
        assert ExactNumber(0.5).value == sympy.Rational(1, 2)
        assert ExactNumber(Fraction(1, 3)).value == sympy.Rational(1, 3)
        assert ExactNumber(np.int32(7)).value == 7
        assert ExactNumber(2).dim is None
        assert float(ExactNumber(0.25)) == 0.25

    def test_eq(self) -> None:
        assert ExactNumber(1) == ExactNumber(1.0)
        assert ExactNumber(1) != ExactNumber(2)

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            ExactNumber(None)
        with pytest.raises(ValueError):
            ExactNumber(float("nan"))
        with pytest.raises(ValueError):
            ExactNumber(float("inf"))
        with pytest.raises(TypeError):
            ExactNumber(True)
        with pytest.raises(TypeError):
            ExactNumber("1")


class TestExactNumeric:
    def test_promotion(self) -> None:
        n = exact_numeric([1, 2.5, Fraction(1, 3)])

        assert isinstance(n, ExactNumberCollection)
        assert n.dim is None
        assert n.values == [1, sympy.Rational(5, 2), sympy.Rational(1, 3)]

    def test_scalar(self) -> None:
        assert exact_numeric(3).values == [3]
        assert exact_numeric(np.float64(0.5)).values == [sympy.Rational(1, 2)]

    def test_numpy(self) -> None:
        assert exact_numeric(np.arange(3)).values == [0, 1, 2]

    def test_idempotent(self) -> None:
        n = exact_numeric([1, 2])
        assert exact_numeric(n) == n
        assert exact_numeric(value=n) == n

    def test_missing(self) -> None:
        n = exact_numeric([1, None, float("nan")])

        assert n.values == [1, None, None]
        np.testing.assert_array_equal(n.is_missing, [False, True, True])

    def test_array(self) -> None:
        n = exact_numeric([1, None, 2.5])
        np.testing.assert_array_equal(np.asarray(n), [1.0, np.nan, 2.5])
        assert np.asarray(n, dtype=np.float32).dtype == np.float32

    def test_empty(self) -> None:
        n = exact_numeric()

        assert isinstance(n, ExactNumberCollection)
        assert len(n) == 0
        assert n.dim is None
        assert len(exact_numeric([])) == 0

    def test_unsupported(self) -> None:
        with pytest.raises(UnsupportedCombination):
            exact_numeric(1, 2)
        with pytest.raises(UnsupportedCombination):
            exact_numeric("1")
        with pytest.raises(UnsupportedCombination):
            exact_numeric(True)


class TestConversion:
    def test_is_exact_numeric(self) -> None:
        assert is_exact_numeric(exact_numeric(1))
        assert not is_exact_numeric(1)
        assert not is_exact_numeric(ExactNumber(1))

    def test_as_exact_numeric(self) -> None:
        n = exact_numeric([1, 2])

        assert as_exact_numeric(n) is n
        assert as_exact_numeric([1, 2]) == n
        assert as_exact_numeric(ExactNumber(1)) == exact_numeric(1)
        with pytest.raises(ConversionUnsupported):
            as_exact_numeric("1")
        with pytest.raises(ConversionUnsupported):
            as_exact_numeric([[1, 2]])
