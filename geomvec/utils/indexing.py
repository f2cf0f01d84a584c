from __future__ import annotations

from numbers import Integral
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from geomvec.utils.typing import VectorIndex


def normalize_index(index: VectorIndex, length: int) -> int | npt.NDArray[np.int_]:
    """Normalize an index into a vector of the given length to non-negative positions.

    >>> normalize_index(-1, 3)
    2
    >>> normalize_index(slice(None, None, -1), 3)
    array([2, 1, 0])
    >>> normalize_index([True, False, True], 3)
    array([0, 2])
    >>> normalize_index(3, 3)
    Traceback (most recent call last):
    ...
    IndexError: Index 3 out of range for a vector of length 3

    Args:
        index: An integer, a slice, a sequence of integers or a boolean mask.
        length: The length of the indexed vector.

    Returns:
        A single position for integer indices, otherwise an array of positions.

    """
    if isinstance(index, (bool, np.bool_)):
        raise TypeError("Invalid index type", type(index), index)
    if isinstance(index, (Integral, np.integer)):
        i = int(index)
        if not -length <= i < length:
            raise IndexError(f"Index {i} out of range for a vector of length {length}")
        return i + length if i < 0 else i
    if isinstance(index, slice):
        return np.arange(length)[index]

    positions = np.asanyarray(index)
    if positions.ndim != 1:
        raise IndexError(f"Only one-dimensional indices are supported, got {positions.ndim} dimensions")
    if positions.dtype == bool:
        if len(positions) != length:
            raise IndexError(f"Boolean index of length {len(positions)} does not match vector of length {length}")
        return np.flatnonzero(positions)
    if positions.size == 0:
        return positions.astype(int)
    if not np.issubdtype(positions.dtype, np.integer):
        raise TypeError("Invalid index type", positions.dtype, index)
    if np.any((positions < -length) | (positions >= length)):
        raise IndexError(f"Index out of range for a vector of length {length}")
    return np.where(positions < 0, positions + length, positions)
