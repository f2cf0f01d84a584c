from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pytest

if TYPE_CHECKING:
    from numpy.random import Generator


@pytest.fixture(scope="session")
def rng() -> Generator:
    return np.random.default_rng(seed=0)


@pytest.fixture
def random_triangles(rng: Generator):
    """Random non-degenerate triangles with integer vertices, as an array of shape (n, 3, dim)."""

    def make(n: int, dim: int = 2) -> np.ndarray:
        triangles = []
        while len(triangles) < n:
            a, b, c = rng.integers(-100, 100, size=(3, dim)).tolist()
            u = [bi - ai for ai, bi in zip(a, b)]
            v = [ci - ai for ai, ci in zip(a, c)]
            if dim == 2:
                collinear = u[0] * v[1] - u[1] * v[0] == 0
            else:
                collinear = (
                    u[1] * v[2] - u[2] * v[1] == 0 and u[2] * v[0] - u[0] * v[2] == 0 and u[0] * v[1] - u[1] * v[0] == 0
                )
            if not collinear:
                triangles.append([a, b, c])
        return np.array(triangles)

    return make
