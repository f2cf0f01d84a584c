from geomvec.utils.indexing import normalize_index
from geomvec.utils.math import (
    add,
    cross,
    dot,
    is_missing_value,
    is_numeric,
    is_numerical_dtype,
    is_numerical_scalar,
    is_zero,
    normalize_pivot,
    scale,
    solve_linear,
    sub,
    to_exact,
)
