from __future__ import annotations

from abc import ABC
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from typing_extensions import override

from geomvec.base import DEFAULT_DIM, GeometryVector, Kind, Primitive, validate_dimension
from geomvec.construct import ConstructorTable, Signature, construct
from geomvec.exceptions import ConversionUnsupported
from geomvec.number import ExactNumber, ExactNumberCollection
from geomvec.utils import dot, is_zero, normalize_pivot, to_exact

if TYPE_CHECKING:
    from geomvec.kernel import Kernel
    from geomvec.utils.typing import ExactCoords, ExactScalar, NumericalScalar


def _exact_coords(coords: tuple[NumericalScalar | Sequence[NumericalScalar], ...]) -> ExactCoords:
    if len(coords) == 1 and (isinstance(coords[0], Sequence) or np.ndim(coords[0]) == 1):
        coords = tuple(coords[0])
    result = tuple(to_exact(c) for c in coords)
    if any(c is None for c in result):
        raise ValueError("Coordinates cannot be missing")
    return result  # type: ignore[return-value]


class CoordinatePrimitive(Primitive, ABC):
    """Base class for primitives given by a tuple of exact cartesian coordinates.

    Args:
        *coords: Two or three coordinates, or a single sequence of them.

    Attributes:
        coords: The exact coordinates.

    """

    def __init__(self, *coords: NumericalScalar | Sequence[NumericalScalar]) -> None:
        exact = _exact_coords(coords)
        validate_dimension(len(exact))
        self.coords = exact
        self._freeze()

    @property
    @override
    def dim(self) -> int:
        return len(self.coords)

    @property
    def x(self) -> ExactScalar:
        return self.coords[0]

    @property
    def y(self) -> ExactScalar:
        return self.coords[1]

    @property
    def z(self) -> ExactScalar:
        if self.dim < 3:
            raise AttributeError(f"A {self.dim}-dimensional {type(self).__name__} has no z coordinate")
        return self.coords[2]

    @override
    def _key(self) -> tuple:
        return self.coords

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(str(c) for c in self.coords)})"


class Point(CoordinatePrimitive):
    """A point in 2D or 3D."""

    kind = Kind.POINT


class Vec(CoordinatePrimitive):
    """A vector (direction) in 2D or 3D."""

    kind = Kind.VEC

    @property
    def is_zero(self) -> bool:
        return is_zero(self.coords)


class Plane(Primitive):
    r"""A plane in 3D, given by the coefficients of its equation :math:`ax + by + cz + d = 0`.

    Coefficients that only differ by a non-zero factor describe the same plane, so such planes compare equal.

    Args:
        a, b, c, d: The coefficients of the plane equation. The normal :math:`(a, b, c)` must not be zero.

    """

    kind = Kind.PLANE

    def __init__(self, a: NumericalScalar, b: NumericalScalar, c: NumericalScalar, d: NumericalScalar) -> None:
        coefficients = _exact_coords((a, b, c, d))
        if is_zero(coefficients[:3]):
            raise ValueError("The normal of a plane cannot be the zero vector")
        self.coefficients = coefficients
        self._freeze()

    @property
    @override
    def dim(self) -> int:
        return 3

    @property
    def normal(self) -> Vec:
        """The normal vector :math:`(a, b, c)` of the plane."""
        return Vec(*self.coefficients[:3])

    def contains(self, point: Point) -> bool:
        """Tests whether a point lies on the plane."""
        return dot(self.coefficients[:3], point.coords) + self.coefficients[3] == 0

    @override
    def _key(self) -> tuple:
        return normalize_pivot(self.coefficients)

    @override
    def __repr__(self) -> str:
        return f"Plane({', '.join(str(c) for c in self.coefficients)})"


class CoordinateCollection(GeometryVector):
    """Base class for vectors of primitives with cartesian coordinates."""

    def coordinate(self, axis: int) -> ExactNumberCollection:
        """The coordinates along one axis as exact numbers.

        Args:
            axis: The index of the axis, 0 for x, 1 for y and 2 for z.

        Returns:
            The coordinates of all elements along the axis.

        """
        if not -self.dim <= axis < self.dim:  # type: ignore[operator]
            raise IndexError(f"Axis {axis} out of range for dimension {self.dim}")
        return ExactNumberCollection(self.map(lambda p: ExactNumber(p.coords[axis])))

    @property
    def x(self) -> ExactNumberCollection:
        return self.coordinate(0)

    @property
    def y(self) -> ExactNumberCollection:
        return self.coordinate(1)

    @property
    def z(self) -> ExactNumberCollection:
        return self.coordinate(2)


class PointCollection(CoordinateCollection, GeometryVector[Point]):
    """A vector of points."""

    _element_class = Point


class VecCollection(CoordinateCollection, GeometryVector[Vec]):
    """A vector of vectors (directions)."""

    _element_class = Vec


class PlaneCollection(GeometryVector[Plane]):
    """A vector of planes in 3D."""

    _element_class = Plane
    _dimensions = (3,)

    @property
    def normal(self) -> VecCollection:
        """The normal vectors of the planes."""
        return VecCollection(self.map(lambda e: e.normal), dim=3)


PointCollection._constructors = ConstructorTable(
    Kind.POINT,
    Signature({Kind.NUMBER: 2}, "point_from_coords", "2 numerics", result_dim=2),
    Signature({Kind.NUMBER: 3}, "point_from_coords", "3 numerics", result_dim=3),
    Signature({Kind.VEC: 1}, "point_from_vec", "a vector"),
)

VecCollection._constructors = ConstructorTable(
    Kind.VEC,
    Signature({Kind.NUMBER: 2}, "vec_from_coords", "2 numerics", result_dim=2),
    Signature({Kind.NUMBER: 3}, "vec_from_coords", "3 numerics", result_dim=3),
    Signature({Kind.POINT: 1}, "vec_from_point", "a point"),
    Signature({Kind.POINT: 2}, "vec_from_2_points", "2 points"),
)

PlaneCollection._constructors = ConstructorTable(
    Kind.PLANE,
    Signature({Kind.NUMBER: 4}, "plane_from_coefficients", "4 numerics", dims=(3,), result_dim=3),
    Signature({Kind.POINT: 3}, "plane_from_3_points", "3 points", dims=(3,)),
    Signature({Kind.POINT: 1, Kind.VEC: 1}, "plane_from_point_vec", "a point and a vector", dims=(3,)),
    Signature({Kind.CIRCLE: 1}, "plane_from_circle", "a circle", dims=(3,)),
)


def point(
    *args: object, default_dim: int = DEFAULT_DIM, kernel: Kernel | None = None, **named: object
) -> PointCollection:
    """Create a vector of points.

    - Providing two or three numeric vectors gives points with these x, y (and z) coordinates.
    - Providing a vector of vectors gives the points the vectors point to from the origin.

    Args:
        *args: Various input, see above.
        default_dim: The dimensionality when constructing an empty vector.
        kernel: The kernel performing the constructions, by default the exact rational kernel.
        **named: Named input, for readability only, e.g. ``point(x=[1, 2], y=[3, 4])``.

    Returns:
        A vector of points.

    """
    return construct(Kind.POINT, *args, default_dim=default_dim, kernel=kernel, **named)  # type: ignore[return-value]


def vec(
    *args: object, default_dim: int = DEFAULT_DIM, kernel: Kernel | None = None, **named: object
) -> VecCollection:
    """Create a vector of vectors.

    - Providing two or three numeric vectors gives vectors with these coordinates.
    - Providing a vector of points gives the position vectors of the points.
    - Providing two vectors of points ``p, q`` gives the vectors ``q - p``.

    Args:
        *args: Various input, see above.
        default_dim: The dimensionality when constructing an empty vector.
        kernel: The kernel performing the constructions, by default the exact rational kernel.
        **named: Named input, for readability only.

    Returns:
        A vector of vectors.

    """
    return construct(Kind.VEC, *args, default_dim=default_dim, kernel=kernel, **named)  # type: ignore[return-value]


def plane(
    *args: object, default_dim: int = 3, kernel: Kernel | None = None, **named: object
) -> PlaneCollection:
    """Create a vector of planes. Planes only exist in 3 dimensions.

    - Providing four numeric vectors gives the planes with the equation ``a x + b y + c z + d = 0``.
    - Providing three points gives the plane through all of them.
    - Providing a point and a vector gives the plane through the point, orthogonal to the vector.
    - Providing a circle gives its supporting plane.

    Args:
        *args: Various input, see above.
        default_dim: The dimensionality when constructing an empty vector.
        kernel: The kernel performing the constructions, by default the exact rational kernel.
        **named: Named input, for readability only.

    Returns:
        A vector of planes.

    """
    return construct(Kind.PLANE, *args, default_dim=default_dim, kernel=kernel, **named)  # type: ignore[return-value]


def is_point(x: object) -> bool:
    """Tests whether an object is a vector of points."""
    return isinstance(x, PointCollection)


def is_vec(x: object) -> bool:
    """Tests whether an object is a vector of vectors."""
    return isinstance(x, VecCollection)


def is_plane(x: object) -> bool:
    """Tests whether an object is a vector of planes."""
    return isinstance(x, PlaneCollection)


def as_point(x: object) -> PointCollection:
    """Convert to points. Vectors of points are returned unchanged, vectors of vectors are converted.

    Raises:
        ConversionUnsupported: If the input cannot be converted to points.

    """
    if isinstance(x, Point):
        return PointCollection([x])
    if isinstance(x, PointCollection):
        return x
    if isinstance(x, (Vec, VecCollection)):
        return point(x)
    raise ConversionUnsupported("Don't know how to convert the input to points")


def as_vec(x: object) -> VecCollection:
    """Convert to vectors. Vectors of vectors are returned unchanged, vectors of points are converted.

    Raises:
        ConversionUnsupported: If the input cannot be converted to vectors.

    """
    if isinstance(x, Vec):
        return VecCollection([x])
    if isinstance(x, VecCollection):
        return x
    if isinstance(x, (Point, PointCollection)):
        return vec(x)
    raise ConversionUnsupported("Don't know how to convert the input to vectors")


def as_plane(x: object) -> PlaneCollection:
    """Convert to planes. Vectors of planes are returned unchanged, 3D circles are converted to their supporting plane.

    Raises:
        ConversionUnsupported: If the input cannot be converted to planes.

    """
    if isinstance(x, Plane):
        return PlaneCollection([x])
    if isinstance(x, PlaneCollection):
        return x
    if isinstance(x, GeometryVector) and x.kind is Kind.CIRCLE and x.dim == 3:
        return plane(x)
    raise ConversionUnsupported("Don't know how to convert the input to planes")
