from __future__ import annotations

from typing import TYPE_CHECKING

from typing_extensions import override

from geomvec.base import DEFAULT_DIM, GeometryVector, Kind, Primitive
from geomvec.construct import ConstructorTable, Signature, construct
from geomvec.exceptions import ConversionUnsupported
from geomvec.number import ExactNumber, ExactNumberCollection
from geomvec.point import Plane, PlaneCollection, Point, PointCollection, Vec, VecCollection
from geomvec.utils import dot, normalize_pivot, sub, to_exact

if TYPE_CHECKING:
    from geomvec.kernel import Kernel
    from geomvec.utils.typing import ExactScalar, NumericalScalar


def _squared_radius(value: NumericalScalar) -> ExactScalar:
    r = to_exact(value)
    if r is None:
        raise ValueError("The squared radius cannot be missing")
    if r < 0:
        raise ValueError(f"The squared radius must not be negative, but is {r}")
    return r


class Sphere(Primitive):
    """A sphere in 3D.

    Args:
        center: The center of the sphere.
        squared_radius: The square of the radius of the sphere.

    """

    kind = Kind.SPHERE

    def __init__(self, center: Point, squared_radius: NumericalScalar) -> None:
        if center.dim != 3:
            raise ValueError(f"Spheres only exist in 3 dimensions, but the center has dimension {center.dim}")
        self.center = center
        self.squared_radius = _squared_radius(squared_radius)
        self._freeze()

    @property
    @override
    def dim(self) -> int:
        return 3

    def contains(self, point: Point) -> bool:
        """Tests whether a point lies on the sphere."""
        d = sub(point.coords, self.center.coords)
        return dot(d, d) == self.squared_radius

    @override
    def _key(self) -> tuple:
        return self.center.coords, self.squared_radius

    @override
    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, squared_radius={self.squared_radius})"


class Circle(Primitive):
    """A circle in 2D or 3D.

    Circles in 3D additionally need the normal vector of their supporting plane. Its length and orientation carry no
    meaning, so circles with parallel normals compare equal.

    Args:
        center: The center of the circle.
        squared_radius: The square of the radius of the circle.
        normal: The normal vector of the supporting plane, only for circles in 3D.

    """

    kind = Kind.CIRCLE

    def __init__(self, center: Point, squared_radius: NumericalScalar, normal: Vec | None = None) -> None:
        if center.dim == 2 and normal is not None:
            raise ValueError("Circles in 2 dimensions have no normal vector")
        if center.dim == 3:
            if normal is None or normal.dim != 3:
                raise ValueError("Circles in 3 dimensions require a 3-dimensional normal vector")
            if normal.is_zero:
                raise ValueError("The normal vector of a circle cannot be the zero vector")
        self.center = center
        self.squared_radius = _squared_radius(squared_radius)
        self.normal = normal
        self._freeze()

    @property
    @override
    def dim(self) -> int:
        return self.center.dim

    @property
    def supporting_plane(self) -> Plane:
        """The plane a circle in 3D lies in."""
        if self.normal is None:
            raise ConversionUnsupported("Circles in 2 dimensions have no supporting plane")
        n = self.normal.coords
        return Plane(*n, -dot(n, self.center.coords))

    def contains(self, point: Point) -> bool:
        """Tests whether a point lies on the circle."""
        d = sub(point.coords, self.center.coords)
        if dot(d, d) != self.squared_radius:
            return False
        return self.normal is None or dot(d, self.normal.coords) == 0

    @override
    def _key(self) -> tuple:
        if self.normal is None:
            return self.center.coords, self.squared_radius
        return self.center.coords, self.squared_radius, normalize_pivot(self.normal.coords)

    @override
    def __repr__(self) -> str:
        if self.normal is None:
            return f"Circle(center={self.center}, squared_radius={self.squared_radius})"
        return f"Circle(center={self.center}, squared_radius={self.squared_radius}, normal={self.normal})"


class SphereCollection(GeometryVector[Sphere]):
    """A vector of spheres in 3D."""

    _element_class = Sphere
    _dimensions = (3,)

    @property
    def center(self) -> PointCollection:
        """The centers of the spheres."""
        return PointCollection(self.map(lambda s: s.center), dim=3)

    @property
    def squared_radius(self) -> ExactNumberCollection:
        """The squared radii of the spheres."""
        return ExactNumberCollection(self.map(lambda s: ExactNumber(s.squared_radius)))


class CircleCollection(GeometryVector[Circle]):
    """A vector of circles in 2D or 3D."""

    _element_class = Circle

    @property
    def center(self) -> PointCollection:
        """The centers of the circles."""
        return PointCollection(self.map(lambda c: c.center), dim=self.dim)

    @property
    def squared_radius(self) -> ExactNumberCollection:
        """The squared radii of the circles."""
        return ExactNumberCollection(self.map(lambda c: ExactNumber(c.squared_radius)))

    @property
    def normal(self) -> VecCollection:
        """The normal vectors of the supporting planes of circles in 3D."""
        self._require_3d("normal vectors")
        return VecCollection(self.map(lambda c: c.normal), dim=3)

    @property
    def supporting_plane(self) -> PlaneCollection:
        """The supporting planes of circles in 3D."""
        self._require_3d("supporting planes")
        return PlaneCollection(self.map(lambda c: c.supporting_plane))

    def _require_3d(self, what: str) -> None:
        if self.dim != 3:
            raise ConversionUnsupported(f"Circles in {self.dim} dimensions have no {what}")


SphereCollection._constructors = ConstructorTable(
    Kind.SPHERE,
    Signature({Kind.POINT: 1, Kind.NUMBER: 1}, "sphere_from_center_radius", "center and radius", dims=(3,)),
    Signature({Kind.POINT: 2}, "sphere_from_2_points", "2 points", dims=(3,)),
    Signature({Kind.POINT: 4}, "sphere_from_4_points", "4 points", dims=(3,)),
    Signature({Kind.CIRCLE: 1}, "sphere_from_circle", "a circle", dims=(3,)),
)

CircleCollection._constructors = ConstructorTable(
    Kind.CIRCLE,
    Signature({Kind.POINT: 3}, "circle_from_3_points", "3 points"),
    Signature({Kind.POINT: 2}, "circle_from_2_points", "2 points", dims=(2,)),
    Signature(
        {Kind.POINT: 1, Kind.NUMBER: 1, Kind.PLANE: 1},
        "circle_from_center_radius_plane",
        "center, radius and plane",
        dims=(3,),
    ),
    Signature(
        {Kind.POINT: 1, Kind.NUMBER: 1, Kind.VEC: 1},
        "circle_from_center_radius_vec",
        "center, radius and normal vector",
        dims=(3,),
    ),
    Signature({Kind.POINT: 1, Kind.NUMBER: 1}, "circle_from_center_radius", "center and radius", dims=(2,)),
    Signature({Kind.SPHERE: 2}, "circle_from_2_spheres", "2 spheres", dims=(3,)),
    Signature({Kind.SPHERE: 1, Kind.PLANE: 1}, "circle_from_sphere_plane", "a sphere and a plane", dims=(3,)),
)


def sphere(
    *args: object, default_dim: int = 3, kernel: Kernel | None = None, **named: object
) -> SphereCollection:
    """Create a vector of spheres. Spheres only exist in 3 dimensions.

    - Providing one point and one numeric vector gives spheres centered at the point with the **squared** radius given
      by the numeric.
    - Providing two points gives the spheres with the two points at opposite ends of a diameter.
    - Providing four points gives the unique sphere through all of them.
    - Providing a circle gives the sphere having the circle as a great circle.

    Args:
        *args: Various input, see above.
        default_dim: The dimensionality when constructing an empty vector.
        kernel: The kernel performing the constructions, by default the exact rational kernel.
        **named: Named input, for readability only.

    Returns:
        A vector of spheres.

    """
    return construct(Kind.SPHERE, *args, default_dim=default_dim, kernel=kernel, **named)  # type: ignore[return-value]


def circle(
    *args: object, default_dim: int = DEFAULT_DIM, kernel: Kernel | None = None, **named: object
) -> CircleCollection:
    """Create a vector of circles.

    **2 dimensional circles**

    - Providing one point and one numeric vector gives circles centered at the point with the **squared** radius given
      by the numeric.
    - Providing two points gives circles centered between the two points with a radius of half the distance between
      the two points.
    - Providing three points gives the unique circle that passes through the three points.

    **3 dimensional circles**

    - Providing three points gives the unique circle that passes through the three points.
    - Providing a point, a numeric and a plane gives circles centered at the point, with the **squared** radius given
      by the numeric, lying in the plane. The center must lie on the plane.
    - Providing a point, a numeric and a vector gives circles centered at the point, with the **squared** radius given
      by the numeric, lying in the plane orthogonal to the vector.
    - Providing two spheres gives the circles where the spheres intersect.
    - Providing a sphere and a plane gives the circles where they intersect.

    Integers and floats are converted to exact numbers automatically, so ``circle(point(0, 0), 4)`` is the circle of
    radius 2 around the origin. You are free to name the input for readability, e.g.
    ``circle(center=point(0, 0), radius=4)``.

    Args:
        *args: Various input, see above.
        default_dim: The dimensionality when constructing an empty vector.
        kernel: The kernel performing the constructions, by default the exact rational kernel.
        **named: Named input, for readability only.

    Returns:
        A vector of circles.

    """
    return construct(Kind.CIRCLE, *args, default_dim=default_dim, kernel=kernel, **named)  # type: ignore[return-value]


def is_sphere(x: object) -> bool:
    """Tests whether an object is a vector of spheres."""
    return isinstance(x, SphereCollection)


def is_circle(x: object) -> bool:
    """Tests whether an object is a vector of circles."""
    return isinstance(x, CircleCollection)


def as_sphere(x: object) -> SphereCollection:
    """Convert to spheres. Vectors of spheres are returned unchanged, 3D circles give the sphere they are a great
    circle of.

    Raises:
        ConversionUnsupported: If the input cannot be converted to spheres.

    """
    if isinstance(x, Sphere):
        return SphereCollection([x])
    if isinstance(x, SphereCollection):
        return x
    if isinstance(x, CircleCollection) and x.dim == 3:
        return sphere(x)
    raise ConversionUnsupported("Don't know how to convert the input to spheres")


def as_circle(x: object) -> CircleCollection:
    """Convert to circles. Vectors of circles are returned unchanged.

    Raises:
        ConversionUnsupported: If the input cannot be converted to circles.

    """
    if isinstance(x, Circle):
        return CircleCollection([x])
    if isinstance(x, CircleCollection):
        return x
    raise ConversionUnsupported("Don't know how to convert the input to circles")
