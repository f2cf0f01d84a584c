from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
import sympy
from typing_extensions import override

from geomvec.base import Primitive
from geomvec.curve import Circle, Sphere
from geomvec.exceptions import DegenerateConstruction, UnsupportedCombination
from geomvec.number import ExactNumber
from geomvec.point import Plane, Point, Vec
from geomvec.utils import add, cross, dot, is_zero, scale, solve_linear, sub


class Kernel(ABC):
    """Interface of the geometry kernels performing the constructions.

    There is one operation for every constructor signature. Operations take single primitives of matching kind and
    dimension, return a new primitive and have no side effects. Degenerate configurations are reported by raising
    :class:`~geomvec.exceptions.DegenerateConstruction`.

    """

    def apply(self, operation: str, *primitives: Primitive) -> Primitive:
        """Call a kernel operation by name.

        Args:
            operation: The name of the operation, e.g. ``"circle_from_3_points"``.
            *primitives: The arguments of the operation.

        Returns:
            The constructed primitive.

        Raises:
            UnsupportedCombination: If the kernel has no operation of that name.

        """
        func = getattr(self, operation, None)
        if func is None or operation.startswith("_") or not callable(func):
            raise UnsupportedCombination(f"{type(self).__name__} does not support the operation {operation!r}")
        return func(*primitives)

    def exact_number(self, n: ExactNumber) -> ExactNumber:
        return n

    @abstractmethod
    def point_from_coords(self, *coords: ExactNumber) -> Point: ...

    @abstractmethod
    def point_from_vec(self, v: Vec) -> Point: ...

    @abstractmethod
    def vec_from_coords(self, *coords: ExactNumber) -> Vec: ...

    @abstractmethod
    def vec_from_point(self, p: Point) -> Vec: ...

    @abstractmethod
    def vec_from_2_points(self, p: Point, q: Point) -> Vec: ...

    @abstractmethod
    def plane_from_coefficients(self, a: ExactNumber, b: ExactNumber, c: ExactNumber, d: ExactNumber) -> Plane: ...

    @abstractmethod
    def plane_from_3_points(self, p: Point, q: Point, r: Point) -> Plane: ...

    @abstractmethod
    def plane_from_point_vec(self, p: Point, v: Vec) -> Plane: ...

    @abstractmethod
    def plane_from_circle(self, c: Circle) -> Plane: ...

    @abstractmethod
    def sphere_from_center_radius(self, center: Point, squared_radius: ExactNumber) -> Sphere: ...

    @abstractmethod
    def sphere_from_2_points(self, p: Point, q: Point) -> Sphere: ...

    @abstractmethod
    def sphere_from_4_points(self, p: Point, q: Point, r: Point, s: Point) -> Sphere: ...

    @abstractmethod
    def sphere_from_circle(self, c: Circle) -> Sphere: ...

    @abstractmethod
    def circle_from_3_points(self, p: Point, q: Point, r: Point) -> Circle: ...

    @abstractmethod
    def circle_from_2_points(self, p: Point, q: Point) -> Circle: ...

    @abstractmethod
    def circle_from_center_radius_plane(self, center: Point, squared_radius: ExactNumber, plane: Plane) -> Circle: ...

    @abstractmethod
    def circle_from_center_radius_vec(self, center: Point, squared_radius: ExactNumber, normal: Vec) -> Circle: ...

    @abstractmethod
    def circle_from_center_radius(self, center: Point, squared_radius: ExactNumber) -> Circle: ...

    @abstractmethod
    def circle_from_2_spheres(self, s1: Sphere, s2: Sphere) -> Circle: ...

    @abstractmethod
    def circle_from_sphere_plane(self, s: Sphere, plane: Plane) -> Circle: ...


def _circumcenter(p: Point, *others: Point, normal: tuple | None = None) -> tuple:
    # the center c is equidistant to p and q: 2 (q - p) . c = |q|^2 - |p|^2
    rows = [scale(sub(q.coords, p.coords), 2) for q in others]
    rhs = [dot(q.coords, q.coords) - dot(p.coords, p.coords) for q in others]
    if normal is not None:
        rows.append(normal)
        rhs.append(dot(normal, p.coords))
    return solve_linear(rows, rhs)


def _squared_distance(a: tuple, b: tuple) -> sympy.Rational:
    d = sub(a, b)
    return dot(d, d)


class RationalKernel(Kernel):
    """A kernel using exact rational arithmetic.

    All coordinates are sympy rationals. Since radii are passed around squared, no construction needs square roots and
    every result is exact.

    """

    @override
    def point_from_coords(self, *coords: ExactNumber) -> Point:
        return Point(*(c.value for c in coords))

    @override
    def point_from_vec(self, v: Vec) -> Point:
        return Point(*v.coords)

    @override
    def vec_from_coords(self, *coords: ExactNumber) -> Vec:
        return Vec(*(c.value for c in coords))

    @override
    def vec_from_point(self, p: Point) -> Vec:
        return Vec(*p.coords)

    @override
    def vec_from_2_points(self, p: Point, q: Point) -> Vec:
        return Vec(*sub(q.coords, p.coords))

    @override
    def plane_from_coefficients(self, a: ExactNumber, b: ExactNumber, c: ExactNumber, d: ExactNumber) -> Plane:
        if a.value == 0 and b.value == 0 and c.value == 0:
            raise DegenerateConstruction("The normal of a plane cannot be the zero vector")
        return Plane(a.value, b.value, c.value, d.value)

    @override
    def plane_from_3_points(self, p: Point, q: Point, r: Point) -> Plane:
        n = cross(sub(q.coords, p.coords), sub(r.coords, p.coords))
        if is_zero(n):
            raise DegenerateConstruction("The points are collinear")
        return Plane(*n, -dot(n, p.coords))

    @override
    def plane_from_point_vec(self, p: Point, v: Vec) -> Plane:
        if v.is_zero:
            raise DegenerateConstruction("The normal of a plane cannot be the zero vector")
        return Plane(*v.coords, -dot(v.coords, p.coords))

    @override
    def plane_from_circle(self, c: Circle) -> Plane:
        return c.supporting_plane

    @override
    def sphere_from_center_radius(self, center: Point, squared_radius: ExactNumber) -> Sphere:
        if squared_radius.value < 0:
            raise DegenerateConstruction(f"The squared radius must not be negative, but is {squared_radius.value}")
        return Sphere(center, squared_radius.value)

    @override
    def sphere_from_2_points(self, p: Point, q: Point) -> Sphere:
        center = scale(add(p.coords, q.coords), sympy.Rational(1, 2))
        return Sphere(Point(*center), _squared_distance(p.coords, q.coords) / 4)

    @override
    def sphere_from_4_points(self, p: Point, q: Point, r: Point, s: Point) -> Sphere:
        try:
            center = _circumcenter(p, q, r, s)
        except np.linalg.LinAlgError as e:
            raise DegenerateConstruction("The points are coplanar") from e
        return Sphere(Point(*center), _squared_distance(p.coords, center))

    @override
    def sphere_from_circle(self, c: Circle) -> Sphere:
        if c.dim != 3:
            raise DegenerateConstruction("Only circles in 3 dimensions lie on a sphere")
        return Sphere(c.center, c.squared_radius)

    @override
    def circle_from_3_points(self, p: Point, q: Point, r: Point) -> Circle:
        if p.dim == 2:
            normal = None
        else:
            normal = cross(sub(q.coords, p.coords), sub(r.coords, p.coords))
            if is_zero(normal):
                raise DegenerateConstruction("The points are collinear")
        try:
            center = _circumcenter(p, q, r, normal=normal)
        except np.linalg.LinAlgError as e:
            raise DegenerateConstruction("The points are collinear") from e
        return Circle(
            Point(*center), _squared_distance(p.coords, center), None if normal is None else Vec(*normal)
        )

    @override
    def circle_from_2_points(self, p: Point, q: Point) -> Circle:
        center = scale(add(p.coords, q.coords), sympy.Rational(1, 2))
        return Circle(Point(*center), _squared_distance(p.coords, q.coords) / 4)

    @override
    def circle_from_center_radius_plane(self, center: Point, squared_radius: ExactNumber, plane: Plane) -> Circle:
        if not plane.contains(center):
            raise DegenerateConstruction("The center of the circle does not lie on the plane")
        return Circle(center, self._positive(squared_radius), plane.normal)

    @override
    def circle_from_center_radius_vec(self, center: Point, squared_radius: ExactNumber, normal: Vec) -> Circle:
        if normal.is_zero:
            raise DegenerateConstruction("The normal of a circle cannot be the zero vector")
        return Circle(center, self._positive(squared_radius), normal)

    @override
    def circle_from_center_radius(self, center: Point, squared_radius: ExactNumber) -> Circle:
        if squared_radius.value < 0:
            raise DegenerateConstruction(f"The squared radius must not be negative, but is {squared_radius.value}")
        return Circle(center, squared_radius.value)

    @override
    def circle_from_2_spheres(self, s1: Sphere, s2: Sphere) -> Circle:
        c1, c2 = s1.center.coords, s2.center.coords
        d = sub(c2, c1)
        dd = dot(d, d)
        if dd == 0:
            raise DegenerateConstruction("The spheres are concentric")
        # the circle lies in the radical plane, at c1 + t (c2 - c1)
        t = (dd + s1.squared_radius - s2.squared_radius) / (2 * dd)
        squared_radius = s1.squared_radius - t**2 * dd
        if squared_radius <= 0:
            raise DegenerateConstruction("The spheres do not intersect in a circle")
        return Circle(Point(*add(c1, scale(d, t))), squared_radius, Vec(*d))

    @override
    def circle_from_sphere_plane(self, s: Sphere, plane: Plane) -> Circle:
        n = plane.normal.coords
        nn = dot(n, n)
        # signed distance of the center to the plane, times |n|
        h = dot(n, s.center.coords) + plane.coefficients[3]
        squared_radius = s.squared_radius - h**2 / nn
        if squared_radius <= 0:
            raise DegenerateConstruction("The sphere and the plane do not intersect in a circle")
        return Circle(Point(*sub(s.center.coords, scale(n, h / nn))), squared_radius, plane.normal)

    @staticmethod
    def _positive(squared_radius: ExactNumber) -> sympy.Rational:
        if squared_radius.value <= 0:
            raise DegenerateConstruction(f"The squared radius must be positive, but is {squared_radius.value}")
        return squared_radius.value


DEFAULT_KERNEL = RationalKernel()
