import numpy as np
import pytest
import sympy

from geomvec import (
    Circle,
    CircleCollection,
    ConversionUnsupported,
    DegenerateConstruction,
    DimensionMismatch,
    LengthMismatch,
    Point,
    Sphere,
    SphereCollection,
    UnsupportedCombination,
    Vec,
    as_circle,
    as_sphere,
    circle,
    exact_numeric,
    is_circle,
    is_sphere,
    plane,
    point,
    sphere,
    vec,
)


class TestCirclePrimitive:
    def test_2d(self) -> None:
        c = Circle(Point(0, 0), 4)

        assert c.dim == 2
        assert c.normal is None
        assert c.contains(Point(2, 0))
        assert not c.contains(Point(1, 1))
        with pytest.raises(ConversionUnsupported):
            c.supporting_plane

    def test_3d(self) -> None:
        c = Circle(Point(0, 0, 0), 1, Vec(0, 0, 1))

        assert c.dim == 3
        assert c.contains(Point(1, 0, 0))
        assert not c.contains(Point(0, 0, 1))
        assert c == Circle(Point(0, 0, 0), 1, Vec(0, 0, -3))
        assert c != Circle(Point(0, 0, 0), 1, Vec(0, 1, 0))

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            Circle(Point(0, 0), 1, Vec(0, 0, 1))
        with pytest.raises(ValueError):
            Circle(Point(0, 0, 0), 1)
        with pytest.raises(ValueError):
            Circle(Point(0, 0, 0), 1, Vec(0, 0, 0))
        with pytest.raises(ValueError):
            Circle(Point(0, 0), -1)

    def test_sphere(self) -> None:
        s = Sphere(Point(0, 0, 0), 9)

        assert s.dim == 3
        assert s.contains(Point(0, 3, 0))
        assert not s.contains(Point(0, 0, 0))
        with pytest.raises(ValueError):
            Sphere(Point(0, 0), 1)


class TestCircle2D:
    def test_center_radius(self) -> None:
        c = circle(point(0, 0), 4)

        assert isinstance(c, CircleCollection)
        assert len(c) == 1
        assert c.dim == 2
        assert c.center == point(0, 0)
        assert c.squared_radius.values == [4]

    def test_named(self) -> None:
        assert circle(center=point(0, 0), radius=4) == circle(point(0, 0), 4)
        assert circle(4, point(0, 0)) == circle(point(0, 0), 4)

    def test_recycling(self) -> None:
        centers = point([0, 1, 2, 3, 4], [0, 0, 0, 0, 0])
        c = circle(centers, 4)

        assert len(c) == 5
        assert c.squared_radius.values == [4] * 5
        assert c.center == centers

    def test_length_mismatch(self) -> None:
        with pytest.raises(LengthMismatch):
            circle(point([0, 1, 2], [0, 0, 0]), exact_numeric([1, 2, 3, 4, 5]))

    def test_dimension_mismatch(self) -> None:
        with pytest.raises(DimensionMismatch):
            circle(point(0, 0), point(1, 1, 1))

    def test_2_points(self) -> None:
        c = circle(point(0, 0), point(2, 4))

        assert c.center == point(1, 2)
        assert c.squared_radius.values == [5]

    def test_3_points(self) -> None:
        c = circle(point(0, 0), point(2, 0), point(0, 2))

        assert c.center == point(1, 1)
        assert c.squared_radius.values == [2]

    def test_3_points_random(self, random_triangles) -> None:
        triangles = random_triangles(20)
        p, q, r = (point(triangles[:, i, 0], triangles[:, i, 1]) for i in range(3))
        circles = circle(p, q, r)

        assert len(circles) == 20
        for c, a, b, d in zip(circles, p, q, r):
            assert c.contains(a)
            assert c.contains(b)
            assert c.contains(d)

    def test_collinear(self) -> None:
        with pytest.raises(DegenerateConstruction) as excinfo:
            circle(point(0, 0), point(1, 1), point(2, 2))
        assert excinfo.value.index == 0

    def test_negative_radius(self) -> None:
        with pytest.raises(DegenerateConstruction):
            circle(point(0, 0), -1)

    def test_zero_radius(self) -> None:
        assert circle(point(1, 1), 0).squared_radius.values == [0]

    def test_exact_radius(self) -> None:
        c = circle(point(0, 0), 0.1)
        assert c.squared_radius.values == [sympy.Rational(0.1)]
        assert c.squared_radius.values != [sympy.Rational(1, 10)]

    def test_missing(self) -> None:
        c = circle(point(0, 0), [1, None, 4])
        np.testing.assert_array_equal(c.is_missing, [False, True, False])

    def test_empty(self) -> None:
        c = circle()

        assert isinstance(c, CircleCollection)
        assert len(c) == 0
        assert c.dim == 2
        assert circle(default_dim=3).dim == 3

    def test_unsupported(self) -> None:
        with pytest.raises(UnsupportedCombination):
            circle(4)
        with pytest.raises(UnsupportedCombination):
            circle(point(0, 0), vec(1, 1))
        with pytest.raises(UnsupportedCombination):
            circle(point(0, 0))
        with pytest.raises(UnsupportedCombination):
            circle("foo")

    def test_extra_arguments(self) -> None:
        assert circle(point(0, 0), point(2, 0), 9) == circle(point(1, 0), 1)
        assert circle(point(0, 0), point(2, 0), point(0, 2), 9) == circle(point(0, 0), point(2, 0), point(0, 2))

    def test_3d_only_constructions(self) -> None:
        with pytest.raises(DimensionMismatch):
            circle(point(0, 0), 1, vec(0, 1))

    def test_no_normal(self) -> None:
        c = circle(point(0, 0), 1)

        with pytest.raises(ConversionUnsupported):
            c.normal
        with pytest.raises(ConversionUnsupported):
            c.supporting_plane


class TestCircle3D:
    def test_3_points(self) -> None:
        c = circle(point(1, 0, 0), point(0, 1, 0), point(0, 0, 1))
        third = sympy.Rational(1, 3)

        assert c.dim == 3
        assert c.center == point(third, third, third)
        assert c.squared_radius.values == [sympy.Rational(2, 3)]
        assert c.normal == vec(1, 1, 1)
        assert c.supporting_plane == plane(1, 1, 1, -1)

    def test_3_points_random(self, random_triangles) -> None:
        triangles = random_triangles(10, dim=3)
        p, q, r = (point(*(triangles[:, i, j] for j in range(3))) for i in range(3))

        for c, a, b, d in zip(circle(p, q, r), p, q, r):
            assert c.contains(a)
            assert c.contains(b)
            assert c.contains(d)

    def test_collinear(self) -> None:
        with pytest.raises(DegenerateConstruction):
            circle(point(0, 0, 0), point(1, 1, 1), point(2, 2, 2))

    def test_2_points(self) -> None:
        with pytest.raises(DimensionMismatch, match="Circles in 3 dimensions cannot be constructed from 2 points"):
            circle(point(0, 0, 0), point(1, 1, 1))

    def test_center_radius_plane(self) -> None:
        c = circle(point(0, 0, 2), 4, plane(0, 0, 1, -2))

        assert c[0] == Circle(Point(0, 0, 2), 4, Vec(0, 0, 1))
        assert c.supporting_plane == plane(0, 0, 1, -2)

    def test_plane_before_vec(self) -> None:
        c = circle(point(0, 0, 0), 4, plane(0, 0, 1, 0), vec(1, 0, 0))
        assert c[0] == Circle(Point(0, 0, 0), 4, Vec(0, 0, 1))

    def test_center_off_plane(self) -> None:
        with pytest.raises(DegenerateConstruction):
            circle(point(0, 0, 1), 4, plane(0, 0, 1, 0))

    def test_center_radius_vec(self) -> None:
        c = circle(point(1, 2, 3), 4, vec(0, 2, 0))

        assert c[0] == Circle(Point(1, 2, 3), 4, Vec(0, 1, 0))
        assert c.normal == vec(0, 2, 0)

    def test_degenerate_center_radius_vec(self) -> None:
        with pytest.raises(DegenerateConstruction):
            circle(point(0, 0, 0), 4, vec(0, 0, 0))
        with pytest.raises(DegenerateConstruction):
            circle(point(0, 0, 0), 0, vec(0, 0, 1))

    def test_center_radius(self) -> None:
        with pytest.raises(DimensionMismatch):
            circle(point(0, 0, 0), 4)

    def test_2_spheres(self) -> None:
        s1 = sphere(point(0, 0, 0), 25)
        s2 = sphere(point(8, 0, 0), 25)
        c = circle(s1, s2)

        assert c[0] == Circle(Point(4, 0, 0), 9, Vec(1, 0, 0))
        assert c.supporting_plane == plane(8, 0, 0, -32)
        assert c.supporting_plane == plane(1, 0, 0, -4)

    def test_2_spheres_degenerate(self) -> None:
        with pytest.raises(DegenerateConstruction):
            circle(sphere(point(0, 0, 0), 1), sphere(point(0, 0, 0), 4))
        with pytest.raises(DegenerateConstruction):
            circle(sphere(point(0, 0, 0), 1), sphere(point(10, 0, 0), 1))
        with pytest.raises(DegenerateConstruction):
            circle(sphere(point(0, 0, 0), 25), sphere(point(10, 0, 0), 25))

    def test_sphere_plane(self) -> None:
        c = circle(sphere(point(0, 0, 0), 25), plane(0, 0, 1, -3))
        assert c[0] == Circle(Point(0, 0, 3), 16, Vec(0, 0, 1))

        c = circle(plane(0, 0, 2, -6), sphere(point(0, 0, 0), 25))
        assert c[0] == Circle(Point(0, 0, 3), 16, Vec(0, 0, 1))

    def test_sphere_plane_degenerate(self) -> None:
        with pytest.raises(DegenerateConstruction):
            circle(sphere(point(0, 0, 0), 9), plane(0, 0, 1, -3))
        with pytest.raises(DegenerateConstruction):
            circle(sphere(point(0, 0, 0), 9), plane(0, 0, 1, -5))


class TestSphere:
    def test_center_radius(self) -> None:
        s = sphere(point(1, 2, 3), 4)

        assert isinstance(s, SphereCollection)
        assert s[0] == Sphere(Point(1, 2, 3), 4)
        assert s.center == point(1, 2, 3)
        assert s.squared_radius.values == [4]

    def test_negative_radius(self) -> None:
        with pytest.raises(DegenerateConstruction):
            sphere(point(0, 0, 0), -4)

    def test_2_points(self) -> None:
        s = sphere(point(0, 0, 0), point(2, 2, 2))
        assert s[0] == Sphere(Point(1, 1, 1), 3)

    def test_4_points(self) -> None:
        s = sphere(point(1, 0, 0), point(-1, 0, 0), point(0, 1, 0), point(0, 0, 1))
        assert s[0] == Sphere(Point(0, 0, 0), 1)

    def test_coplanar(self) -> None:
        with pytest.raises(DegenerateConstruction):
            sphere(point(0, 0, 0), point(1, 0, 0), point(0, 1, 0), point(1, 1, 0))

    def test_from_circle(self) -> None:
        c = circle(point(0, 0, 0), 4, vec(0, 0, 1))
        assert sphere(c) == sphere(point(0, 0, 0), 4)

    def test_dimension(self) -> None:
        with pytest.raises(DimensionMismatch):
            sphere(point(0, 0), 4)
        with pytest.raises(DimensionMismatch):
            sphere(circle(point(0, 0), 4))

    def test_empty(self) -> None:
        assert sphere().dim == 3
        assert len(sphere()) == 0


class TestConversion:
    def test_predicates(self) -> None:
        assert is_circle(circle(point(0, 0), 1))
        assert not is_circle(sphere(point(0, 0, 0), 1))
        assert is_sphere(sphere(point(0, 0, 0), 1))
        assert not is_sphere(Sphere(Point(0, 0, 0), 1))

    def test_as_circle(self) -> None:
        c = circle(point(0, 0), 4)

        assert as_circle(c) is c
        assert as_circle(Circle(Point(0, 0), 4)) == c
        with pytest.raises(ConversionUnsupported):
            as_circle(sphere(point(0, 0, 0), 1))

    def test_as_sphere(self) -> None:
        s = sphere(point(0, 0, 0), 1)
        c = circle(point(1, 0, 0), point(0, 1, 0), point(0, 0, 1))
        third = sympy.Rational(1, 3)

        assert as_sphere(s) is s
        assert as_sphere(c) == sphere(point(third, third, third), sympy.Rational(2, 3))
        with pytest.raises(ConversionUnsupported):
            as_sphere(circle(point(0, 0), 1))
