"""
Tests for the polygon, triangle and rectangle primitives.

The primitives derive their normal, plane, centroid and area from
their vertices and classify themselves against a plane by counting
per-vertex votes.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from bspview.services.plane import Classification, Plane
from bspview.services.primitives import (
    GeometryError,
    Polygon,
    Rectangle,
    Triangle,
    as_polygon,
)

XY_PLANE = Plane((0.0, 0.0, 1.0), 0.0)


def test_polygon_requires_three_vertices() -> None:
    with pytest.raises(GeometryError):
        Polygon([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)])


def test_polygon_rejects_non_coplanar_vertices() -> None:
    with pytest.raises(GeometryError):
        Polygon([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.5)])


def test_polygon_coerces_vertices_to_float_tuples() -> None:
    poly = Polygon([[0, 0, 0], [2, 0, 0], [2, 2, 0], [0, 2, 0]])
    assert poly.vertices[1] == (2.0, 0.0, 0.0)
    assert all(isinstance(c, float) for v in poly.vertices for c in v)
    assert len(poly) == 4


def test_polygon_rejects_bad_coordinate_arity() -> None:
    with pytest.raises(GeometryError):
        Polygon([(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)])


def test_polygon_equality_and_hash() -> None:
    a = Polygon([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)])
    b = Polygon([[0, 0, 0], [1, 0, 0], [0, 1, 0]])
    assert a == b
    assert hash(a) == hash(b)


def test_triangle_normal_and_plane() -> None:
    tri = Triangle((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    assert tri.normal() == pytest.approx((0.0, 0.0, 1.0))
    assert tri.unit_normal() == pytest.approx((0.0, 0.0, 1.0))
    plane = tri.plane()
    assert plane.normal == pytest.approx((0.0, 0.0, 1.0))
    assert plane.offset == pytest.approx(0.0)


def test_degenerate_triangle_has_no_unit_normal() -> None:
    tri = Triangle((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), (2.0, 2.0, 2.0))
    assert tri.unit_normal() is None
    with pytest.raises(GeometryError):
        tri.plane()


def test_centroids() -> None:
    tri = Triangle((0.0, 0.0, 0.0), (3.0, 0.0, 0.0), (0.0, 3.0, 0.0))
    assert tri.centroid() == pytest.approx((1.0, 1.0, 0.0))
    square = Polygon([(0.0, 0.0, 1.0), (2.0, 0.0, 1.0), (2.0, 2.0, 1.0), (0.0, 2.0, 1.0)])
    assert square.centroid() == pytest.approx((1.0, 1.0, 1.0))
    rect = Rectangle((1.0, 1.0, 0.0), (2.0, 0.0, 0.0), (0.0, 4.0, 0.0))
    assert rect.centroid() == pytest.approx((2.0, 3.0, 0.0))


def test_areas() -> None:
    tri = Triangle((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    assert tri.area() == pytest.approx(0.5)
    rect = Rectangle((0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (0.0, 3.0, 0.0))
    assert rect.area() == pytest.approx(6.0)
    hexagon = Polygon(
        [(2.0, 0.0, 0.0), (4.0, 0.0, 0.0), (5.0, 2.0, 0.0), (4.0, 4.0, 0.0), (2.0, 4.0, 0.0), (1.0, 2.0, 0.0)]
    )
    assert hexagon.area() == pytest.approx(12.0)
    assert rect.to_polygon().area() == pytest.approx(rect.area())


def test_rectangle_vertices_and_normal() -> None:
    rect = Rectangle((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    assert rect.vertices == (
        (0.0, 0.0, 0.0),
        (1.0, 0.0, 0.0),
        (1.0, 1.0, 0.0),
        (0.0, 1.0, 0.0),
    )
    assert rect.normal() == pytest.approx((0.0, 0.0, 1.0))
    assert rect.plane().normal == pytest.approx((0.0, 0.0, 1.0))


def test_rectangle_from_corners() -> None:
    rect = Rectangle.from_corners((1.0, 0.0, 0.0), (3.0, 0.0, 0.0), (3.0, 0.0, 2.0), (1.0, 0.0, 2.0))
    assert rect.origin == (1.0, 0.0, 0.0)
    assert rect.u == (2.0, 0.0, 0.0)
    assert rect.v == (0.0, 0.0, 2.0)
    assert rect.area() == pytest.approx(4.0)


def test_rectangle_from_corners_rejects_non_coplanar() -> None:
    with pytest.raises(GeometryError):
        Rectangle.from_corners((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 1.0), (0.0, 1.0, 0.0))


@pytest.mark.parametrize(
    "vertices, expected",
    [
        ([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)], Classification.COPLANAR),
        ([(0.0, 0.0, 1.0), (1.0, 0.0, 1.0), (0.0, 1.0, 1.0)], Classification.FRONT),
        ([(0.0, 0.0, -1.0), (1.0, 0.0, -1.0), (0.0, 1.0, -1.0)], Classification.BACK),
        # One vertex on the plane, the rest in front
        ([(0.0, 0.0, 0.0), (1.0, 0.0, 1.0), (0.0, 1.0, 1.0)], Classification.FRONT),
        # Two vertices on the plane, one behind
        ([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, -1.0)], Classification.BACK),
        ([(0.0, 0.0, -1.0), (1.0, 0.0, 1.0), (0.0, 1.0, 1.0)], Classification.SPANNING),
        # On-plane vertex between a front and a back vertex
        ([(0.0, 0.0, 0.0), (1.0, 0.0, 1.0), (0.0, 1.0, -1.0)], Classification.SPANNING),
    ],
)
def test_classify(vertices, expected) -> None:
    poly = Polygon(vertices)
    assert poly.classify(XY_PLANE) is expected
    # Classification is a pure function of shape and plane
    assert poly.classify(XY_PLANE) is poly.classify(XY_PLANE)


def test_classify_matches_across_shape_types() -> None:
    rect = Rectangle((0.0, 0.0, -1.0), (1.0, 0.0, 0.0), (0.0, 0.0, 2.0))
    assert rect.classify(XY_PLANE) is Classification.SPANNING
    assert rect.to_polygon().classify(XY_PLANE) is Classification.SPANNING
    tri = Triangle((0.0, 0.0, 2.0), (1.0, 0.0, 2.0), (0.0, 1.0, 2.0))
    assert tri.classify(XY_PLANE) is Classification.FRONT


def test_classify_uses_supplied_epsilon() -> None:
    tri = Triangle((0.0, 0.0, 1e-4), (1.0, 0.0, 1e-4), (0.0, 1.0, 1e-4))
    assert tri.classify(XY_PLANE) is Classification.FRONT
    assert tri.classify(XY_PLANE, epsilon=1e-3) is Classification.COPLANAR


def test_as_polygon_lowers_every_shape() -> None:
    rect = Rectangle((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    tri = Triangle((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    assert as_polygon(rect).vertices == rect.vertices
    assert as_polygon(tri).vertices == tri.vertices
    raw = as_polygon([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    assert isinstance(raw, Polygon)
    poly = Polygon(tri.vertices)
    assert as_polygon(poly) is poly
