"""
Oriented planes and point/shape classification for BSP construction.

A :class:`Plane` is stored as a unit normal ``n`` and a signed offset
``d`` such that every point ``p`` on the plane satisfies ``n·p = d``.
The signed distance ``n·p - d`` is positive on the side the normal
points to ("front") and negative on the other side ("back").

Classification uses a single tolerance, :data:`PLANE_EPSILON`.  The
tree builder, the shape classifier and the polygon splitter all route
through :func:`classify_vertices` so that a polygon reported as
spanning a plane is split using exactly the same per-vertex verdicts.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .vectors import (
    MACHINE_EPSILON,
    GeometryError,
    Vec3,
    add,
    as_vec3,
    cross,
    dot,
    length,
    negate,
    scale,
    sub,
)

# Points within this distance of a plane are considered to lie on it.
PLANE_EPSILON: float = 1e-5


class PlaneSide(enum.Enum):
    """Which side of a plane a single point lies on."""

    FRONT = "front"
    BACK = "back"
    ON_PLANE = "on_plane"


class Classification(enum.Enum):
    """Aggregate position of a whole shape relative to a plane."""

    FRONT = "front"
    BACK = "back"
    COPLANAR = "coplanar"
    SPANNING = "spanning"


@dataclass(frozen=True)
class Plane:
    """Immutable oriented plane ``normal · p = offset``.

    The constructor normalises the normal and scales the offset by the
    same factor, so ``Plane((0, 0, 2), 4)`` describes ``z = 2``.  A
    normal shorter than machine epsilon raises :class:`GeometryError`.
    """

    normal: Vec3
    offset: float

    def __post_init__(self) -> None:
        n = as_vec3(self.normal)
        norm = length(n)
        if not norm > MACHINE_EPSILON:
            raise GeometryError("Plane normal cannot be zero")
        object.__setattr__(self, "normal", scale(n, 1.0 / norm))
        object.__setattr__(self, "offset", float(self.offset) / norm)

    @classmethod
    def from_point_and_normal(cls, point: Iterable[float], normal: Iterable[float]) -> "Plane":
        """Create the plane through ``point`` perpendicular to ``normal``."""
        n = as_vec3(normal)
        norm = length(n)
        if not norm > MACHINE_EPSILON:
            raise GeometryError("Plane normal cannot be zero")
        unit = scale(n, 1.0 / norm)
        return cls(unit, dot(unit, as_vec3(point)))

    @classmethod
    def from_three_points(
        cls, a: Iterable[float], b: Iterable[float], c: Iterable[float]
    ) -> "Plane":
        """Create a plane from three non-collinear points.

        The normal follows the right-hand rule ``(b - a) x (c - a)``.
        Collinear points yield a zero normal and raise
        :class:`GeometryError`.
        """
        a3, b3, c3 = as_vec3(a), as_vec3(b), as_vec3(c)
        return cls.from_point_and_normal(a3, cross(sub(b3, a3), sub(c3, a3)))

    def signed_distance(self, point: Vec3) -> float:
        """Signed distance from ``point``; positive in front of the plane."""
        return dot(self.normal, point) - self.offset

    def classify_point(self, point: Vec3, epsilon: float = PLANE_EPSILON) -> PlaneSide:
        """Classify a point as in front of, behind or on the plane."""
        dist = self.signed_distance(point)
        if dist > epsilon:
            return PlaneSide.FRONT
        if dist < -epsilon:
            return PlaneSide.BACK
        return PlaneSide.ON_PLANE

    def classify_point_with_epsilon(self, point: Vec3, epsilon: float) -> PlaneSide:
        return self.classify_point(point, epsilon)

    def flipped(self) -> "Plane":
        """Return the same plane facing the opposite direction."""
        return Plane(negate(self.normal), -self.offset)

    def project_point(self, point: Vec3) -> Vec3:
        """Return the closest point on the plane to ``point``."""
        return sub(point, scale(self.normal, self.signed_distance(point)))

    def intersect_segment(self, start: Vec3, end: Vec3) -> Optional[Tuple[float, Vec3]]:
        """Intersect the segment ``start -> end`` with the plane.

        Returns:
            ``(t, point)`` where ``t`` in ``[0, 1]`` is the interpolation
            parameter from ``start`` and ``point`` the intersection, or
            ``None`` when the segment is parallel to the plane or the
            crossing lies outside the segment.
        """
        direction = sub(end, start)
        denom = dot(self.normal, direction)
        if abs(denom) < MACHINE_EPSILON:
            return None
        t = (self.offset - dot(self.normal, start)) / denom
        if t < 0.0 or t > 1.0:
            return None
        return t, add(start, scale(direction, t))


def classify_vertices(
    vertices: Sequence[Vec3], plane: Plane, epsilon: float = PLANE_EPSILON
) -> List[PlaneSide]:
    """Classify every vertex of a shape against ``plane``."""
    return [plane.classify_point(v, epsilon) for v in vertices]


def classify_sides(sides: Sequence[PlaneSide]) -> Classification:
    """Reduce per-vertex sides to a shape classification.

    The order of the checks matters: a shape whose vertices are all on
    the plane has neither front nor back votes and must still report
    ``COPLANAR`` rather than ``FRONT``.
    """
    front = back = on_plane = 0
    for side in sides:
        if side is PlaneSide.FRONT:
            front += 1
        elif side is PlaneSide.BACK:
            back += 1
        else:
            on_plane += 1
    if on_plane == len(sides):
        return Classification.COPLANAR
    if back == 0:
        return Classification.FRONT
    if front == 0:
        return Classification.BACK
    return Classification.SPANNING
