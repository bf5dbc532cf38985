"""
Convex planar primitives stored in BSP trees.

Three shape types are provided:

- :class:`Polygon` – an ordered list of three or more coplanar vertices.
  This is the canonical form used by the tree builder and splitter.
- :class:`Triangle` – exactly three vertices.
- :class:`Rectangle` – an origin corner plus two edge vectors ``u`` and
  ``v``; its corners are ``origin``, ``origin + u``, ``origin + u + v``
  and ``origin + v``.

Vertex order defines the winding and therefore the normal direction via
the right-hand rule applied to the first vertex and its two successors.
Normals, planes and centroids are always derived from the vertices and
never cached, so a shape cannot carry stale derived data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from .plane import (
    PLANE_EPSILON,
    Classification,
    Plane,
    PlaneSide,
    classify_sides,
    classify_vertices,
)
from .vectors import (
    MACHINE_EPSILON,
    GeometryError,
    Vec3,
    add,
    as_vec3,
    cross,
    length,
    scale,
    sub,
)

__all__ = [
    "GeometryError",
    "Shape",
    "Polygon",
    "Triangle",
    "Rectangle",
    "as_polygon",
]


class Shape:
    """Behaviour shared by every convex planar primitive.

    Subclasses only need to expose :attr:`vertices`; everything else is
    derived from it.  :class:`Rectangle` overrides a few members with
    cheaper closed forms.
    """

    @property
    def vertices(self) -> Tuple[Vec3, ...]:  # pragma: no cover - abstract
        raise NotImplementedError

    def __len__(self) -> int:
        return len(self.vertices)

    def normal(self) -> Vec3:
        """Unnormalised normal ``(v1 - v0) x (v2 - v0)``."""
        a, b, c = self.vertices[0], self.vertices[1], self.vertices[2]
        return cross(sub(b, a), sub(c, a))

    def unit_normal(self) -> Optional[Vec3]:
        """Unit normal, or ``None`` when the leading vertices are collinear."""
        n = self.normal()
        norm = length(n)
        if norm > MACHINE_EPSILON:
            return scale(n, 1.0 / norm)
        return None

    def plane(self) -> Plane:
        """Supporting plane through the first three vertices.

        Raises:
            GeometryError: if those vertices are collinear.
        """
        a, b, c = self.vertices[0], self.vertices[1], self.vertices[2]
        return Plane.from_three_points(a, b, c)

    def centroid(self) -> Vec3:
        """Arithmetic mean of the vertices."""
        verts = self.vertices
        sx = sum(v[0] for v in verts)
        sy = sum(v[1] for v in verts)
        sz = sum(v[2] for v in verts)
        n = float(len(verts))
        return (sx / n, sy / n, sz / n)

    def area(self) -> float:
        """Surface area, computed as the length of the fan vector area."""
        verts = self.vertices
        origin = verts[0]
        total = (0.0, 0.0, 0.0)
        for i in range(1, len(verts) - 1):
            total = add(total, cross(sub(verts[i], origin), sub(verts[i + 1], origin)))
        return 0.5 * length(total)

    def classify(self, plane: Plane, epsilon: float = PLANE_EPSILON) -> Classification:
        """Classify this shape against ``plane`` by per-vertex votes."""
        return classify_sides(classify_vertices(self.vertices, plane, epsilon))

    def to_polygon(self) -> "Polygon":
        return Polygon(self.vertices)

    def cut(self, plane: Plane, epsilon: float = PLANE_EPSILON):
        """Split this shape by ``plane``; see :func:`cutting.cut`."""
        from .cutting import cut  # Local import to avoid cycles

        return cut(self, plane, epsilon)


def _are_coplanar(vertices: Sequence[Vec3]) -> bool:
    if len(vertices) <= 3:
        return True
    plane = Plane.from_three_points(vertices[0], vertices[1], vertices[2])
    return all(plane.classify_point(v) is PlaneSide.ON_PLANE for v in vertices[3:])


@dataclass(frozen=True)
class Polygon(Shape):
    """Convex polygon with three or more coplanar vertices.

    Vertices should wind counter-clockwise when viewed from the side the
    normal points to.  Fewer than three vertices raise
    :class:`GeometryError`; so does a non-coplanar vertex set while
    assertions are enabled (the check is skipped under ``python -O``).
    """

    points: Tuple[Vec3, ...]

    def __init__(self, vertices: Iterable[Iterable[float]]) -> None:
        points = tuple(as_vec3(v) for v in vertices)
        if len(points) < 3:
            raise GeometryError(
                f"Polygon must have at least 3 vertices, got {len(points)}"
            )
        if __debug__ and not _are_coplanar(points):
            raise GeometryError("Polygon vertices must be coplanar")
        object.__setattr__(self, "points", points)

    @property
    def vertices(self) -> Tuple[Vec3, ...]:
        return self.points

    def to_polygon(self) -> "Polygon":
        return self


@dataclass(frozen=True)
class Triangle(Shape):
    """Triangle ``a, b, c``; the normal is ``(b - a) x (c - a)``."""

    a: Vec3
    b: Vec3
    c: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "a", as_vec3(self.a))
        object.__setattr__(self, "b", as_vec3(self.b))
        object.__setattr__(self, "c", as_vec3(self.c))

    @property
    def vertices(self) -> Tuple[Vec3, Vec3, Vec3]:
        return (self.a, self.b, self.c)

    def centroid(self) -> Vec3:
        return scale(add(add(self.a, self.b), self.c), 1.0 / 3.0)

    def area(self) -> float:
        return 0.5 * length(self.normal())


@dataclass(frozen=True)
class Rectangle(Shape):
    """Rectangle spanned by an origin corner and edge vectors ``u``, ``v``.

    Vertices are ``origin``, ``origin + u``, ``origin + u + v`` and
    ``origin + v``, counter-clockwise around ``u x v``.  The compact form
    is kept for area and normal queries; splitting always goes through
    the generic polygon path.
    """

    origin: Vec3
    u: Vec3
    v: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "u", as_vec3(self.u))
        object.__setattr__(self, "v", as_vec3(self.v))

    @classmethod
    def from_corners(
        cls,
        a: Iterable[float],
        b: Iterable[float],
        c: Iterable[float],
        d: Iterable[float],
    ) -> "Rectangle":
        """Build a rectangle from four corners wound ``a -> b -> c -> d``.

        Internally ``u = b - a`` and ``v = d - a``; the opposite corner
        ``c`` is only used to check coplanarity.
        """
        a3, b3, c3, d3 = as_vec3(a), as_vec3(b), as_vec3(c), as_vec3(d)
        if __debug__:
            plane = Plane.from_three_points(a3, b3, d3)
            if plane.classify_point(c3) is not PlaneSide.ON_PLANE:
                raise GeometryError("Rectangle corners must be coplanar")
        return cls(a3, sub(b3, a3), sub(d3, a3))

    @property
    def vertices(self) -> Tuple[Vec3, Vec3, Vec3, Vec3]:
        return (
            self.origin,
            add(self.origin, self.u),
            add(add(self.origin, self.u), self.v),
            add(self.origin, self.v),
        )

    def normal(self) -> Vec3:
        return cross(self.u, self.v)

    def plane(self) -> Plane:
        return Plane.from_point_and_normal(self.origin, self.normal())

    def centroid(self) -> Vec3:
        return add(self.origin, scale(add(self.u, self.v), 0.5))

    def area(self) -> float:
        return length(self.normal())


ShapeLike = Union[Shape, Sequence[Iterable[float]]]


def as_polygon(shape: ShapeLike) -> Polygon:
    """Lower any supported shape, or a raw vertex sequence, to a Polygon."""
    if isinstance(shape, Shape):
        return shape.to_polygon()
    return Polygon(shape)
