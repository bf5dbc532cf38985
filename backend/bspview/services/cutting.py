"""
Polygon splitting against a plane.

:func:`cut` returns a ``(front, back)`` pair of optional polygons:

- ``FRONT`` or ``COPLANAR`` shapes come back whole on the front side.
- ``BACK`` shapes come back whole on the back side.
- ``SPANNING`` shapes are clipped in a single walk over the vertex
  cycle (a Sutherland–Hodgman style split) that keeps the original
  winding.

Triangles and rectangles are lowered to :class:`Polygon` first; there is
no specialised rectangle clip.  The per-vertex sides computed here are
the same ones :meth:`Shape.classify` reduces, so the split can never
disagree with the classification that triggered it.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Tuple

from .plane import PLANE_EPSILON, Classification, Plane, PlaneSide, classify_sides, classify_vertices
from .primitives import Polygon, ShapeLike, as_polygon
from .vectors import Vec3

logger = logging.getLogger(__name__)

CutResult = Tuple[Optional[Polygon], Optional[Polygon]]


def cut(shape: ShapeLike, plane: Plane, epsilon: float = PLANE_EPSILON) -> CutResult:
    """Cut ``shape`` by ``plane`` into optional front and back parts.

    Args:
        shape: Any primitive (or raw vertex list) to split.
        plane: The splitting plane.
        epsilon: Tolerance for the on-plane test.

    Returns:
        ``(front, back)``; either side is ``None`` when no polygon with at
        least three vertices lies there.
    """
    polygon = as_polygon(shape)
    sides = classify_vertices(polygon.vertices, plane, epsilon)
    classification = classify_sides(sides)
    if classification in (Classification.FRONT, Classification.COPLANAR):
        return polygon, None
    if classification is Classification.BACK:
        return None, polygon
    return split_polygon(polygon, plane, sides)


def split_polygon(
    polygon: Polygon,
    plane: Plane,
    sides: Optional[List[PlaneSide]] = None,
    epsilon: float = PLANE_EPSILON,
) -> CutResult:
    """Split a spanning polygon into its front and back parts.

    Each vertex goes to the list matching its side; on-plane vertices go
    to both.  Only an edge joining a strict front vertex to a strict back
    vertex (in either order) inserts an intersection point, and that
    point is appended to both lists.  A list shorter than three vertices
    yields ``None`` for its side, which happens when the plane only
    grazes the polygon.

    Args:
        polygon: The polygon to split.
        plane: The splitting plane.
        sides: Precomputed per-vertex sides; computed with ``epsilon``
            when omitted.
        epsilon: Tolerance used when ``sides`` is not supplied.
    """
    vertices = polygon.vertices
    if sides is None:
        sides = classify_vertices(vertices, plane, epsilon)
    n = len(vertices)
    front_verts: List[Vec3] = []
    back_verts: List[Vec3] = []

    for i in range(n):
        current = vertices[i]
        current_side = sides[i]
        j = (i + 1) % n
        nxt = vertices[j]
        next_side = sides[j]

        if current_side is PlaneSide.FRONT:
            front_verts.append(current)
        elif current_side is PlaneSide.BACK:
            back_verts.append(current)
        else:
            front_verts.append(current)
            back_verts.append(current)

        crosses = (current_side is PlaneSide.FRONT and next_side is PlaneSide.BACK) or (
            current_side is PlaneSide.BACK and next_side is PlaneSide.FRONT
        )
        if crosses:
            hit = plane.intersect_segment(current, nxt)
            if hit is not None:
                _, point = hit
                front_verts.append(point)
                back_verts.append(point)

    front = Polygon(front_verts) if len(front_verts) >= 3 else None
    back = Polygon(back_verts) if len(back_verts) >= 3 else None
    if os.getenv("BSP_DEBUG") and (front is None or back is None):
        logger.debug(
            "split_polygon: dropped sliver (front=%d verts, back=%d verts)",
            len(front_verts),
            len(back_verts),
        )
    return front, back
