"""
Nodes of a BSP tree.

Each node owns a splitting plane, the polygons lying on that plane and
up to two child subtrees.  The coplanar polygons are kept in two lists
by facing: ``coplanar_front`` holds polygons whose normal points the same
way as the plane normal, ``coplanar_back`` those facing the other way.
A node without children is a leaf.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from .plane import Plane
from .primitives import Polygon
from .vectors import GeometryError, dot


class BspNode:
    """A single partition of space."""

    __slots__ = ("plane", "coplanar_front", "coplanar_back", "front", "back")

    def __init__(
        self,
        plane: Plane,
        coplanar_front: Iterable[Polygon] = (),
        coplanar_back: Iterable[Polygon] = (),
    ) -> None:
        self.plane = plane
        self.coplanar_front: List[Polygon] = list(coplanar_front)
        self.coplanar_back: List[Polygon] = list(coplanar_back)
        self.front: Optional[BspNode] = None
        self.back: Optional[BspNode] = None

    def __repr__(self) -> str:
        return (
            f"BspNode(plane={self.plane!r}, coplanar={self.coplanar_count()}, "
            f"front={self.front is not None}, back={self.back is not None})"
        )

    def set_front(self, node: Optional["BspNode"]) -> None:
        self.front = node

    def set_back(self, node: Optional["BspNode"]) -> None:
        self.back = node

    def add_coplanar_front(self, polygon: Polygon) -> None:
        self.coplanar_front.append(polygon)

    def add_coplanar_back(self, polygon: Polygon) -> None:
        self.coplanar_back.append(polygon)

    def all_coplanar(self) -> Iterator[Polygon]:
        """Front-facing coplanar polygons followed by back-facing ones."""
        yield from self.coplanar_front
        yield from self.coplanar_back

    def coplanar_count(self) -> int:
        return len(self.coplanar_front) + len(self.coplanar_back)

    def is_leaf(self) -> bool:
        return self.front is None and self.back is None

    def children(self) -> Iterator["BspNode"]:
        if self.front is not None:
            yield self.front
        if self.back is not None:
            yield self.back

    def polygon_count(self) -> int:
        """Number of polygons stored in this subtree."""
        count = 0
        stack: List[BspNode] = [self]
        while stack:
            node = stack.pop()
            count += node.coplanar_count()
            stack.extend(node.children())
        return count

    def depth(self) -> int:
        """Number of nodes on the longest path from here to a leaf."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            for child in node.children():
                stack.append((child, level + 1))
        return deepest


def faces_same_direction(polygon: Polygon, plane: Plane) -> bool:
    """Whether ``polygon`` faces the same half-space as ``plane``'s normal.

    Raises:
        GeometryError: if the polygon is degenerate and has no normal.
    """
    normal = polygon.unit_normal()
    if normal is None:
        raise GeometryError("Polygon must have a valid normal for BSP operations")
    return dot(normal, plane.normal) > 0.0
