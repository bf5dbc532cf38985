"""
BSP tree construction and depth-ordered traversal.

A :class:`BspTree` is built once from a complete list of shapes and then
queried for as long as it lives.  Building repeatedly picks a splitter
polygon (via a :class:`~selector.PlaneSelector`), files polygons lying on
its plane into the node by facing, sends everything else to the front or
back child and splits polygons that straddle the plane.

Given an eye position the tree can then hand out its coplanar polygon
groups in strict front-to-back or back-to-front order without any
per-frame sorting: at every node the child on the eye's side of the
plane is nearer than the node's own polygons, which are in turn nearer
than the child on the far side.

Construction and traversal use explicit stacks rather than recursion;
an adversarial input order can produce a list-shaped tree as deep as
the input is long.

Usage::

    tree = BspTree.from_polygons(shapes)
    visitor = CollectingVisitor()
    tree.traverse_back_to_front((0.0, 0.0, 10.0), visitor)
    draw(visitor.into_polygons())
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .bsp_node import BspNode, faces_same_direction
from .cutting import split_polygon
from .plane import PLANE_EPSILON, Classification, PlaneSide, classify_sides, classify_vertices
from .primitives import Polygon, ShapeLike, as_polygon
from .selector import FirstPolygon, PlaneSelector
from .vectors import Vec3, as_vec3
from .visitor import BspVisitor

logger = logging.getLogger(__name__)

VisitorLike = Union[BspVisitor, Callable[[Sequence[Polygon]], None]]


@dataclass
class BuildStats:
    """Counters gathered while building a tree (debug logging only)."""

    input_count: int = 0
    node_count: int = 0
    split_count: int = 0
    dropped_fragments: int = 0


class BspTree:
    """Binary space partition over convex polygons."""

    def __init__(self, root: Optional[BspNode] = None, epsilon: float = PLANE_EPSILON) -> None:
        self._root = root
        self.epsilon = epsilon

    @classmethod
    def build(
        cls,
        shapes: Iterable[ShapeLike],
        selector: PlaneSelector,
        epsilon: float = PLANE_EPSILON,
    ) -> "BspTree":
        """Build a tree from ``shapes`` using ``selector`` to pick planes.

        Shapes may be polygons, triangles, rectangles or raw vertex lists;
        all are lowered to :class:`Polygon` first.  The same ``epsilon``
        is used for classification, splitting and later traversal.
        """
        polygons = [as_polygon(s) for s in shapes]
        stats = BuildStats(input_count=len(polygons))
        root = _build_nodes(polygons, selector, epsilon, stats)
        tree = cls(root, epsilon)
        if os.getenv("BSP_DEBUG"):
            logger.debug(
                "BspTree.build: input=%d stored=%d nodes=%d depth=%d splits=%d dropped=%d selector=%r",
                stats.input_count,
                tree.polygon_count(),
                stats.node_count,
                tree.depth(),
                stats.split_count,
                stats.dropped_fragments,
                selector,
            )
        return tree

    @classmethod
    def from_polygons(cls, shapes: Iterable[ShapeLike]) -> "BspTree":
        """Build a tree with the default :class:`FirstPolygon` selector."""
        return cls.build(shapes, FirstPolygon())

    @property
    def root(self) -> Optional[BspNode]:
        return self._root

    def is_empty(self) -> bool:
        return self._root is None

    def polygon_count(self) -> int:
        return 0 if self._root is None else self._root.polygon_count()

    def depth(self) -> int:
        return 0 if self._root is None else self._root.depth()

    def collect_polygons(self) -> List[Polygon]:
        """Flatten the tree in pre-order (coplanar, front, back).

        The result contains every stored polygon exactly once but is not
        depth ordered.
        """
        result: List[Polygon] = []
        stack: List[BspNode] = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            result.extend(node.all_coplanar())
            if node.back is not None:
                stack.append(node.back)
            if node.front is not None:
                stack.append(node.front)
        return result

    def iter_front_to_back(self, eye: Iterable[float]) -> Iterator[List[Polygon]]:
        """Yield coplanar polygon groups nearest-first as seen from ``eye``."""
        return _iter_ordered(self._root, as_vec3(eye), self.epsilon, near_first=True)

    def iter_back_to_front(self, eye: Iterable[float]) -> Iterator[List[Polygon]]:
        """Yield coplanar polygon groups farthest-first as seen from ``eye``."""
        return _iter_ordered(self._root, as_vec3(eye), self.epsilon, near_first=False)

    def traverse_front_to_back(self, eye: Iterable[float], visitor: VisitorLike) -> None:
        """Visit every non-empty coplanar group, nearest first."""
        visit = _visit_callable(visitor)
        for group in self.iter_front_to_back(eye):
            visit(group)

    def traverse_back_to_front(self, eye: Iterable[float], visitor: VisitorLike) -> None:
        """Visit every non-empty coplanar group, farthest first (painter's order)."""
        visit = _visit_callable(visitor)
        for group in self.iter_back_to_front(eye):
            visit(group)


def _visit_callable(visitor: VisitorLike) -> Callable[[Sequence[Polygon]], None]:
    if isinstance(visitor, BspVisitor):
        return visitor.visit
    if callable(visitor):
        return visitor
    raise TypeError(f"visitor must be a BspVisitor or callable, got {type(visitor).__name__}")


def _take_splitter(polygons: List[Polygon], selector: PlaneSelector) -> Polygon:
    """Remove and return the polygon chosen by ``selector``.

    The element is swapped with the last one before popping, so the
    remaining order is not preserved.
    """
    chosen = selector.select(polygons)
    if chosen is None:
        raise ValueError(f"{selector!r} returned no polygon for a non-empty list")
    index = next((i for i, p in enumerate(polygons) if p is chosen), None)
    if index is None:
        # Selectors may hand back an equal copy rather than the element itself
        index = polygons.index(chosen)
    last = polygons.pop()
    if index < len(polygons):
        polygons[index] = last
    return chosen


def _partition(
    polygons: List[Polygon],
    selector: PlaneSelector,
    epsilon: float,
    stats: BuildStats,
) -> Tuple[BspNode, List[Polygon], List[Polygon]]:
    splitter = _take_splitter(polygons, selector)
    plane = splitter.plane()
    node = BspNode(plane)
    if faces_same_direction(splitter, plane):
        node.add_coplanar_front(splitter)
    else:
        node.add_coplanar_back(splitter)

    front_list: List[Polygon] = []
    back_list: List[Polygon] = []
    for polygon in polygons:
        sides = classify_vertices(polygon.vertices, plane, epsilon)
        classification = classify_sides(sides)
        if classification is Classification.FRONT:
            front_list.append(polygon)
        elif classification is Classification.BACK:
            back_list.append(polygon)
        elif classification is Classification.COPLANAR:
            if faces_same_direction(polygon, plane):
                node.add_coplanar_front(polygon)
            else:
                node.add_coplanar_back(polygon)
        else:
            front_part, back_part = split_polygon(polygon, plane, sides)
            stats.split_count += 1
            if front_part is not None:
                front_list.append(front_part)
            else:
                stats.dropped_fragments += 1
            if back_part is not None:
                back_list.append(back_part)
            else:
                stats.dropped_fragments += 1
    stats.node_count += 1
    return node, front_list, back_list


def _build_nodes(
    polygons: List[Polygon],
    selector: PlaneSelector,
    epsilon: float,
    stats: BuildStats,
) -> Optional[BspNode]:
    if not polygons:
        return None
    root, front_list, back_list = _partition(polygons, selector, epsilon, stats)
    stack = [(root, front_list, back_list)]
    while stack:
        node, front_list, back_list = stack.pop()
        if front_list:
            child, f, b = _partition(front_list, selector, epsilon, stats)
            node.set_front(child)
            stack.append((child, f, b))
        if back_list:
            child, f, b = _partition(back_list, selector, epsilon, stats)
            node.set_back(child)
            stack.append((child, f, b))
    return root


def _iter_ordered(
    root: Optional[BspNode],
    eye: Vec3,
    epsilon: float,
    near_first: bool,
) -> Iterator[List[Polygon]]:
    # Stack items are either nodes still to expand or coplanar groups
    # ready to be yielded.
    stack: List[Union[BspNode, List[Polygon]]] = [root] if root is not None else []
    while stack:
        item = stack.pop()
        if isinstance(item, list):
            yield item
            continue
        if item.plane.classify_point(eye, epsilon) is PlaneSide.BACK:
            near, far = item.back, item.front
        else:
            near, far = item.front, item.back
        first, last = (near, far) if near_first else (far, near)
        group = list(item.all_coplanar())
        if last is not None:
            stack.append(last)
        if group:
            stack.append(group)
        if first is not None:
            stack.append(first)
