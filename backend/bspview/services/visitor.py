"""
Visitors receiving coplanar polygon groups during tree traversal.

A traversal calls its visitor once per node that stores polygons,
passing that node's coplanar group.  Anything with a ``visit`` method
works, and so does a plain callable taking the list of polygons.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from .primitives import Polygon


class BspVisitor(ABC):
    """Receives the coplanar polygons of each visited node."""

    @abstractmethod
    def visit(self, polygons: Sequence[Polygon]) -> None:
        ...


class CollectingVisitor(BspVisitor):
    """Accumulate every visited polygon, in visiting order."""

    def __init__(self) -> None:
        self._collected: List[Polygon] = []

    def visit(self, polygons: Sequence[Polygon]) -> None:
        self._collected.extend(polygons)

    @property
    def polygons(self) -> List[Polygon]:
        return self._collected

    def into_polygons(self) -> List[Polygon]:
        """Hand over the collected list and reset the visitor."""
        collected, self._collected = self._collected, []
        return collected


class FnVisitor(BspVisitor):
    """Adapt a function ``func(polygons)`` to the visitor interface."""

    def __init__(self, func: Callable[[Sequence[Polygon]], None]) -> None:
        self._func = func

    def visit(self, polygons: Sequence[Polygon]) -> None:
        self._func(polygons)
