"""
Splitting-plane selection strategies for the BSP builder.

The builder asks a :class:`PlaneSelector` which of the remaining
polygons should supply the next node's splitting plane.  Only the
trivial :class:`FirstPolygon` strategy ships; tree shape therefore
depends on input order.  Alternative heuristics (fewest splits,
balanced subtrees) can be dropped in without touching the builder.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .primitives import Polygon


class PlaneSelector(ABC):
    """Policy choosing the splitter polygon from a candidate list."""

    @abstractmethod
    def select(self, polygons: Sequence[Polygon]) -> Optional[Polygon]:
        """Return one element of ``polygons``, or ``None`` if it is empty."""


class FirstPolygon(PlaneSelector):
    """Always pick the first polygon in the list."""

    def select(self, polygons: Sequence[Polygon]) -> Optional[Polygon]:
        return polygons[0] if polygons else None

    def __repr__(self) -> str:
        return "FirstPolygon()"
