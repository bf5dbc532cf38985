"""
Tests for converting flat mesh buffers into BSP input triangles.

The unit cube mesh below mirrors the flat vertex/index layout used by
the API.  Building a tree from it must keep all twelve triangles since
no face plane of a convex solid cuts any other face.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from bspview.services.bsp_tree import BspTree
from bspview.services.mesh_import import triangles_from_mesh
from bspview.services.primitives import GeometryError, Triangle
from bspview.services.visitor import CollectingVisitor


def create_unit_cube_mesh() -> tuple[list[float], list[int]]:
    """Construct vertices and indices for a unit cube with corners at (0,0,0) and (1,1,1)."""
    verts = [
        0.0, 0.0, 0.0,  # 0
        1.0, 0.0, 0.0,  # 1
        1.0, 1.0, 0.0,  # 2
        0.0, 1.0, 0.0,  # 3
        0.0, 0.0, 1.0,  # 4
        1.0, 0.0, 1.0,  # 5
        1.0, 1.0, 1.0,  # 6
        0.0, 1.0, 1.0,  # 7
    ]
    idx = [
        0, 1, 2, 0, 2, 3,  # bottom face (z=0)
        4, 5, 6, 4, 6, 7,  # top face (z=1)
        0, 1, 5, 0, 5, 4,  # front face (y=0)
        3, 2, 6, 3, 6, 7,  # back face (y=1)
        0, 4, 7, 0, 7, 3,  # left face (x=0)
        1, 2, 6, 1, 6, 5,  # right face (x=1)
    ]
    return verts, idx


def test_cube_mesh_produces_twelve_triangles() -> None:
    verts, idx = create_unit_cube_mesh()
    triangles = triangles_from_mesh(verts, idx)
    assert len(triangles) == 12
    assert all(isinstance(t, Triangle) for t in triangles)
    assert triangles[0].vertices == ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0))


def test_cube_tree_keeps_every_triangle() -> None:
    verts, idx = create_unit_cube_mesh()
    tree = BspTree.from_polygons(triangles_from_mesh(verts, idx))
    assert tree.polygon_count() == 12
    visitor = CollectingVisitor()
    tree.traverse_back_to_front((0.5, 0.5, 5.0), visitor)
    assert len(visitor.polygons) == 12


def test_degenerate_triangles_are_skipped() -> None:
    verts = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0, 1.0, 0.0]
    idx = [0, 1, 2, 0, 1, 3]
    assert len(triangles_from_mesh(verts, idx)) == 1
    assert len(triangles_from_mesh(verts, idx, skip_degenerate=False)) == 2


def test_empty_mesh_gives_no_triangles() -> None:
    assert triangles_from_mesh([], []) == []


@pytest.mark.parametrize(
    "verts, idx",
    [
        ([0.0, 0.0], [0, 0, 0]),  # vertex buffer not a multiple of 3
        ([0.0, 0.0, 0.0], [0, 0]),  # index buffer not a multiple of 3
        ([0.0, 0.0, 0.0], [0, 0, 1]),  # index out of range
        ([0.0, 0.0, 0.0], [0, -1, 0]),  # negative index
    ],
)
def test_malformed_buffers_are_rejected(verts, idx) -> None:
    with pytest.raises(GeometryError):
        triangles_from_mesh(verts, idx)
