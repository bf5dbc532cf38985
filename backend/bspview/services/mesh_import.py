"""
Conversion of flat mesh buffers into BSP input shapes.

Meshes travel through the API in the same flat layout used for mesh
responses elsewhere: ``vertices`` is ``[x0, y0, z0, x1, y1, z1, ...]``
and ``indices`` lists triangle corners three at a time.  This module
turns such buffers into :class:`Triangle` objects ready for
:meth:`BspTree.build`.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from .primitives import Triangle
from .vectors import MACHINE_EPSILON, GeometryError

logger = logging.getLogger(__name__)


def triangles_from_mesh(
    vertices: Sequence[float],
    indices: Sequence[int],
    skip_degenerate: bool = True,
) -> List[Triangle]:
    """Build triangles from flat vertex and index buffers.

    Args:
        vertices: Flat list of vertex coordinates; length must be a
            multiple of three.
        indices: Flat list of vertex indices; length must be a multiple
            of three.
        skip_degenerate: Drop zero-area triangles instead of returning
            them.  Degenerate triangles cannot supply a splitting plane.

    Returns:
        One :class:`Triangle` per index triplet, in buffer order.

    Raises:
        GeometryError: if a buffer has the wrong length or an index is
            out of range.
    """
    verts = np.asarray(vertices, dtype=float)
    idx = np.asarray(indices, dtype=np.int64)
    if verts.size % 3 != 0:
        raise GeometryError(f"Vertex buffer length {verts.size} is not a multiple of 3")
    if idx.size % 3 != 0:
        raise GeometryError(f"Index buffer length {idx.size} is not a multiple of 3")
    verts = verts.reshape(-1, 3)
    idx = idx.reshape(-1, 3)
    if idx.size and (idx.min() < 0 or idx.max() >= len(verts)):
        raise GeometryError(
            f"Triangle index out of range for {len(verts)} vertices"
        )

    corners = verts[idx]  # (T, 3, 3)
    normals = np.cross(corners[:, 1] - corners[:, 0], corners[:, 2] - corners[:, 0])
    norms = np.linalg.norm(normals, axis=1)
    keep = norms > MACHINE_EPSILON if skip_degenerate else np.ones(len(idx), dtype=bool)

    skipped = int(len(idx) - np.count_nonzero(keep))
    if skipped:
        logger.info("triangles_from_mesh: skipped %d degenerate triangles", skipped)

    return [
        Triangle(tuple(tri[0]), tuple(tri[1]), tuple(tri[2]))
        for tri in corners[keep].tolist()
    ]
