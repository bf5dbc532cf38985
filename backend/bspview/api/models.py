"""
Pydantic data models for the BSP scene API.

These models define the request and response bodies used by the scene
routes.  Geometry is exchanged as plain coordinate lists so that any
client (a renderer, a test harness, a notebook) can submit shapes and
consume depth-ordered polygon groups without sharing Python types.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class Point3D(BaseModel):
    """Single 3D point, used for eye positions."""

    x: float
    y: float
    z: float


class ShapeIn(BaseModel):
    """One convex planar shape submitted for tree construction.

    ``polygon`` and ``triangle`` shapes use ``vertices``; ``rectangle``
    shapes use either ``origin``/``u``/``v`` or four corner
    ``vertices``.
    """

    kind: Literal["polygon", "triangle", "rectangle"] = Field(
        default="polygon", description="Shape type"
    )
    vertices: List[List[float]] | None = Field(
        default=None,
        description="Ordered [x, y, z] vertices; winding defines the normal",
    )
    origin: List[float] | None = Field(default=None, description="Rectangle origin corner")
    u: List[float] | None = Field(default=None, description="Rectangle first edge vector")
    v: List[float] | None = Field(default=None, description="Rectangle second edge vector")


class MeshIn(BaseModel):
    """Triangle mesh in flat buffer form."""

    vertices: List[float] = Field(..., description="Flat list of vertex positions (x, y, z …)")
    indices: List[int] = Field(..., description="Index buffer defining the mesh triangles")


class SceneCreateRequest(BaseModel):
    """Request body for building a new scene tree."""

    shapes: List[ShapeIn] = Field(default_factory=list, description="Shapes to partition")
    mesh: MeshIn | None = Field(
        default=None,
        description="Optional triangle mesh appended after the explicit shapes",
    )


class SceneInfo(BaseModel):
    """Summary of a built scene tree."""

    sceneId: str = Field(..., description="Unique identifier of the stored tree")
    polygonCount: int = Field(..., description="Total polygons stored after splitting")
    depth: int = Field(..., description="Depth of the tree (0 for an empty tree)")
    isEmpty: bool = Field(..., description="Whether the tree has no root")


class PolygonOut(BaseModel):
    """A polygon returned by the API."""

    vertices: List[List[float]] = Field(..., description="Ordered [x, y, z] vertices")


class PolygonListResponse(BaseModel):
    """All polygons of a scene in storage order."""

    sceneId: str
    polygons: List[PolygonOut]


class TraverseRequest(BaseModel):
    """Request body for a depth-ordered traversal."""

    eye: Point3D = Field(..., description="Viewpoint the ordering is computed for")
    order: Literal["front_to_back", "back_to_front"] = Field(
        default="back_to_front",
        description="'back_to_front' for painter's order, 'front_to_back' for nearest first",
    )


class TraverseResponse(BaseModel):
    """Coplanar polygon groups in the requested depth order."""

    sceneId: str
    order: str
    groups: List[List[PolygonOut]] = Field(
        ..., description="One entry per visited node; order within a group is unspecified"
    )
