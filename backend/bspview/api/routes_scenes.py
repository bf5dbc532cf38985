"""
Routes for building and traversing BSP scenes.

A client posts a set of convex shapes (and optionally a triangle mesh),
the service builds a :class:`BspTree` once and stores it, and later
requests ask for the stored polygons in front-to-back or back-to-front
order for a given eye position.  The routes only use the tree's public
entry points; rendering is left entirely to the client.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from fastapi import APIRouter, HTTPException, Response

from .models import (
    PolygonListResponse,
    PolygonOut,
    SceneCreateRequest,
    SceneInfo,
    ShapeIn,
    TraverseRequest,
    TraverseResponse,
)
from ..services.bsp_tree import BspTree
from ..services.mesh_import import triangles_from_mesh
from ..services.primitives import GeometryError, Polygon, Rectangle, Shape, Triangle
from ..services.scene_store import delete_scene, get_scene, put_scene

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_shape(shape: ShapeIn) -> Shape:
    """Convert a request shape into a geometry primitive.

    Raises:
        GeometryError: if required fields are missing or invalid.
    """
    if shape.kind == "rectangle":
        if shape.origin is not None and shape.u is not None and shape.v is not None:
            return Rectangle(shape.origin, shape.u, shape.v)
        if shape.vertices is not None and len(shape.vertices) == 4:
            return Rectangle.from_corners(*shape.vertices)
        raise GeometryError("rectangle requires origin/u/v or exactly four vertices")
    if shape.vertices is None:
        raise GeometryError(f"{shape.kind} requires vertices")
    if shape.kind == "triangle":
        if len(shape.vertices) != 3:
            raise GeometryError(f"triangle requires 3 vertices, got {len(shape.vertices)}")
        return Triangle(*shape.vertices)
    return Polygon(shape.vertices)


def _polygon_out(polygon: Polygon) -> PolygonOut:
    return PolygonOut(vertices=[list(v) for v in polygon.vertices])


def _scene_info(scene_id: str, tree: BspTree) -> SceneInfo:
    return SceneInfo(
        sceneId=scene_id,
        polygonCount=tree.polygon_count(),
        depth=tree.depth(),
        isEmpty=tree.is_empty(),
    )


def _require_scene(scene_id: str) -> BspTree:
    tree = get_scene(scene_id)
    if tree is None:
        raise HTTPException(status_code=404, detail=f"Scene '{scene_id}' not found")
    return tree


@router.post("/scenes", response_model=SceneInfo, status_code=201)
async def create_scene(body: SceneCreateRequest) -> SceneInfo:
    """Build a BSP tree from the submitted shapes and store it."""
    try:
        shapes: List[Shape] = [_to_shape(s) for s in body.shapes]
        if body.mesh is not None:
            shapes.extend(triangles_from_mesh(body.mesh.vertices, body.mesh.indices))
        tree = BspTree.from_polygons(shapes)
    except GeometryError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        logger.exception("scene build failed: %s", exc)
        raise HTTPException(status_code=500, detail=f"Failed to build scene: {exc}")
    scene_id = put_scene(tree)
    logger.info(
        "Built scene %s: %d shapes in, %d polygons stored, depth %d",
        scene_id,
        len(shapes),
        tree.polygon_count(),
        tree.depth(),
    )
    return _scene_info(scene_id, tree)


@router.get("/scenes/{scene_id}", response_model=SceneInfo)
async def get_scene_info(scene_id: str) -> SceneInfo:
    """Return summary information for a stored scene."""
    return _scene_info(scene_id, _require_scene(scene_id))


@router.get("/scenes/{scene_id}/polygons", response_model=PolygonListResponse)
async def get_scene_polygons(scene_id: str) -> PolygonListResponse:
    """Return every stored polygon (storage order, not depth order)."""
    tree = _require_scene(scene_id)
    return PolygonListResponse(
        sceneId=scene_id,
        polygons=[_polygon_out(p) for p in tree.collect_polygons()],
    )


@router.post("/scenes/{scene_id}/traverse", response_model=TraverseResponse)
async def traverse_scene(scene_id: str, body: TraverseRequest) -> TraverseResponse:
    """Return the scene's coplanar groups in depth order for ``body.eye``."""
    tree = _require_scene(scene_id)
    eye = (body.eye.x, body.eye.y, body.eye.z)
    groups: List[List[PolygonOut]] = []

    def collect(polygons: Sequence[Polygon]) -> None:
        groups.append([_polygon_out(p) for p in polygons])

    if body.order == "front_to_back":
        tree.traverse_front_to_back(eye, collect)
    else:
        tree.traverse_back_to_front(eye, collect)
    return TraverseResponse(sceneId=scene_id, order=body.order, groups=groups)


@router.delete("/scenes/{scene_id}", status_code=204)
async def remove_scene(scene_id: str) -> Response:
    """Drop a stored scene."""
    if not delete_scene(scene_id):
        raise HTTPException(status_code=404, detail=f"Scene '{scene_id}' not found")
    return Response(status_code=204)
