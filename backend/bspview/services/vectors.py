"""
Small 3D vector helpers shared by the BSP geometry services.

Points and vectors are plain ``(x, y, z)`` tuples of floats.  Keeping the
representation this simple means every geometry object is hashable,
cheap to copy and trivially serialisable by the API layer.  The helpers
below are the only arithmetic the plane, primitive and splitting code
needs.
"""

from __future__ import annotations

import math
import sys
from typing import Iterable, Tuple

Vec3 = Tuple[float, float, float]

# Threshold below which a normal (or a segment/plane denominator) is
# treated as zero.  This is the double precision machine epsilon.
MACHINE_EPSILON: float = sys.float_info.epsilon


class GeometryError(ValueError):
    """Raised when input geometry violates a construction precondition.

    Degenerate normals, polygons with fewer than three vertices and
    non-coplanar vertex sets are caller bugs; they are reported eagerly
    instead of producing a shape that later operations cannot use.
    """


def as_vec3(value: Iterable[float]) -> Vec3:
    """Coerce any 3-element sequence into a ``Vec3`` float tuple.

    Lists, tuples and numpy rows are all accepted.  A value with the
    wrong number of components raises ``GeometryError``.
    """
    coords = tuple(float(c) for c in value)
    if len(coords) != 3:
        raise GeometryError(f"Expected 3 coordinates, got {len(coords)}")
    return coords  # type: ignore[return-value]


def add(a: Vec3, b: Vec3) -> Vec3:
    """Add two 3D vectors."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    """Subtract two 3D vectors (a - b)."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(a: Vec3, s: float) -> Vec3:
    """Scale a 3D vector by ``s``."""
    return (a[0] * s, a[1] * s, a[2] * s)


def negate(a: Vec3) -> Vec3:
    return (-a[0], -a[1], -a[2])


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two 3D vectors."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the right-handed cross product ``a x b``."""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(a: Vec3) -> float:
    """Euclidean length of a vector."""
    return math.sqrt(dot(a, a))


def is_close(a: Vec3, b: Vec3, abs_tol: float = 1e-9) -> bool:
    """Component-wise closeness test for two points."""
    return all(math.isclose(x, y, abs_tol=abs_tol) for x, y in zip(a, b))
