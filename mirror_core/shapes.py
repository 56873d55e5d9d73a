"""Physical shapes and their virtual (reflected) counterparts.

Example:
    >>> import numpy as np
    >>> from mirror_core.shapes import ShapeKind, object_outline
    >>> shape = object_outline(np.array([100.0, 100.0]), ShapeKind.TRIANGLE, radius=10.0)
    >>> shape.vertices.shape
    (3, 2)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from mirror_core.geometry import as_point

Vertices = NDArray[np.float64]


class ShapeKind(str, Enum):
    POINT = "point"
    TRIANGLE = "triangle"
    POLYGON = "polygon"


def _check_vertices(kind: ShapeKind, vertices: Vertices) -> Vertices:
    v = np.array(vertices, dtype=float)
    if v.ndim != 2 or v.shape[1] != 2 or v.shape[0] == 0:
        raise ValueError(f"Vertices must have shape (N,2) with N>=1, got {v.shape}")
    if not np.all(np.isfinite(v)):
        raise ValueError("Vertex coordinates must be finite")
    n = v.shape[0]
    if kind is ShapeKind.POINT and n != 1:
        raise ValueError(f"point shape needs exactly 1 vertex, got {n}")
    if kind is ShapeKind.TRIANGLE and n != 3:
        raise ValueError(f"triangle shape needs exactly 3 vertices, got {n}")
    if kind is ShapeKind.POLYGON and n < 3:
        raise ValueError(f"polygon shape needs at least 3 vertices, got {n}")
    return v


@dataclass(frozen=True)
class Shape:
    """Physical object outline: one vertex for a point, an ordered ring otherwise."""

    kind: ShapeKind
    vertices: Vertices
    shape_id: str = "object"

    def __post_init__(self) -> None:
        kind = ShapeKind(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "vertices", _check_vertices(kind, self.vertices))


@dataclass(frozen=True)
class VirtualShape:
    """Reflected shape. ``source_id`` names the physical shape it came from."""

    kind: ShapeKind
    vertices: Vertices
    source_id: str
    mirror_id: str = "mirror"

    def __post_init__(self) -> None:
        kind = ShapeKind(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "vertices", _check_vertices(kind, self.vertices))


def object_outline(position: Vertices, kind: ShapeKind = ShapeKind.TRIANGLE, radius: float = 10.0, shape_id: str = "object") -> Shape:
    """Vertices of a scene object centred at ``position``.

    Triangles point to +x: tip at (x+r, y), base corners at (x-r/2, y-r)
    and (x-r/2, y+r).
    """

    x, y = as_point(position)
    kind = ShapeKind(kind)
    if kind is ShapeKind.POINT:
        return Shape(kind, np.array([[x, y]]), shape_id)
    if kind is ShapeKind.TRIANGLE:
        r = float(radius)
        verts = np.array([[x + r, y], [x - r / 2.0, y - r], [x - r / 2.0, y + r]])
        return Shape(kind, verts, shape_id)
    raise ValueError(f"No default outline for shape kind {kind.value!r}")
