"""Point and shape reflection across planar mirrors.

Example:
    >>> import numpy as np
    >>> from mirror_core.geometry import Segment
    >>> from mirror_core.reflection import reflect_point
    >>> m = Segment.from_coords([200.0, 50.0], [200.0, 350.0])
    >>> np.allclose(reflect_point(np.array([100.0, 100.0]), m), np.array([300.0, 100.0]))
    True
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from mirror_core.geometry import EPS, Segment, Vector, as_point, point_on_line, project_onto_line
from mirror_core.shapes import Shape, VirtualShape


def reflect_point(point: Vector, mirror: Segment, eps: float = EPS) -> Optional[Vector]:
    """Mirror image of ``point`` across the infinite line through ``mirror``.

    Returns None for a degenerate mirror or if the projection fails.
    """

    if mirror.is_degenerate(eps):
        return None
    p = as_point(point)
    line = mirror.as_line()
    if point_on_line(p, line, eps=eps):
        return p
    foot = project_onto_line(p, line, eps=eps)
    if foot is None:
        return None
    return 2.0 * foot - p


def reflect_shape(shape: Shape, mirror: Segment, eps: float = EPS) -> Optional[VirtualShape]:
    """Reflect every vertex of ``shape``; None if any vertex fails."""

    reflected: List[Vector] = []
    for v in shape.vertices:
        r = reflect_point(v, mirror, eps=eps)
        if r is None:
            return None
        reflected.append(r)
    return VirtualShape(
        kind=shape.kind,
        vertices=np.stack(reflected),
        source_id=shape.shape_id,
        mirror_id=mirror.mirror_id,
    )


def reflect_direction(direction: Vector, normal: Vector) -> Vector:
    """Specular reflection direction with unit normal."""

    d = np.asarray(direction, dtype=float)
    d = d / np.linalg.norm(d)
    n = np.asarray(normal, dtype=float)
    n = n / np.linalg.norm(n)
    r = d - 2.0 * np.dot(d, n) * n
    return r / np.linalg.norm(r)
