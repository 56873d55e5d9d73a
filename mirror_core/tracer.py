"""Single-bounce ray path construction off finite planar mirrors.

Example:
    >>> import numpy as np
    >>> from mirror_core.geometry import Segment
    >>> from mirror_core.tracer import trace_single_reflection
    >>> m = Segment.from_coords([200.0, 50.0], [200.0, 350.0])
    >>> path = trace_single_reflection(np.array([100.0, 100.0]), np.array([100.0, 300.0]), m)
    >>> np.allclose(path.mirror_point, np.array([200.0, 200.0]))
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from mirror_core.geometry import EPS, Segment, Vector, as_point, segment_segment_intersections
from mirror_core.reflection import reflect_point


class TraceFailure(str, Enum):
    DEGENERATE_MIRROR = "degenerate_mirror"
    NO_INTERSECTION = "no_intersection"
    PATH_NOT_ON_MIRROR = "path_not_on_mirror"
    INCOMPLETE_SHAPE_REFLECTION = "incomplete_shape_reflection"


@dataclass(frozen=True)
class RayPath:
    object_point: Vector
    mirror_point: Vector
    viewer_point: Vector
    virtual_object_point: Vector
    mirror_id: str = "mirror"

    def segments(self) -> Tuple[Tuple[Vector, Vector], Tuple[Vector, Vector]]:
        """The two drawn legs: object->mirror and mirror->viewer."""

        return (self.object_point, self.mirror_point), (self.mirror_point, self.viewer_point)

    def length(self) -> float:
        return float(
            np.linalg.norm(self.mirror_point - self.object_point) + np.linalg.norm(self.viewer_point - self.mirror_point)
        )


def trace_with_reason(
    object_point: Vector,
    viewer_point: Vector,
    mirror: Segment,
    eps: float = EPS,
) -> Tuple[Optional[RayPath], Optional[TraceFailure]]:
    """Trace object -> mirror -> viewer and report why a path is missing."""

    if mirror.is_degenerate(eps):
        return None, TraceFailure.DEGENERATE_MIRROR
    obj = as_point(object_point)
    viewer = as_point(viewer_point)
    virtual = reflect_point(obj, mirror, eps=eps)
    if virtual is None:
        return None, TraceFailure.NO_INTERSECTION

    hits = segment_segment_intersections(viewer, virtual, mirror.start, mirror.end, eps=eps)
    if len(hits) != 1:
        return None, TraceFailure.PATH_NOT_ON_MIRROR

    return (
        RayPath(
            object_point=obj,
            mirror_point=hits[0],
            viewer_point=viewer,
            virtual_object_point=virtual,
            mirror_id=mirror.mirror_id,
        ),
        None,
    )


def trace_single_reflection(object_point: Vector, viewer_point: Vector, mirror: Segment, eps: float = EPS) -> Optional[RayPath]:
    path, _ = trace_with_reason(object_point, viewer_point, mirror, eps=eps)
    return path


def trace_mirrors(object_point: Vector, viewer_point: Vector, mirrors: Sequence[Segment], eps: float = EPS) -> List[RayPath]:
    """Trace each mirror independently and keep the successful paths in input order."""

    paths: List[RayPath] = []
    for m in mirrors:
        path = trace_single_reflection(object_point, viewer_point, m, eps=eps)
        if path is not None:
            paths.append(path)
    return paths
