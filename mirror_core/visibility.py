"""Mirror visibility: does a point's projection land on the mirror's extent."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from mirror_core.geometry import EPS, Line, Segment, Vector, as_point, is_degenerate, point_on_line, point_on_segment, project_onto_line


def is_projected_on_segment(point: Vector, segment_start: Vector, segment_end: Vector, eps: float = EPS) -> bool:
    """True if the perpendicular foot of ``point`` lies on the closed segment.

    A zero-length segment is visible only from exactly that point.
    """

    p = as_point(point)
    a = as_point(segment_start)
    b = as_point(segment_end)
    if is_degenerate(a, b, eps=eps):
        return bool(np.array_equal(p, a))
    line = Line.through(a, b)
    if point_on_line(p, line, eps=eps):
        return point_on_segment(p, a, b, eps=eps)
    foot = project_onto_line(p, line, eps=eps)
    if foot is None:
        return False
    return point_on_segment(foot, a, b, eps=eps)


def visible_mirrors(point: Vector, mirrors: Sequence[Segment], eps: float = EPS) -> List[str]:
    """Ids of the mirrors ``point`` projects onto, in input order."""

    return [m.mirror_id for m in mirrors if is_projected_on_segment(point, m.start, m.end, eps=eps)]
