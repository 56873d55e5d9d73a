"""2D geometry primitives and intersection helpers.

Example:
    >>> import numpy as np
    >>> from mirror_core.geometry import Line, line_line_intersection
    >>> a = Line.through(np.array([0.0, 0.0]), np.array([10.0, 0.0]))
    >>> b = Line.through(np.array([5.0, -5.0]), np.array([5.0, 5.0]))
    >>> np.allclose(line_line_intersection(a, b), np.array([5.0, 0.0]))
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence
import warnings

import numpy as np
from numpy.typing import NDArray

Vector = NDArray[np.float64]

EPS = 1e-9


def as_point(p: Sequence[float] | Vector) -> Vector:
    """Coerce a 2-sequence into a fresh float64 point."""

    v = np.array(p, dtype=float)
    if v.shape != (2,):
        raise ValueError(f"Point must have shape (2,), got {v.shape}")
    if not np.all(np.isfinite(v)):
        raise ValueError("Point coordinates must be finite")
    return v


def normalize(v: Vector) -> Vector:
    vv = np.asarray(v, dtype=float)
    n = np.linalg.norm(vv)
    if n == 0:
        raise ValueError("Cannot normalize zero vector")
    return vv / n


def cross2(a: Vector, b: Vector) -> float:
    return float(a[0] * b[1] - a[1] * b[0])


def is_degenerate(start: Vector, end: Vector, eps: float = EPS) -> bool:
    d = np.asarray(end, dtype=float) - np.asarray(start, dtype=float)
    return float(np.linalg.norm(d)) <= eps


@dataclass(frozen=True)
class Line:
    """Infinite line through ``point`` along ``direction``."""

    point: Vector
    direction: Vector

    @classmethod
    def through(cls, a: Vector, b: Vector) -> "Line":
        pa = as_point(a)
        pb = as_point(b)
        if is_degenerate(pa, pb):
            raise ValueError("Cannot build a line through coincident points")
        return cls(point=pa, direction=pb - pa)

    def unit_direction(self) -> Vector:
        return normalize(self.direction)

    def normal(self) -> Vector:
        d = self.unit_direction()
        return np.array([-d[1], d[0]])


@dataclass(frozen=True)
class Segment:
    """Finite reflective segment with id metadata."""

    start: Vector
    end: Vector
    mirror_id: str = "mirror"

    @classmethod
    def from_coords(cls, start: Sequence[float], end: Sequence[float], mirror_id: str = "mirror") -> "Segment":
        return cls(start=as_point(start), end=as_point(end), mirror_id=mirror_id)

    def is_degenerate(self, eps: float = EPS) -> bool:
        return is_degenerate(self.start, self.end, eps=eps)

    def as_line(self) -> Line:
        return Line.through(self.start, self.end)

    def length(self) -> float:
        return float(np.linalg.norm(np.asarray(self.end, dtype=float) - np.asarray(self.start, dtype=float)))


def distance_to_line(point: Vector, line: Line) -> float:
    """Unsigned perpendicular distance from ``point`` to ``line``."""

    p = np.asarray(point, dtype=float)
    return abs(float(np.dot(p - line.point, line.normal())))


def point_on_line(point: Vector, line: Line, eps: float = EPS) -> bool:
    return distance_to_line(point, line) <= eps


def point_on_segment(point: Vector, start: Vector, end: Vector, eps: float = EPS) -> bool:
    """Bounded containment test, inclusive of both endpoints."""

    p = np.asarray(point, dtype=float)
    a = np.asarray(start, dtype=float)
    b = np.asarray(end, dtype=float)
    if is_degenerate(a, b, eps=eps):
        return float(np.linalg.norm(p - a)) <= eps
    d = b - a
    length = float(np.linalg.norm(d))
    if abs(cross2(d, p - a)) / length > eps:
        return False
    t = float(np.dot(p - a, d)) / (length * length)
    slack = eps / length
    return -slack <= t <= 1.0 + slack


def line_line_intersection(a: Line, b: Line, eps: float = EPS) -> Optional[Vector]:
    """Return the intersection of two infinite lines or None if parallel."""

    da = a.unit_direction()
    db = b.unit_direction()
    denom = cross2(da, db)
    if abs(denom) < eps:
        return None
    t = cross2(b.point - a.point, db) / denom
    return a.point + t * da


def segment_segment_intersections(
    a_start: Vector,
    a_end: Vector,
    b_start: Vector,
    b_end: Vector,
    eps: float = EPS,
) -> List[Vector]:
    """Intersection points of two bounded segments.

    Proper crossings and touches give one point. Colinear overlapping
    segments give every distinct endpoint shared by both segments.
    """

    p = np.asarray(a_start, dtype=float)
    r = np.asarray(a_end, dtype=float) - p
    q = np.asarray(b_start, dtype=float)
    s = np.asarray(b_end, dtype=float) - q

    if is_degenerate(p, p + r, eps) or is_degenerate(q, q + s, eps):
        if is_degenerate(p, p + r, eps):
            return [p.copy()] if point_on_segment(p, q, q + s, eps) else []
        return [q.copy()] if point_on_segment(q, p, p + r, eps) else []

    denom = cross2(r, s)
    if abs(denom) / (np.linalg.norm(r) * np.linalg.norm(s)) < eps:
        if abs(cross2(q - p, r)) / np.linalg.norm(r) > eps:
            return []
        out: List[Vector] = []
        for cand in (p, p + r, q, q + s):
            if point_on_segment(cand, p, p + r, eps) and point_on_segment(cand, q, q + s, eps):
                if not any(np.linalg.norm(cand - o) <= eps for o in out):
                    out.append(cand.copy())
        return out

    t = cross2(q - p, s) / denom
    u = cross2(q - p, r) / denom
    t_slack = eps / np.linalg.norm(r)
    u_slack = eps / np.linalg.norm(s)
    if -t_slack <= t <= 1.0 + t_slack and -u_slack <= u <= 1.0 + u_slack:
        return [p + t * r]
    return []


def project_onto_line(point: Vector, line: Line, eps: float = EPS) -> Optional[Vector]:
    """Orthogonal projection of ``point`` onto ``line``.

    The perpendicular through ``point`` is built along the line normal and
    intersected with ``line``. A point already on the line is returned as is.
    """

    p = as_point(point)
    if point_on_line(p, line, eps=eps):
        return p
    perpendicular = Line(point=p, direction=line.normal())
    foot = line_line_intersection(line, perpendicular, eps=eps)
    if foot is None:
        warnings.warn(
            f"No intersection between line and its perpendicular through {p.tolist()}.",
            RuntimeWarning,
            stacklevel=2,
        )
    return foot
