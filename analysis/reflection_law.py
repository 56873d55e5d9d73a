"""Physical consistency checks for traced single-bounce paths."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np

from mirror_core.geometry import EPS, Segment, point_on_segment
from mirror_core.reflection import reflect_direction
from mirror_core.tracer import RayPath


def _angle_to_normal(direction: np.ndarray, normal: np.ndarray, eps: float = EPS) -> float:
    length = float(np.linalg.norm(direction))
    if length <= eps:
        return float("nan")
    u = direction / length
    n = normal / np.linalg.norm(normal)
    return float(np.arccos(np.clip(abs(np.dot(u, n)), 0.0, 1.0)))


def incidence_angles(path: RayPath, mirror: Segment) -> Tuple[float, float]:
    """(theta_i, theta_r) of the incoming and outgoing legs to the mirror normal.

    A zero-length leg (object or viewer on the mirror) has no defined angle: nan.
    """

    n = mirror.as_line().normal()
    k_in = path.mirror_point - path.object_point
    k_out = path.viewer_point - path.mirror_point
    return _angle_to_normal(-k_in, n), _angle_to_normal(k_out, n)


def check_path(path: RayPath, mirror: Segment, atol: float = 1e-6) -> List[str]:
    """Return human-readable violations; an empty list means the path is valid."""

    problems: List[str] = []
    if not point_on_segment(path.mirror_point, mirror.start, mirror.end, eps=atol):
        problems.append(f"{path.mirror_id}: reflection point {path.mirror_point.tolist()} is off the mirror")

    k_in = path.mirror_point - path.object_point
    k_out = path.viewer_point - path.mirror_point
    if np.linalg.norm(k_in) > atol and np.linalg.norm(k_out) > atol:
        expected = reflect_direction(k_in, mirror.as_line().normal())
        if not np.allclose(k_out / np.linalg.norm(k_out), expected, atol=atol):
            problems.append(f"{path.mirror_id}: outgoing leg violates the law of reflection")

    unfolded = float(np.linalg.norm(path.viewer_point - path.virtual_object_point))
    if not np.isclose(path.length(), unfolded, rtol=0.0, atol=atol * max(1.0, unfolded)):
        problems.append(f"{path.mirror_id}: path length {path.length():.6f} != image distance {unfolded:.6f}")
    return problems


def summarize_paths(paths: Sequence[RayPath]) -> Dict[str, float]:
    lengths = np.array([p.length() for p in paths], dtype=float)
    if lengths.size == 0:
        return {"count": 0, "min_length": float("nan"), "max_length": float("nan"), "mean_length": float("nan")}
    return {
        "count": int(lengths.size),
        "min_length": float(lengths.min()),
        "max_length": float(lengths.max()),
        "mean_length": float(lengths.mean()),
    }
