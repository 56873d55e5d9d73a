"""Path matching between two tracing runs of the same scene.

Use-case: confirm that tracing mirrors in a different order (or on another
worker) yields the same per-mirror paths.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from mirror_core.tracer import RayPath


@dataclass
class MatchConfig:
    position_tolerance: float = 1e-9
    require_same_mirrors: bool = True


def _points(path: RayPath) -> np.ndarray:
    return np.stack([path.object_point, path.mirror_point, path.viewer_point, path.virtual_object_point])


def match_runs(
    run_a: Sequence[RayPath],
    run_b: Sequence[RayPath],
    config: MatchConfig | None = None,
) -> Tuple[List[Tuple[RayPath, RayPath]], List[str]]:
    """Pair paths by mirror id. Returns (pairs, warnings)."""

    cfg = config or MatchConfig()
    warnings: List[str] = []
    b_by_id: Dict[str, RayPath] = {}
    for p in run_b:
        if p.mirror_id in b_by_id:
            warnings.append(f"duplicate mirror id in run B: {p.mirror_id}")
        b_by_id[p.mirror_id] = p

    pairs: List[Tuple[RayPath, RayPath]] = []
    seen = set()
    for pa in run_a:
        pb = b_by_id.get(pa.mirror_id)
        if pb is None:
            if cfg.require_same_mirrors:
                warnings.append(f"no match for A[{pa.mirror_id}]")
            continue
        seen.add(pa.mirror_id)
        dev = float(np.max(np.abs(_points(pa) - _points(pb))))
        if dev > cfg.position_tolerance:
            warnings.append(f"mirror {pa.mirror_id} deviates by {dev:.3e}")
            continue
        pairs.append((pa, pb))

    if cfg.require_same_mirrors:
        for mid in b_by_id:
            if mid not in seen:
                warnings.append(f"unmatched B[{mid}]")

    return pairs, warnings
