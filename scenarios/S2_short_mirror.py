"""S2: mirror too short to span the reflection point."""

from __future__ import annotations

import numpy as np

from mirror_core.scene import ControlParams, MirrorElement, ObjectElement, ViewerElement
from scenarios.common import run_scene


def build_scene(mirror_top: float = 0.0, mirror_bottom: float = 50.0):
    return [
        ViewerElement("viewer-1", np.array([100.0, 300.0])),
        MirrorElement("mirror-1", np.array([200.0, mirror_top]), np.array([200.0, mirror_bottom])),
        ObjectElement("object-1", np.array([100.0, 100.0])),
    ]


def build_sweep_params():
    return [
        {"case_id": "s2_short", "mirror_top": 0.0, "mirror_bottom": 50.0, "expect_paths": []},
        {"case_id": "s2_edge", "mirror_top": 0.0, "mirror_bottom": 200.0, "expect_paths": ["mirror-1"]},
    ]


def run_case(params):
    return run_scene(params, build_scene(params["mirror_top"], params["mirror_bottom"]), ControlParams())
