"""S0: one vertical mirror to the right of the viewer."""

from __future__ import annotations

import numpy as np

from mirror_core.scene import ControlParams, MirrorElement, ObjectElement, ViewerElement
from scenarios.common import run_scene


def build_scene(mirror_x: float = 200.0, object_x: float = 100.0):
    return [
        ViewerElement("viewer-1", np.array([100.0, 300.0])),
        MirrorElement("mirror-1", np.array([mirror_x, 50.0]), np.array([mirror_x, 350.0])),
        ObjectElement("object-1", np.array([object_x, 100.0])),
    ]


def build_sweep_params():
    return [
        {"case_id": "s0_x200", "mirror_x": 200.0, "expect_paths": ["mirror-1"]},
        {"case_id": "s0_x250", "mirror_x": 250.0, "expect_paths": ["mirror-1"]},
        {"case_id": "s0_object_on_mirror", "mirror_x": 200.0, "object_x": 200.0, "expect_paths": ["mirror-1"]},
    ]


def run_case(params):
    return run_scene(params, build_scene(params["mirror_x"], params.get("object_x", 100.0)), ControlParams())
