"""S4: zero-length mirror next to a well-formed one."""

from __future__ import annotations

import numpy as np

from mirror_core.scene import ControlParams, MirrorElement, ObjectElement, ViewerElement
from scenarios.common import run_scene


def build_scene():
    return [
        ViewerElement("viewer-1", np.array([100.0, 300.0])),
        MirrorElement("mirror-1", np.array([200.0, 200.0]), np.array([200.0, 200.0])),
        MirrorElement("mirror-2", np.array([200.0, 50.0]), np.array([200.0, 350.0])),
        ObjectElement("object-1", np.array([100.0, 100.0])),
    ]


def build_sweep_params():
    return [{"case_id": "s4_degenerate", "expect_paths": ["mirror-2"]}]


def run_case(params):
    return run_scene(params, build_scene(), ControlParams(show_parallel_mirrors=True))
