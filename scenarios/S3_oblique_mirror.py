"""S3: mirror along the diagonal y = x."""

from __future__ import annotations

import numpy as np

from mirror_core.scene import ControlParams, MirrorElement, ObjectElement, ViewerElement
from mirror_core.shapes import ShapeKind
from scenarios.common import run_scene


def build_scene(shape: str = "triangle"):
    return [
        ViewerElement("viewer-1", np.array([350.0, 150.0])),
        MirrorElement("mirror-1", np.array([50.0, 50.0]), np.array([400.0, 400.0])),
        ObjectElement("object-1", np.array([300.0, 100.0]), shape=ShapeKind(shape)),
    ]


def build_sweep_params():
    return [
        {"case_id": "s3_triangle", "shape": "triangle", "expect_paths": ["mirror-1"]},
        {"case_id": "s3_point", "shape": "point", "expect_paths": ["mirror-1"]},
    ]


def run_case(params):
    return run_scene(params, build_scene(params["shape"]), ControlParams())
