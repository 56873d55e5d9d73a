"""S1: viewer and object between two parallel mirrors."""

from __future__ import annotations

from mirror_core.scene import ControlParams
from scenarios.common import base_elements, run_scene


def build_scene():
    return base_elements()


def build_sweep_params():
    return [
        {"case_id": "s1_single", "show_parallel_mirrors": False, "expect_paths": ["mirror-1"]},
        {"case_id": "s1_parallel", "show_parallel_mirrors": True, "expect_paths": ["mirror-1", "mirror-2"]},
    ]


def run_case(params):
    controls = ControlParams(show_parallel_mirrors=params["show_parallel_mirrors"])
    return run_scene(params, build_scene(), controls)
