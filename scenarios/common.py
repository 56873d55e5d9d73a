"""Common scenario helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from mirror_core.frame import FrameResult, evaluate_frame
from mirror_core.geometry import Segment, Vector
from mirror_core.scene import (
    ControlParams,
    MirrorElement,
    ObjectElement,
    SceneDefaults,
    SceneElement,
    ViewerElement,
    filter_visible_elements,
    mirror_segment,
    object_shape,
)
from mirror_core.shapes import Shape


@dataclass
class CaseResult:
    params: Dict[str, Any]
    frame: FrameResult
    mirrors: List[Segment]
    viewer: Optional[Vector] = None
    shape: Optional[Shape] = None
    object_point: Optional[Vector] = None
    elements: List[SceneElement] = field(default_factory=list)


def base_elements() -> List[SceneElement]:
    """Viewer and object between two parallel mirrors."""

    return [
        ViewerElement("viewer-1", np.array([300.0, 300.0]), radius=10.0),
        MirrorElement("mirror-1", np.array([400.0, 50.0]), np.array([400.0, 350.0]), thickness=5.0),
        MirrorElement("mirror-2", np.array([200.0, 50.0]), np.array([200.0, 350.0]), thickness=5.0),
        ObjectElement("object-1", np.array([300.0, 100.0]), radius=8.0),
    ]


def default_defaults() -> SceneDefaults:
    return SceneDefaults(canvas_width=600.0, canvas_height=400.0)


def run_scene(params: Dict[str, Any], elements: Sequence[SceneElement], controls: ControlParams | None = None) -> CaseResult:
    ctl = controls or ControlParams()
    defaults = default_defaults()
    visible = filter_visible_elements(elements, ctl)
    frame = evaluate_frame(elements, ctl, defaults)
    viewer = next((el for el in visible if isinstance(el, ViewerElement)), None)
    obj = next((el for el in visible if isinstance(el, ObjectElement)), None)
    return CaseResult(
        params=dict(params),
        frame=frame,
        mirrors=[mirror_segment(el) for el in visible if isinstance(el, MirrorElement)],
        viewer=None if viewer is None else np.asarray(viewer.position, dtype=float),
        shape=None if obj is None else object_shape(obj, defaults),
        object_point=None if obj is None else np.asarray(obj.position, dtype=float),
        elements=list(visible),
    )
