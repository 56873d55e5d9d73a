"""Per-frame evaluation of a scene against every visible mirror.

Example:
    >>> import numpy as np
    >>> from mirror_core.frame import evaluate_frame
    >>> from mirror_core.scene import MirrorElement, ObjectElement, ViewerElement
    >>> scene = [
    ...     ViewerElement("viewer-1", np.array([100.0, 300.0])),
    ...     MirrorElement("mirror-1", np.array([200.0, 50.0]), np.array([200.0, 350.0])),
    ...     ObjectElement("object-1", np.array([100.0, 100.0])),
    ... ]
    >>> frame = evaluate_frame(scene)
    >>> sorted(frame.mirrors)
    ['mirror-1']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from mirror_core.geometry import Vector
from mirror_core.reflection import reflect_point, reflect_shape
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
from mirror_core.shapes import VirtualShape
from mirror_core.tracer import RayPath, TraceFailure, trace_with_reason
from mirror_core.visibility import is_projected_on_segment


@dataclass
class MirrorResult:
    mirror_id: str
    virtual_viewer: Optional[Vector] = None
    virtual_object: Optional[VirtualShape] = None
    object_visible: bool = False
    ray_path: Optional[RayPath] = None
    failures: List[TraceFailure] = field(default_factory=list)


@dataclass
class FrameResult:
    mirrors: Dict[str, MirrorResult]

    def ray_paths(self) -> List[RayPath]:
        return [r.ray_path for r in self.mirrors.values() if r.ray_path is not None]

    def drawable_ray_paths(self, controls: ControlParams) -> List[RayPath]:
        """Computed paths, filtered by the display toggle only."""

        return self.ray_paths() if controls.show_ray_paths else []


def _first(elements: Sequence[SceneElement], cls: type) -> Optional[SceneElement]:
    for el in elements:
        if isinstance(el, cls):
            return el
    return None


def evaluate_frame(
    elements: Sequence[SceneElement],
    controls: ControlParams = ControlParams(),
    defaults: SceneDefaults = SceneDefaults(),
) -> FrameResult:
    """Run the engine for the first viewer and object against each visible mirror."""

    visible = filter_visible_elements(elements, controls)
    viewer = _first(visible, ViewerElement)
    obj = _first(visible, ObjectElement)
    shape = object_shape(obj, defaults) if obj is not None else None

    results: Dict[str, MirrorResult] = {}
    for el in visible:
        if not isinstance(el, MirrorElement):
            continue
        mirror = mirror_segment(el)
        res = MirrorResult(mirror_id=el.id)
        if viewer is not None:
            res.virtual_viewer = reflect_point(viewer.position, mirror)
            if res.virtual_viewer is None:
                res.failures.append(TraceFailure.DEGENERATE_MIRROR)
        if obj is not None:
            res.object_visible = is_projected_on_segment(obj.position, mirror.start, mirror.end)
            if res.object_visible:
                res.virtual_object = reflect_shape(shape, mirror)
                if res.virtual_object is None:
                    res.failures.append(TraceFailure.INCOMPLETE_SHAPE_REFLECTION)
        if viewer is not None and obj is not None:
            res.ray_path, reason = trace_with_reason(obj.position, viewer.position, mirror)
            if reason is not None and reason not in res.failures:
                res.failures.append(reason)
        results[el.id] = res
    return FrameResult(mirrors=results)
