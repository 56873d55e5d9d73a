"""Scene element records, defaults and interaction helpers.

The drawing layer owns the element list; these helpers only build new lists
and never mutate the ones passed in.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from mirror_core.geometry import Segment, Vector, as_point
from mirror_core.shapes import Shape, ShapeKind, Vertices, object_outline


@dataclass(frozen=True)
class SceneDefaults:
    viewer_radius: float = 7.5
    object_radius: float = 10.0
    mirror_thickness: float = 3.0
    canvas_width: float = 600.0
    canvas_height: float = 400.0


@dataclass(frozen=True)
class ControlParams:
    show_ray_paths: bool = True
    show_parallel_mirrors: bool = False
    primary_mirror_id: str = "mirror-1"


@dataclass(frozen=True)
class ViewerElement:
    id: str
    position: Vector
    radius: Optional[float] = None
    kind: str = field(default="viewer", init=False)


@dataclass(frozen=True)
class MirrorElement:
    id: str
    start: Vector
    end: Vector
    thickness: Optional[float] = None
    kind: str = field(default="mirror", init=False)


@dataclass(frozen=True)
class ObjectElement:
    """Draggable object. ``outline`` holds polygon vertices relative to ``position``."""

    id: str
    position: Vector
    shape: ShapeKind = ShapeKind.TRIANGLE
    radius: Optional[float] = None
    outline: Optional[Vertices] = None
    kind: str = field(default="object", init=False)

    def __post_init__(self) -> None:
        kind = ShapeKind(self.shape)
        object.__setattr__(self, "shape", kind)
        if self.outline is None:
            if kind is ShapeKind.POLYGON:
                raise ValueError("polygon objects need explicit outline vertices")
            return
        offsets = np.array(self.outline, dtype=float)
        Shape(kind, as_point(self.position) + offsets, self.id)
        object.__setattr__(self, "outline", offsets)


SceneElement = Union[ViewerElement, MirrorElement, ObjectElement]


def resolve_element(element: SceneElement, defaults: SceneDefaults = SceneDefaults()) -> SceneElement:
    """Fill optional radius/thickness from ``defaults``."""

    if isinstance(element, ViewerElement) and element.radius is None:
        return replace(element, radius=defaults.viewer_radius)
    if isinstance(element, ObjectElement) and element.radius is None:
        return replace(element, radius=defaults.object_radius)
    if isinstance(element, MirrorElement) and element.thickness is None:
        return replace(element, thickness=defaults.mirror_thickness)
    return element


def mirror_segment(element: MirrorElement) -> Segment:
    return Segment(start=as_point(element.start), end=as_point(element.end), mirror_id=element.id)


def object_shape(element: ObjectElement, defaults: SceneDefaults = SceneDefaults()) -> Shape:
    if element.outline is not None:
        return Shape(element.shape, as_point(element.position) + element.outline, element.id)
    resolved = resolve_element(element, defaults)
    return object_outline(resolved.position, resolved.shape, radius=resolved.radius, shape_id=element.id)


def filter_visible_elements(elements: Sequence[SceneElement], controls: ControlParams) -> List[SceneElement]:
    """All elements with parallel mirrors on, else non-mirrors plus the primary mirror."""

    if controls.show_parallel_mirrors:
        return list(elements)
    return [el for el in elements if not isinstance(el, MirrorElement) or el.id == controls.primary_mirror_id]


def merge_and_preserve_positions(
    current: Sequence[SceneElement],
    next_visible: Sequence[SceneElement],
) -> List[SceneElement]:
    """Keep the current (possibly dragged) version of elements that already exist."""

    by_id: Dict[str, SceneElement] = {el.id: el for el in current}
    return [by_id.get(el.id, el) for el in next_visible]


def clamp_to_canvas(position: Vector, defaults: SceneDefaults = SceneDefaults()) -> Vector:
    p = as_point(position)
    return np.array(
        [
            min(max(p[0], 0.0), defaults.canvas_width),
            min(max(p[1], 0.0), defaults.canvas_height),
        ]
    )


def pick_element(
    elements: Sequence[SceneElement],
    cursor: Vector,
    defaults: SceneDefaults = SceneDefaults(),
) -> Optional[SceneElement]:
    """First draggable element (viewer or object) whose radius contains ``cursor``."""

    c = as_point(cursor)
    for el in elements:
        if isinstance(el, (ViewerElement, ObjectElement)):
            r = resolve_element(el, defaults).radius
            if float(np.linalg.norm(as_point(el.position) - c)) < r:
                return el
    return None


def move_element(
    elements: Sequence[SceneElement],
    element_id: str,
    position: Vector,
    defaults: SceneDefaults = SceneDefaults(),
) -> List[SceneElement]:
    """New element list with ``element_id`` moved to the clamped ``position``."""

    target = clamp_to_canvas(position, defaults)
    out: List[SceneElement] = []
    for el in elements:
        if el.id == element_id and isinstance(el, (ViewerElement, ObjectElement)):
            out.append(replace(el, position=target))
        else:
            out.append(el)
    return out


def grab_element(
    elements: Sequence[SceneElement],
    cursor: Vector,
    defaults: SceneDefaults = SceneDefaults(),
) -> Optional[Tuple[SceneElement, Vector]]:
    """Picked element and its offset from the cursor, so a drag keeps the grip point."""

    el = pick_element(elements, cursor, defaults)
    if el is None:
        return None
    return el, as_point(el.position) - as_point(cursor)


def drag_element(
    elements: Sequence[SceneElement],
    element_id: str,
    cursor: Vector,
    offset: Vector,
    defaults: SceneDefaults = SceneDefaults(),
) -> List[SceneElement]:
    return move_element(elements, element_id, as_point(cursor) + as_point(offset), defaults)
