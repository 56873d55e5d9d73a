import numpy as np

from mirror_core.scene import (
    ControlParams,
    MirrorElement,
    ObjectElement,
    SceneDefaults,
    ViewerElement,
    clamp_to_canvas,
    drag_element,
    filter_visible_elements,
    grab_element,
    merge_and_preserve_positions,
    mirror_segment,
    move_element,
    object_shape,
    pick_element,
    resolve_element,
)
from mirror_core.shapes import ShapeKind
from scenarios.common import base_elements


def test_resolve_fills_defaults_once():
    d = SceneDefaults()
    assert resolve_element(ViewerElement("v", np.array([0.0, 0.0])), d).radius == 7.5
    assert resolve_element(ObjectElement("o", np.array([0.0, 0.0])), d).radius == 10.0
    assert resolve_element(MirrorElement("m", np.array([0.0, 0.0]), np.array([0.0, 1.0])), d).thickness == 3.0
    assert resolve_element(ViewerElement("v", np.array([0.0, 0.0]), radius=2.0), d).radius == 2.0


def test_element_kinds():
    kinds = [el.kind for el in base_elements()]
    assert kinds == ["viewer", "mirror", "mirror", "object"]


def test_filter_visible_elements():
    elements = base_elements()
    single = filter_visible_elements(elements, ControlParams(show_parallel_mirrors=False))
    assert [el.id for el in single] == ["viewer-1", "mirror-1", "object-1"]
    both = filter_visible_elements(elements, ControlParams(show_parallel_mirrors=True))
    assert [el.id for el in both] == ["viewer-1", "mirror-1", "mirror-2", "object-1"]
    assert both is not elements


def test_merge_preserves_dragged_positions():
    base = base_elements()
    current = move_element(filter_visible_elements(base, ControlParams()), "viewer-1", np.array([50.0, 60.0]))
    merged = merge_and_preserve_positions(current, filter_visible_elements(base, ControlParams(show_parallel_mirrors=True)))
    assert [el.id for el in merged] == ["viewer-1", "mirror-1", "mirror-2", "object-1"]
    assert np.allclose(merged[0].position, [50.0, 60.0])
    assert merged[2] is base[2]


def test_clamp_to_canvas():
    d = SceneDefaults(canvas_width=600.0, canvas_height=400.0)
    assert np.allclose(clamp_to_canvas(np.array([-5.0, 500.0]), d), [0.0, 400.0])
    assert np.allclose(clamp_to_canvas(np.array([650.0, 20.0]), d), [600.0, 20.0])


def test_move_element_does_not_mutate_input():
    elements = base_elements()
    moved = move_element(elements, "object-1", np.array([1000.0, -20.0]))
    assert np.allclose(elements[3].position, [300.0, 100.0])
    assert np.allclose(moved[3].position, [600.0, 0.0])
    assert moved[1] is elements[1]


def test_pick_element_uses_radius():
    elements = base_elements()
    assert pick_element(elements, np.array([305.0, 302.0])).id == "viewer-1"
    assert pick_element(elements, np.array([300.0, 107.0])).id == "object-1"
    assert pick_element(elements, np.array([300.0, 108.0])) is None
    assert pick_element(elements, np.array([400.0, 100.0])) is None


def test_mirror_segment_and_object_shape():
    el = MirrorElement("mirror-9", np.array([0.0, 0.0]), np.array([0.0, 10.0]))
    seg = mirror_segment(el)
    assert seg.mirror_id == "mirror-9"
    shape = object_shape(ObjectElement("o", np.array([10.0, 10.0]), shape=ShapeKind.POINT))
    assert shape.vertices.shape == (1, 2)
    assert shape.shape_id == "o"


def test_grab_and_drag_keep_grip_offset():
    elements = base_elements()
    grabbed = grab_element(elements, np.array([304.0, 297.0]))
    assert grabbed is not None
    el, offset = grabbed
    assert el.id == "viewer-1"
    assert np.allclose(offset, [-4.0, 3.0])

    moved = drag_element(elements, el.id, np.array([104.0, 97.0]), offset)
    assert np.allclose(moved[0].position, [100.0, 100.0])
    assert np.allclose(drag_element(elements, el.id, np.array([2.0, 1.0]), offset)[0].position, [0.0, 4.0])
    assert grab_element(elements, np.array([0.0, 0.0])) is None
