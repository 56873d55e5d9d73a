import numpy as np
import pytest

from mirror_core.frame import evaluate_frame
from mirror_core.scene import ControlParams, MirrorElement, ObjectElement, ViewerElement
from mirror_core.shapes import ShapeKind
from mirror_core.tracer import TraceFailure
from scenarios.common import base_elements


def test_single_mirror_frame():
    frame = evaluate_frame(base_elements(), ControlParams())
    assert list(frame.mirrors) == ["mirror-1"]
    res = frame.mirrors["mirror-1"]
    assert np.allclose(res.virtual_viewer, [500.0, 300.0])
    assert res.object_visible
    assert res.virtual_object is not None
    assert res.virtual_object.source_id == "object-1"
    assert np.allclose(res.ray_path.mirror_point, [400.0, 200.0])
    assert res.failures == []


def test_parallel_mirrors_frame():
    frame = evaluate_frame(base_elements(), ControlParams(show_parallel_mirrors=True))
    assert [p.mirror_id for p in frame.ray_paths()] == ["mirror-1", "mirror-2"]
    assert np.allclose(frame.mirrors["mirror-2"].virtual_viewer, [100.0, 300.0])


def test_ray_toggle_only_gates_drawing():
    controls = ControlParams(show_ray_paths=False)
    frame = evaluate_frame(base_elements(), controls)
    assert len(frame.ray_paths()) == 1
    assert frame.drawable_ray_paths(controls) == []
    assert len(frame.drawable_ray_paths(ControlParams())) == 1


def test_object_outside_mirror_extent_has_no_virtual_object():
    scene = [
        ViewerElement("viewer-1", np.array([100.0, 300.0])),
        MirrorElement("mirror-1", np.array([200.0, 0.0]), np.array([200.0, 50.0])),
        ObjectElement("object-1", np.array([100.0, 100.0])),
    ]
    res = evaluate_frame(scene).mirrors["mirror-1"]
    assert not res.object_visible
    assert res.virtual_object is None
    assert res.virtual_viewer is not None
    assert res.ray_path is None
    assert res.failures == [TraceFailure.PATH_NOT_ON_MIRROR]


def test_degenerate_mirror_is_isolated():
    scene = [
        ViewerElement("viewer-1", np.array([100.0, 300.0])),
        MirrorElement("mirror-1", np.array([200.0, 200.0]), np.array([200.0, 200.0])),
        MirrorElement("mirror-2", np.array([200.0, 50.0]), np.array([200.0, 350.0])),
        ObjectElement("object-1", np.array([100.0, 100.0])),
    ]
    frame = evaluate_frame(scene, ControlParams(show_parallel_mirrors=True))
    bad = frame.mirrors["mirror-1"]
    assert bad.virtual_viewer is None
    assert bad.ray_path is None
    assert bad.failures == [TraceFailure.DEGENERATE_MIRROR]
    assert frame.mirrors["mirror-2"].ray_path is not None


def test_missing_viewer_still_reflects_object():
    scene = [
        MirrorElement("mirror-1", np.array([200.0, 50.0]), np.array([200.0, 350.0])),
        ObjectElement("object-1", np.array([100.0, 100.0])),
    ]
    res = evaluate_frame(scene).mirrors["mirror-1"]
    assert res.virtual_viewer is None
    assert res.virtual_object is not None
    assert res.ray_path is None


def test_polygon_object_requires_outline():
    with pytest.raises(ValueError):
        ObjectElement("object-1", np.array([100.0, 100.0]), shape=ShapeKind.POLYGON)
    with pytest.raises(ValueError):
        ObjectElement("object-1", np.array([100.0, 100.0]), shape="polygon", outline=np.array([[0.0, 0.0], [1.0, 0.0]]))


def test_polygon_object_frame():
    square = np.array([[-5.0, -5.0], [5.0, -5.0], [5.0, 5.0], [-5.0, 5.0]])
    scene = [
        ViewerElement("viewer-1", np.array([100.0, 300.0])),
        MirrorElement("mirror-1", np.array([200.0, 50.0]), np.array([200.0, 350.0])),
        ObjectElement("object-1", np.array([100.0, 100.0]), shape=ShapeKind.POLYGON, outline=square),
    ]
    res = evaluate_frame(scene).mirrors["mirror-1"]
    assert res.virtual_object.kind is ShapeKind.POLYGON
    assert np.allclose(res.virtual_object.vertices[0], [305.0, 95.0])
    assert np.allclose(res.ray_path.mirror_point, [200.0, 200.0])
