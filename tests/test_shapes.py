import numpy as np
import pytest

from mirror_core.geometry import Segment
from mirror_core.reflection import reflect_point, reflect_shape
from mirror_core.shapes import Shape, ShapeKind, VirtualShape, object_outline


def test_vertex_count_validation():
    with pytest.raises(ValueError):
        Shape(ShapeKind.POINT, np.zeros((2, 2)))
    with pytest.raises(ValueError):
        Shape(ShapeKind.TRIANGLE, np.zeros((4, 2)))
    with pytest.raises(ValueError):
        Shape(ShapeKind.POLYGON, np.zeros((2, 2)))
    with pytest.raises(ValueError):
        Shape("point", np.zeros((0, 2)))


def test_kind_accepts_string():
    s = Shape("polygon", np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]))
    assert s.kind is ShapeKind.POLYGON


def test_object_outline_triangle_points_right():
    s = object_outline(np.array([300.0, 100.0]), ShapeKind.TRIANGLE, radius=8.0, shape_id="object-1")
    assert np.allclose(s.vertices, [[308.0, 100.0], [296.0, 92.0], [296.0, 108.0]])
    assert s.shape_id == "object-1"


def test_object_outline_point():
    s = object_outline(np.array([1.0, 2.0]), ShapeKind.POINT)
    assert s.vertices.shape == (1, 2)


def test_reflect_triangle_preserves_order_and_kind():
    m = Segment.from_coords([200.0, 50.0], [200.0, 350.0], "mirror-1")
    shape = object_outline(np.array([100.0, 100.0]), ShapeKind.TRIANGLE, radius=10.0, shape_id="object-1")
    vs = reflect_shape(shape, m)
    assert isinstance(vs, VirtualShape)
    assert vs.kind is ShapeKind.TRIANGLE
    assert vs.source_id == "object-1"
    assert vs.mirror_id == "mirror-1"
    for src, dst in zip(shape.vertices, vs.vertices):
        assert np.allclose(dst, reflect_point(src, m))
    # tip now points to -x
    assert np.allclose(vs.vertices[0], [290.0, 100.0])


def test_reflection_flips_orientation():
    m = Segment.from_coords([0.0, 0.0], [0.0, 10.0])
    shape = Shape(ShapeKind.TRIANGLE, np.array([[1.0, 0.0], [3.0, 0.0], [1.0, 2.0]]))

    def _signed_area(v):
        return 0.5 * sum(v[i][0] * v[(i + 1) % 3][1] - v[(i + 1) % 3][0] * v[i][1] for i in range(3))

    vs = reflect_shape(shape, m)
    assert np.isclose(_signed_area(vs.vertices), -_signed_area(shape.vertices))


def test_reflect_point_shape():
    m = Segment.from_coords([0.0, 0.0], [10.0, 0.0])
    vs = reflect_shape(Shape(ShapeKind.POINT, np.array([[4.0, 3.0]])), m)
    assert vs.kind is ShapeKind.POINT
    assert np.allclose(vs.vertices, [[4.0, -3.0]])


def test_degenerate_mirror_gives_no_partial_shape():
    m = Segment.from_coords([5.0, 5.0], [5.0, 5.0])
    shape = object_outline(np.array([5.0, 5.0]), ShapeKind.TRIANGLE, radius=3.0)
    assert reflect_shape(shape, m) is None
    assert all(reflect_point(v, m) is None for v in shape.vertices)
