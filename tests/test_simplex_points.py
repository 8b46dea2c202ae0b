import numpy as np
import pytest

from gridglue.simplex_points import (
    IntersectionPoints,
    point_point,
    point_segment,
    point_tetrahedron,
    point_triangle,
)

TRIANGLE = [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]
TET = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]


def test_add_point_deduplicates():
    result = IntersectionPoints(2, 3)
    first = result.add_point((0.3, 0.7))
    again = result.add_point((0.3, 0.7 + 1e-12))
    other = result.add_point((0.5, 0.5))
    assert first == again
    assert other != first
    assert len(result.points) == 2
    assert len(result.x_faces) == 2 and len(result.y_faces) == 3


def test_add_point_near_origin():
    result = IntersectionPoints(0, 0)
    a = result.add_point((0.0, 0.0))
    b = result.add_point((1e-10, 0.0))
    assert a == b
    assert len(result.points) == 1


def test_point_point_equal():
    result = point_point([(0.25, 0.5)], [(0.25, 0.5)])
    assert np.allclose(result.points[0], (0.25, 0.5))
    assert len(result.points) == 1


def test_point_point_distinct():
    assert point_point([(0.25, 0.5)], [(0.25, 0.6)]) is None


def test_point_point_wrong_count():
    with pytest.raises(ValueError):
        point_point([(0.0, 0.0), (1.0, 1.0)], [(0.0, 0.0)])


def test_point_segment_interior():
    result = point_segment([(0.5, 0.5)], [(0.0, 0.0), (1.0, 1.0)])
    assert np.allclose(result.points[0], (0.5, 0.5))
    assert result.y_faces == [[], []]


def test_point_segment_endpoints():
    start = point_segment([(0.0, 0.0)], [(0.0, 0.0), (1.0, 1.0)])
    end = point_segment([(1.0, 1.0)], [(0.0, 0.0), (1.0, 1.0)])
    assert start.y_faces[0] == [0] and start.y_faces[1] == []
    assert end.y_faces[1] == [0] and end.y_faces[0] == []


def test_point_segment_off_line():
    assert point_segment([(0.5, 0.6)], [(0.0, 0.0), (1.0, 1.0)]) is None
    assert point_segment([(2.0, 2.0)], [(0.0, 0.0), (1.0, 1.0)]) is None


def test_point_segment_one_dimensional():
    inside_result = point_segment([(0.4,)], [(1.0,), (0.0,)])
    assert np.allclose(inside_result.points[0], (0.4,))
    assert point_segment([(1.5,)], [(1.0,), (0.0,)]) is None


def test_point_triangle_interior():
    result = point_triangle([(0.2, 0.2)], TRIANGLE)
    assert np.allclose(result.points[0], (0.2, 0.2))
    assert result.y_faces == [[], [], []]


def test_point_triangle_edges():
    bottom = point_triangle([(0.5, 0.0)], TRIANGLE)
    left = point_triangle([(0.0, 0.5)], TRIANGLE)
    diagonal = point_triangle([(0.5, 0.5)], TRIANGLE)
    assert bottom.y_faces[0] == [0] and bottom.y_faces[1:] == [[], []]
    assert left.y_faces[1] == [0] and left.y_faces[0] == [] and left.y_faces[2] == []
    assert diagonal.y_faces[2] == [0] and diagonal.y_faces[:2] == [[], []]


def test_point_triangle_outside_and_off_plane():
    assert point_triangle([(0.8, 0.8)], TRIANGLE) is None
    tri3 = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert point_triangle([(0.2, 0.2, 0.5)], tri3) is None
    assert point_triangle([(0.2, 0.2, 0.0)], tri3) is not None and True


def test_point_triangle_needs_two_dimensions():
    with pytest.raises(ValueError):
        point_triangle([(0.2,)], [(0.0,), (1.0,), (2.0,)])


def test_point_tetrahedron_interior():
    result = point_tetrahedron([(0.1, 0.1, 0.1)], TET)
    assert np.allclose(result.points[0], (0.1, 0.1, 0.1))
    assert all(face == [] for face in result.y_faces)


def test_point_tetrahedron_on_bottom_face():
    result = point_tetrahedron([(0.2, 0.2, 0.0)], TET)
    assert result.y_faces[0] == [0]
    assert result.y_faces[1:] == [[], [], []]


def test_point_tetrahedron_outside():
    assert point_tetrahedron([(0.6, 0.6, 0.6)], TET) is None
    assert point_tetrahedron([(0.1, 0.1, -0.1)], TET) is None


def test_point_tetrahedron_needs_three_dimensions():
    with pytest.raises(ValueError):
        point_tetrahedron([(0.1, 0.1)], [(0, 0), (1, 0), (0, 1), (1, 1)])