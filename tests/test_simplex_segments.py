import numpy as np
import pytest

from gridglue.simplex_segments import segment_segment, segment_triangle


def _on_segment(p, a, b, tol=1e-9):
    p, a, b = (np.asarray(v, dtype=float) for v in (p, a, b))
    return abs(np.linalg.norm(p - a) + np.linalg.norm(p - b) - np.linalg.norm(b - a)) < tol


def test_segment_segment_1d_overlap():
    result = segment_segment([(0.0,), (2.0,)], [(1.0,), (3.0,)])
    coords = sorted(float(p[0]) for p in result.points)
    assert coords == [1.0, 2.0]
    assert result.y_faces[0] == [0]
    assert result.x_faces[1] == [1]


def test_segment_segment_1d_disjoint():
    assert segment_segment([(0.0,), (1.0,)], [(2.0,), (3.0,)]) is None


def test_segment_segment_2d_crossing():
    x = [(0.0, 0.0), (2.0, 2.0)]
    y = [(0.0, 2.0), (2.0, 0.0)]
    result = segment_segment(x, y)
    assert len(result.points) == 1
    assert np.allclose(result.points[0], (1.0, 1.0))
    assert _on_segment(result.points[0], *x) and _on_segment(result.points[0], *y)
    assert result.x_faces == [[], []] and result.y_faces == [[], []]


def test_segment_segment_2d_touching_ends():
    result = segment_segment([(0.0, 0.0), (1.0, 0.0)], [(1.0, 0.0), (1.0, 1.0)])
    assert len(result.points) == 1
    assert np.array_equal(result.points[0], np.array((1.0, 0.0)))
    assert result.x_faces[1] == [0] and result.x_faces[0] == []
    assert result.y_faces[0] == [0] and result.y_faces[1] == []


def test_segment_segment_2d_disjoint():
    assert segment_segment([(0.0, 0.0), (1.0, 0.0)], [(0.0, 1.0), (1.0, 2.0)]) is None
    assert segment_segment([(0.0, 0.0), (1.0, 1.0)], [(2.0, 0.0), (3.0, -1.0)]) is None


def test_segment_segment_2d_collinear_overlap():
    x = [(0.0, 0.0), (2.0, 0.0)]
    y = [(1.0, 0.0), (3.0, 0.0)]
    result = segment_segment(x, y)
    found = sorted(tuple(p) for p in result.points)
    assert found == [(1.0, 0.0), (2.0, 0.0)]
    assert result.y_faces[0] and result.x_faces[1]
    assert result.y_faces[1] == [] and result.x_faces[0] == []


def test_segment_segment_3d_crossing_and_skew():
    x = [(0.0, 0.0, 0.0), (2.0, 2.0, 0.0)]
    crossing = segment_segment(x, [(0.0, 2.0, 0.0), (2.0, 0.0, 0.0)])
    assert np.allclose(crossing.points[0], (1.0, 1.0, 0.0))
    assert segment_segment(x, [(0.0, 2.0, 1.0), (2.0, 0.0, 1.0)]) is None


def test_segment_segment_3d_collinear():
    x = [(0.0, 0.0, 0.0), (2.0, 0.0, 0.0)]
    y = [(1.0, 0.0, 0.0), (3.0, 0.0, 0.0)]
    result = segment_segment(x, y)
    found = sorted(tuple(p) for p in result.points)
    assert found == [(1.0, 0.0, 0.0), (2.0, 0.0, 0.0)]


def test_segment_segment_dimension_mismatch():
    with pytest.raises(ValueError):
        segment_segment([(0.0, 0.0), (1.0, 1.0)], [(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)])


def test_segment_triangle_2d_contained():
    x = [(0.1, 0.1), (0.3, 0.2)]
    result = segment_triangle(x, [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)])
    assert len(result.points) == 2
    assert np.allclose(result.points[0], x[0]) and np.allclose(result.points[1], x[1])
    assert result.x_faces == [[0], [1]]
    assert result.y_faces == [[], [], []]


def test_segment_triangle_2d_crossing_edges_are_on_segment():
    x = [(-1.0, 0.25), (2.0, 0.25)]
    tri = [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]
    result = segment_triangle(x, tri)
    assert len(result.points) == 2
    assert all(_on_segment(p, *x) for p in result.points)
    marked = sorted(k for face in result.y_faces for k in face)
    assert marked == [0, 1]


def test_segment_triangle_3d_piercing():
    tri = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    result = segment_triangle([(0.2, 0.2, -1.0), (0.2, 0.2, 1.0)], tri)
    assert len(result.points) == 1
    point = result.points[0]
    assert np.allclose(point[:2], (0.2, 0.2))
    assert abs(point[2]) < 1e-12


def test_segment_triangle_disjoint():
    tri = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert segment_triangle([(2.0, 2.0, -1.0), (2.0, 2.0, 1.0)], tri) is None
    assert segment_triangle([(0.2, 0.2, 0.5), (0.3, 0.2, 1.0)], tri) is None


def test_segment_triangle_needs_two_dimensions():
    with pytest.raises(ValueError):
        segment_triangle([(0.0,), (1.0,)], [(0.0,), (1.0,), (2.0,)])