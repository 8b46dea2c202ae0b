import numpy as np
import pytest

from gridglue.simplex_methods import compute_intersection_points, tetrahedron_tetrahedron
from gridglue.simplex_points import point_tetrahedron
from gridglue.simplex_segments import segment_segment

TET = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]
SMALL = [(0.1, 0.1, 0.1), (0.4, 0.1, 0.1), (0.1, 0.4, 0.1), (0.1, 0.1, 0.4)]


def _point_set(result):
    return {tuple(np.round(p, 9)) for p in result.points}


def _indices_valid(result):
    n = len(result.points)
    return all(0 <= k < n for f in result.x_faces + result.y_faces for k in f)


def test_identical_tetrahedra_give_corners():
    result = tetrahedron_tetrahedron(TET, TET)
    assert _point_set(result) == {tuple(p) for p in TET}
    assert len(result.points) == 4
    assert _indices_valid(result)


def test_small_tetrahedron_inside_big():
    result = tetrahedron_tetrahedron(SMALL, TET)
    assert _point_set(result) == {tuple(p) for p in SMALL}
    assert _indices_valid(result)


def test_tetrahedron_intersection_symmetric():
    assert _point_set(tetrahedron_tetrahedron(SMALL, TET)) == _point_set(
        tetrahedron_tetrahedron(TET, SMALL)
    )


def test_disjoint_tetrahedra():
    far = [tuple(c + 5.0 for c in p) for p in TET]
    assert tetrahedron_tetrahedron(TET, far) is None


def test_tetrahedron_tetrahedron_requires_3d():
    with pytest.raises(ValueError):
        tetrahedron_tetrahedron([(0, 0), (1, 0), (0, 1), (1, 1)], TET)


def test_dispatch_point_tetrahedron():
    p = [(0.2, 0.2, 0.0)]
    direct = point_tetrahedron(p, TET)
    result = compute_intersection_points(p, TET)
    assert result.y_faces == direct.y_faces
    assert _point_set(result) == _point_set(direct)


def test_dispatch_swaps_faces():
    p = [(0.2, 0.2, 0.0)]
    direct = point_tetrahedron(p, TET)
    result = compute_intersection_points(TET, p)
    assert result.x_faces == direct.y_faces
    assert result.y_faces == []
    assert _point_set(result) == _point_set(direct)


def test_dispatch_segment_segment():
    a = [(0.0, 0.0), (1.0, 1.0)]
    b = [(0.0, 1.0), (1.0, 0.0)]
    direct = segment_segment(a, b)
    result = compute_intersection_points(a, b)
    assert _point_set(result) == _point_set(direct)
    assert result.x_faces == direct.x_faces


def test_dispatch_tetrahedra():
    result = compute_intersection_points(SMALL, TET)
    assert _point_set(result) == {tuple(p) for p in SMALL}


def test_dispatch_disjoint_returns_none():
    assert compute_intersection_points([(5.0, 5.0, 5.0)], TET) is None


def test_dispatch_rejects_too_many_corners():
    with pytest.raises(ValueError):
        compute_intersection_points(TET + [(1.0, 1.0, 1.0)], TET)


def test_dispatch_rejects_flat_input():
    with pytest.raises(ValueError):
        compute_intersection_points([0.0, 1.0], TET)