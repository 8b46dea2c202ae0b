"""Intersections of segments and triangles with triangles and tetrahedra."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .simplex_points import IntersectionPoints, point_tetrahedron
from .simplex_segments import segment_triangle

__all__ = ["segment_tetrahedron", "triangle_triangle", "triangle_tetrahedron"]

# Face number of the triangle (Y[i], Y[i+1], Y[i+2]) of a tetrahedron.
_TET_FACE_ORDER = (0, 3, 2, 1)
# Edge number of the edge (Y[i], Y[i+1]) of a triangle.
_TRIANGLE_EDGE_ORDER = (0, 2, 1)
# Edges of a triangle that meet at each corner.
_TRIANGLE_CORNER_EDGES = ((0, 1), (0, 2), (1, 2))


def _corners(points: Sequence[Sequence[float]], count: int, name: str) -> np.ndarray:
    array = np.asarray(points, dtype=float)
    if array.ndim != 2 or array.shape[0] != count:
        raise ValueError(f"{name} must hold exactly {count} points")
    return array


def _tet_face(ys: np.ndarray, first: int) -> np.ndarray:
    return np.array([ys[first], ys[(first + 1) % 4], ys[(first + 2) % 4]])


def segment_tetrahedron(x, y) -> IntersectionPoints | None:
    """Intersect a segment with a tetrahedron in 3 dimensions; ``None`` if disjoint."""
    xs = _corners(x, 2, "x")
    ys = _corners(y, 4, "y")
    if xs.shape[1] != 3 or ys.shape[1] != 3:
        raise ValueError("segment_tetrahedron needs a world dimension of 3")

    result = IntersectionPoints(2, 4)
    found = False

    # segment ends inside the tetrahedron
    for ci, p in enumerate(xs):
        if point_tetrahedron([p], ys) is not None:
            result.x_faces[ci].append(result.add_point(p))
            found = True

    if len(result) == 2:
        return result

    # tetrahedron faces crossing the segment
    for ci in range(4):
        hit = segment_triangle(xs, _tet_face(ys, ci))
        if hit is None:
            continue
        indices = [result.add_point(p) for p in hit.points]
        result.y_faces[_TET_FACE_ORDER[ci]].extend(indices)
        # points on either segment end are recorded on the first end's list
        for end in (0, 1):
            result.x_faces[0].extend(indices[j] for j in hit.x_faces[end])
        found = True

    return result if found else None


def triangle_triangle(x, y) -> IntersectionPoints | None:
    """Intersect two triangles in 2 or 3 dimensions; ``None`` if disjoint."""
    xs = _corners(x, 3, "x")
    ys = _corners(y, 3, "y")
    if xs.shape[1] != ys.shape[1]:
        raise ValueError("x and y must have the same world dimension")
    if xs.shape[1] < 2:
        raise ValueError("triangle_triangle needs a world dimension of at least 2")

    result = IntersectionPoints(3, 3)
    found = False

    for ni in range(3):
        # edges of Y against triangle X
        edge = np.array([ys[ni], ys[(ni + 1) % 3]])
        hit = segment_triangle(edge, xs)
        if hit is not None:
            for p in hit.points:
                result.y_faces[_TRIANGLE_EDGE_ORDER[ni]].append(result.add_point(p))
            found = True
        if len(result) >= 6:
            return result

        # edges of X against triangle Y
        edge = np.array([xs[ni], xs[(ni + 1) % 3]])
        hit = segment_triangle(edge, ys)
        if hit is not None:
            for p in hit.points:
                result.x_faces[_TRIANGLE_EDGE_ORDER[ni]].append(result.add_point(p))
            found = True
        if len(result) >= 6:
            return result

    return result if found else None


def triangle_tetrahedron(x, y) -> IntersectionPoints | None:
    """Intersect a triangle with a tetrahedron in 3 dimensions; ``None`` if disjoint."""
    xs = _corners(x, 3, "x")
    ys = _corners(y, 4, "y")
    if xs.shape[1] != 3 or ys.shape[1] != 3:
        raise ValueError("triangle_tetrahedron needs a world dimension of 3")

    result = IntersectionPoints(3, 4)
    found = False

    # triangle corners inside the tetrahedron
    for ni, p in enumerate(xs):
        hit = point_tetrahedron([p], ys)
        if hit is None:
            continue
        indices = []
        for _ in hit.points:
            k = result.add_point(p)
            indices.append(k)
            for edge in _TRIANGLE_CORNER_EDGES[ni]:
                result.x_faces[edge].append(k)
        for face, members in enumerate(hit.y_faces):
            result.y_faces[face].extend(indices[j] for j in members)
        found = True

    if len(result) == 3:
        return result

    # tetrahedron faces against the triangle
    for ni in range(4):
        hit = triangle_triangle(xs, _tet_face(ys, ni))
        if hit is None:
            continue
        indices = [result.add_point(p) for p in hit.points]
        result.y_faces[_TET_FACE_ORDER[ni]].extend(indices)
        for edge, members in enumerate(hit.x_faces):
            result.x_faces[edge].extend(indices[j] for j in members)
        found = True

    return result if found else None