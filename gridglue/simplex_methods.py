"""Tetrahedron intersections and dispatch over all simplex pairs."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from .simplex_points import (
    IntersectionPoints,
    point_point,
    point_segment,
    point_tetrahedron,
    point_triangle,
)
from .simplex_segments import segment_segment, segment_triangle
from .simplex_volumes import (
    segment_tetrahedron,
    triangle_tetrahedron,
    triangle_triangle,
)

__all__ = ["tetrahedron_tetrahedron", "compute_intersection_points"]

# Faces of a tetrahedron that touch each node.
_NODE_FACES = ((0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3))
_TET_FACE_ORDER = (0, 3, 2, 1)


def _corners(points: Sequence[Sequence[float]], count: int, name: str) -> np.ndarray:
    array = np.asarray(points, dtype=float)
    if array.ndim != 2 or array.shape[0] != count:
        raise ValueError(f"{name} must hold exactly {count} points")
    return array


def _swapped(result: IntersectionPoints | None) -> IntersectionPoints | None:
    if result is None:
        return None
    swapped = IntersectionPoints(0, 0)
    swapped.points = result.points
    swapped.x_faces = result.y_faces
    swapped.y_faces = result.x_faces
    return swapped


def tetrahedron_tetrahedron(x, y) -> IntersectionPoints | None:
    """Intersect two tetrahedra in 3 dimensions; ``None`` if disjoint."""
    xs = _corners(x, 4, "x")
    ys = _corners(y, 4, "y")
    if xs.shape[1] != 3 or ys.shape[1] != 3:
        raise ValueError("tetrahedron_tetrahedron needs a world dimension of 3")

    result = IntersectionPoints(4, 4)
    found = False

    # corners of one tetrahedron inside the other
    for ci in range(3):
        hit = point_tetrahedron([xs[ci]], ys)
        if hit is not None:
            indices = []
            for _ in hit.points:
                k = result.add_point(xs[ci])
                indices.append(k)
                for face in _NODE_FACES[ci]:
                    result.x_faces[face].append(k)
            for face, members in enumerate(hit.y_faces):
                result.y_faces[face].extend(indices[j] for j in members)
            found = True

        hit = point_tetrahedron([ys[ci]], xs)
        if hit is not None:
            indices = []
            for _ in hit.points:
                k = result.add_point(ys[ci])
                indices.append(k)
                for face in _NODE_FACES[ci]:
                    result.y_faces[face].append(k)
            for face, members in enumerate(hit.y_faces):
                result.x_faces[face].extend(indices[j] for j in members)
            found = True

    # faces of one tetrahedron against the other tetrahedron
    for ci in range(4):
        triangle = np.array([ys[ci], ys[(ci + 1) % 4], ys[(ci + 2) % 4]])
        hit = triangle_tetrahedron(triangle, xs)
        if hit is not None:
            for p in hit.points:
                result.y_faces[_TET_FACE_ORDER[ci]].append(result.add_point(p))
            found = True

        triangle = np.array([xs[ci], xs[(ci + 1) % 4], xs[(ci + 2) % 4]])
        hit = triangle_tetrahedron(triangle, ys)
        if hit is not None:
            for p in hit.points:
                result.x_faces[_TET_FACE_ORDER[ci]].append(result.add_point(p))
            found = True

    return result if found else None


_METHODS: dict[tuple[int, int], Callable[..., IntersectionPoints | None]] = {
    (1, 1): point_point,
    (1, 2): point_segment,
    (1, 3): point_triangle,
    (1, 4): point_tetrahedron,
    (2, 2): segment_segment,
    (2, 3): segment_triangle,
    (2, 4): segment_tetrahedron,
    (3, 3): triangle_triangle,
    (3, 4): triangle_tetrahedron,
    (4, 4): tetrahedron_tetrahedron,
}


def compute_intersection_points(x, y) -> IntersectionPoints | None:
    """Intersect two simplices given by their corners; ``None`` if disjoint.

    The simplex dimension of each argument follows from its number of corners.
    ``x_faces`` of the result always refer to ``x`` and ``y_faces`` to ``y``.
    """
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    if xs.ndim != 2 or ys.ndim != 2:
        raise ValueError("x and y must be sequences of points")
    nx, ny = xs.shape[0], ys.shape[0]
    if not (1 <= nx <= 4 and 1 <= ny <= 4):
        raise ValueError("simplices must have between 1 and 4 corners")
    if nx <= ny:
        return _METHODS[(nx, ny)](xs, ys)
    return _swapped(_METHODS[(ny, nx)](ys, xs))