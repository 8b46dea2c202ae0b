"""Intersections of a single point with a simplex (point, segment, triangle, tetrahedron)."""

from __future__ import annotations

from typing import Sequence

import numpy as np

__all__ = [
    "IntersectionPoints",
    "point_point",
    "point_segment",
    "point_triangle",
    "point_tetrahedron",
]

_EPS = 1e-8
_IDENTICAL_EPS = 1e-8


class IntersectionPoints:
    """Points of a simplex-simplex intersection, with the faces they lie on.

    ``points`` holds the distinct intersection points.  ``x_faces[f]`` and
    ``y_faces[f]`` list the indices (into ``points``) of the points that lie
    on face ``f`` of the first and the second simplex.
    """

    def __init__(self, x_faces: int, y_faces: int) -> None:
        self.points: list[np.ndarray] = []
        self.x_faces: list[list[int]] = [[] for _ in range(x_faces)]
        self.y_faces: list[list[int]] = [[] for _ in range(y_faces)]

    def add_point(self, point: Sequence[float]) -> int:
        """Add ``point`` unless an identical one is present; return its index."""
        p = np.array(point, dtype=float)
        p_norm = float(np.max(np.abs(p))) if p.size else 0.0
        for index, q in enumerate(self.points):
            q_norm = float(np.max(np.abs(q))) if q.size else 0.0
            diff = float(np.max(np.abs(p - q))) if p.size else 0.0
            if diff <= _IDENTICAL_EPS * max(p_norm, q_norm):
                return index
            if p_norm < _IDENTICAL_EPS and q_norm < _IDENTICAL_EPS and diff < _IDENTICAL_EPS:
                return index
        self.points.append(p)
        return len(self.points) - 1

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return (
            f"IntersectionPoints(points={[p.tolist() for p in self.points]}, "
            f"x_faces={self.x_faces}, y_faces={self.y_faces})"
        )


def _corners(points: Sequence[Sequence[float]], count: int, name: str) -> np.ndarray:
    array = np.asarray(points, dtype=float)
    if array.ndim != 2 or array.shape[0] != count:
        raise ValueError(f"{name} must hold exactly {count} points")
    return array


def _inf_norm(v: np.ndarray) -> float:
    return float(np.max(np.abs(v))) if v.size else 0.0


def point_point(x, y) -> IntersectionPoints | None:
    """Intersect two points; return the common point or ``None``."""
    xs = _corners(x, 1, "x")
    ys = _corners(y, 1, "y")
    a = _inf_norm(xs[0])
    b = _inf_norm(ys[0])
    c = _inf_norm(xs[0] - ys[0])
    if c <= _EPS * a or c <= _EPS * b or (a < _EPS and b < _EPS and c < 0.5 * _EPS):
        result = IntersectionPoints(0, 0)
        result.add_point(xs[0])
        return result
    return None


def point_segment(x, y) -> IntersectionPoints | None:
    """Intersect a point with a segment; mark the segment end it coincides with."""
    xs = _corners(x, 1, "x")
    ys = _corners(y, 2, "y")
    dim = xs.shape[1]
    result = IntersectionPoints(0, 2)
    p = xs[0]

    if dim == 1:
        lower = max(p[0], min(ys[0][0], ys[1][0]))
        upper = min(p[0], max(ys[0][0], ys[1][0]))
        if lower <= upper:
            result.add_point(p)
            return result
        return None

    v0 = p - ys[0]
    v1 = p - ys[1]
    v2 = ys[1] - ys[0]
    with np.errstate(divide="ignore", invalid="ignore"):
        s = float(v0 @ v1)
        t = float(np.linalg.norm(v0) / np.linalg.norm(v2))
        offset = v2 * t + ys[0] - p

    if _inf_norm(offset) < _EPS and s <= _EPS and t <= 1 + _EPS:
        k = result.add_point(p)
        if s < _EPS and t < _EPS:
            result.y_faces[0].append(k)
        elif s < _EPS and t > 1 - _EPS:
            result.y_faces[1].append(k)
        return result
    return None


def point_triangle(x, y) -> IntersectionPoints | None:
    """Intersect a point with a triangle; mark the triangle edges it lies on."""
    xs = _corners(x, 1, "x")
    ys = _corners(y, 3, "y")
    if xs.shape[1] < 2:
        raise ValueError("point_triangle needs a world dimension of at least 2")
    p = xs[0]

    v0 = ys[1] - ys[0]
    v1 = ys[2] - ys[0]
    v2 = p - ys[0]
    d00, d11, d01 = v0 @ v0, v1 @ v1, v0 @ v1
    d02, d12 = v0 @ v2, v1 @ v2
    with np.errstate(divide="ignore", invalid="ignore"):
        d = d00 * d11 - d01 * d01
        s = float((d11 * d02 - d01 * d12) / d)
        t = float((d00 * d12 - d01 * d02) / d)
        r = ys[0] + v0 * s + v1 * t

    if s > -_EPS and t > -_EPS and s + t < 1 + _EPS and _inf_norm(r - p) < _EPS:
        result = IntersectionPoints(0, 3)
        k = result.add_point(p)
        if t < _EPS:
            result.y_faces[0].append(k)
        if s < _EPS:
            result.y_faces[1].append(k)
        if s + t > 1 - _EPS:
            result.y_faces[2].append(k)
        return result
    return None


_TET_FACE_OPPOSITE = (3, 2, 1, 0)


def point_tetrahedron(x, y) -> IntersectionPoints | None:
    """Intersect a point with a tetrahedron; mark the faces the point lies on."""
    xs = _corners(x, 1, "x")
    ys = _corners(y, 4, "y")
    if xs.shape[1] != 3:
        raise ValueError("point_tetrahedron needs a world dimension of 3")
    p = xs[0]

    d = np.ones((4, 4))
    d[:3, :] = ys.T
    dets = [float(np.linalg.det(d))]
    for i in range(1, 5):
        dd = d.copy()
        dd[:3, i - 1] = p
        det = float(np.linalg.det(dd))
        dets.append(det)
        if abs(det) > _EPS and np.signbit(dets[0]) != np.signbit(det):
            return None

    result = IntersectionPoints(0, 4)
    k = result.add_point(p)
    for i in range(1, 5):
        if abs(dets[i]) < _EPS:
            # the point lies on the face not containing node i-1
            result.y_faces[_TET_FACE_OPPOSITE[i - 1]].append(k)
    return result