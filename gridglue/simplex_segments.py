"""Intersections of a segment with a segment or a triangle."""

from __future__ import annotations

import numpy as np

from .geometry import cross_product
from .simplex_points import IntersectionPoints, point_triangle

__all__ = ["segment_segment", "segment_triangle"]

_EPS = 1e-8
_TRIANGLE_EDGE_ORDER = (0, 2, 1)


def _corners(points, count: int, name: str) -> np.ndarray:
    array = np.asarray(points, dtype=float)
    if array.ndim != 2 or array.shape[0] != count:
        raise ValueError(f"{name} must hold exactly {count} points")
    return array


def _inf_norm(v: np.ndarray) -> float:
    return float(np.max(np.abs(v)))


def _norm(v: np.ndarray) -> float:
    return float(np.linalg.norm(v))


def _segment_segment_1d(xs, ys) -> IntersectionPoints | None:
    x0, x1 = xs[0][0], xs[1][0]
    y0, y1 = ys[0][0], ys[1][0]
    lower = max(min(x0, x1), min(y0, x1))
    upper = min(max(x0, x1), max(y0, y1))
    if not lower < upper:
        return None

    result = IntersectionPoints(2, 2)
    id_x_min = -1 if min(x0, x1) < min(y0, y1) else (0 if x0 < x1 else 1)
    id_y_min = (0 if y0 < y1 else 1) if id_x_min < 0 else -1
    id_x_max = -1 if max(x0, x1) > max(y0, y1) else (0 if x0 > x1 else 1)
    id_y_max = (0 if y0 > y1 else 1) if id_x_max < 0 else -1

    k = result.add_point((lower,))
    if id_x_min >= 0:
        result.x_faces[id_x_min].append(k)
    else:
        result.y_faces[id_y_min].append(k)

    k = result.add_point((upper,))
    if id_x_max >= 0:
        result.x_faces[id_x_max].append(k)
    else:
        result.y_faces[id_y_max].append(k)
    return result


def _segment_segment_2d(xs, ys) -> IntersectionPoints | None:
    result = IntersectionPoints(2, 2)
    matrix = np.array(
        [
            [xs[1][0] - xs[0][0], ys[0][0] - ys[1][0]],
            [xs[1][1] - xs[0][1], ys[0][1] - ys[1][1]],
        ]
    )
    if abs(np.linalg.det(matrix)) > _EPS:
        r = np.linalg.solve(matrix, ys[0] - xs[0])
        if -_EPS < r[0] <= 1 + _EPS and -_EPS < r[1] < 1 + _EPS:
            k = result.add_point(xs[0] + r[0] * (xs[1] - xs[0]))
            if r[0] < _EPS:
                result.x_faces[0].append(k)
                result.points[k] = xs[0].copy()
            elif r[0] > 1 - _EPS:
                result.x_faces[1].append(k)
                result.points[k] = xs[1].copy()
            if r[1] < _EPS:
                result.y_faces[0].append(k)
                result.points[k] = ys[0].copy()
            elif r[1] > 1 - _EPS:
                result.y_faces[1].append(k)
                result.points[k] = ys[1].copy()
            return result
        return None

    if _inf_norm(xs[1] - xs[0]) > _EPS and _inf_norm(ys[1] - ys[0]) > _EPS:
        # Parallel, non-degenerate: a point lies on the other segment when
        # its distances to both ends add up to the segment length.
        found = False
        for i in range(2):
            if abs(_norm(ys[i] - xs[0]) + _norm(ys[i] - xs[1]) - _norm(xs[1] - xs[0])) < _EPS:
                result.y_faces[i].append(result.add_point(ys[i]))
                found = True
            if abs(_norm(xs[i] - ys[0]) + _norm(xs[i] - ys[1]) - _norm(ys[1] - ys[0])) < _EPS:
                result.x_faces[i].append(result.add_point(xs[i]))
                found = True
        return result if found else None
    return None


def _on_segment_3d(p, a, b) -> bool:
    if abs(_norm(p - a) + _norm(p - b) - _norm(b - a)) >= _EPS:
        return False
    return (
        abs((p - a) @ (p - b)) > _EPS
        or _inf_norm(p - a) < _EPS
        or _inf_norm(p - b) < _EPS
    )


def _segment_segment_3d(xs, ys) -> IntersectionPoints | None:
    result = IntersectionPoints(2, 2)
    dx = xs[1] - xs[0]
    dy = ys[1] - ys[0]
    dz = ys[0] - xs[0]
    cxy = cross_product(dx, dy)

    if abs(dz @ cxy) < _EPS * 1e3 and _inf_norm(cxy) > _EPS:
        # coplanar, but not aligned
        cyz = cross_product(dy, dz)
        s = -(cyz @ cxy) / (cxy @ cxy)
        if -_EPS < s < 1 + _EPS:
            q = xs[0] + s * dx
            o = _norm(q - ys[0]) + _norm(q - ys[1])
            if abs(o - _norm(dy)) < _EPS:
                k = result.add_point(q)
                if s < _EPS:
                    result.points[k] = xs[0].copy()
                    result.x_faces[0].append(k)
                elif s > 1 - _EPS:
                    result.points[k] = xs[1].copy()
                    result.x_faces[1].append(k)
                elif _norm(q - ys[0]) < _EPS:
                    result.points[k] = ys[0].copy()
                    result.y_faces[0].append(k)
                elif _norm(q - ys[1]) < _EPS:
                    result.points[k] = ys[1].copy()
                    result.y_faces[1].append(k)
                return result
        return None

    if _inf_norm(cxy) <= _EPS:
        found = False
        for i in range(2):
            if _on_segment_3d(ys[i], xs[0], xs[1]):
                result.y_faces[i].append(result.add_point(ys[i]))
                found = True
            if _on_segment_3d(xs[i], ys[0], ys[1]):
                result.x_faces[i].append(result.add_point(xs[i]))
                found = True
        return result if found else None
    return None


def segment_segment(x, y) -> IntersectionPoints | None:
    """Intersect two segments in 1, 2 or 3 dimensions; ``None`` if disjoint."""
    xs = _corners(x, 2, "x")
    ys = _corners(y, 2, "y")
    if xs.shape[1] != ys.shape[1]:
        raise ValueError("x and y must have the same world dimension")
    dim = xs.shape[1]
    with np.errstate(divide="ignore", invalid="ignore"):
        if dim == 1:
            return _segment_segment_1d(xs, ys)
        if dim == 2:
            return _segment_segment_2d(xs, ys)
        if dim == 3:
            return _segment_segment_3d(xs, ys)
    return None


def segment_triangle(x, y) -> IntersectionPoints | None:
    """Intersect a segment with a triangle in 2 or 3 dimensions; ``None`` if disjoint."""
    xs = _corners(x, 2, "x")
    ys = _corners(y, 3, "y")
    dim = xs.shape[1]
    if dim < 2:
        raise ValueError("segment_triangle needs a world dimension of at least 2")
    result = IntersectionPoints(2, 3)

    # segment ends inside the triangle
    for ni in range(2):
        hit = point_triangle([xs[ni]], ys)
        if hit is not None:
            k = result.add_point(xs[ni])
            result.x_faces[ni].append(k)
            for e, on_edge in enumerate(hit.y_faces):
                if on_edge:
                    result.y_faces[e].append(k)

    if len(result.points) >= 2:
        return result

    # triangle edges crossing the segment
    for ni in range(3):
        edge = [ys[ni], ys[(ni + 1) % 3]]
        hit = segment_segment(xs, edge)
        if hit is None:
            continue
        for point in hit.points:
            k = result.add_point(point)
            result.y_faces[_TRIANGLE_EDGE_ORDER[ni]].append(k)
            if hit.x_faces[0]:
                result.x_faces[0].append(k)
            if hit.x_faces[1]:
                result.x_faces[1].append(k)
        if len(result.points) >= 2:
            return result

    if dim == 3:
        # segment piercing the triangle away from its boundary
        matrix = np.column_stack((xs[1] - xs[0], ys[0] - ys[1], ys[0] - ys[2]))
        if abs(np.linalg.det(matrix)) > _EPS:
            r = np.linalg.solve(matrix, ys[0] - xs[0])
            if (
                -_EPS <= r[0] <= 1 + _EPS
                and -_EPS <= r[1] <= 1 + _EPS
                and -_EPS <= r[2] <= 1 + _EPS
                and -_EPS <= r[1] + r[2] <= 1 + _EPS
            ):
                k = result.add_point(xs[0] + r[0] * (xs[1] - xs[0]))
                # prefer exact locations
                if abs(r[0]) < _EPS:
                    result.points[k] = xs[0].copy()
                elif abs(r[0]) > 1 - _EPS:
                    result.points[k] = xs[1].copy()
                elif abs(r[1]) < _EPS and abs(r[2]) < _EPS:
                    result.points[k] = ys[0].copy()
                elif abs(r[1]) < _EPS and abs(r[2]) > 1 - _EPS:
                    result.points[k] = ys[2].copy()
                elif abs(r[1]) > 1 - _EPS and abs(r[2]) < _EPS:
                    result.points[k] = ys[1].copy()

                if abs(r[1]) < _EPS:
                    result.y_faces[1].append(k)
                if abs(r[2]) < _EPS:
                    result.y_faces[0].append(k)
                if abs(r[1] + r[2] - 1) < _EPS:
                    result.y_faces[2].append(k)
                return result
    return None