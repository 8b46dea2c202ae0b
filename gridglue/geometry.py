"""Small vector helpers on simplices: cross products, barycentric maps, containment."""

from __future__ import annotations

from typing import Sequence

import numpy as np

__all__ = [
    "cross_product",
    "corner",
    "edge_to_corners",
    "interpolate",
    "interpolate_unit_normals",
    "inside",
]

_EDGE_CORNERS: dict[int, tuple[int, int]] = {
    0: (0, 1),
    1: (0, 2),
    2: (1, 2),
}


def cross_product(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    """Return ``a × b``; only three-dimensional vectors are supported."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != (3,) or b.shape != (3,):
        raise NotImplementedError(
            f"crossProduct does not work for dimension {a.shape[0] if a.ndim else 0}"
        )
    return np.array(
        [
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ]
    )


def corner(c: int, dim: int) -> np.ndarray:
    """Return corner ``c`` of the standard simplex as a ``dim``-vector."""
    x = np.zeros(dim)
    if c == 0:
        return x
    x[c - 1] = 1.0
    return x


def edge_to_corners(edge: int) -> tuple[int, int]:
    """Return the two corner numbers of triangle edge ``edge``."""
    try:
        return _EDGE_CORNERS[edge]
    except KeyError:
        raise ValueError("Unexpected edge number.") from None


def interpolate(x: Sequence[float], corners: Sequence[Sequence[float]]) -> np.ndarray:
    """Map barycentric coordinates ``x`` to the simplex spanned by ``corners``.

    The result is ``corners[0] + sum_i x[i] * (corners[i+1] - corners[0])``.
    Applied to corner normals it interpolates linearly (without keeping norms).
    """
    pts = np.asarray(corners, dtype=float)
    x = np.asarray(x, dtype=float)
    origin = pts[0]
    y = origin.copy()
    for weight, point in zip(x, pts[1:]):
        y += weight * (point - origin)
    return y


def interpolate_unit_normals(
    x: Sequence[float], normals: Sequence[Sequence[float]]
) -> np.ndarray:
    """Linearly interpolate corner normals at ``x`` and rescale to unit length."""
    n = interpolate(x, normals)
    return n / np.linalg.norm(n)


def inside(x: Sequence[float], epsilon: float) -> bool:
    """Tell whether ``x`` lies in the standard simplex, up to ``epsilon``.

    Only the first ``len(x) - 1`` entries are barycentric coordinates; the
    last entry (a distance) is ignored.  NaN entries make the point outside.
    """
    x = np.asarray(x, dtype=float)
    total = 0.0
    for value in x[:-1]:
        if value < -epsilon:
            return False
        total += value
    return bool(total <= 1.0 + epsilon)