"""Projection of a segment (2d) or triangle (3d) onto another along normals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .geometry import (
    corner,
    cross_product,
    edge_to_corners,
    inside,
    interpolate,
    interpolate_unit_normals,
)

__all__ = ["EdgeIntersection", "Projection", "SingularMatrixError"]

_SINGULAR_LIMIT = 1e-80
_PARALLEL_LIMIT = 1e-14


class SingularMatrixError(ArithmeticError):
    """A linear system could not be solved because its matrix is singular."""


def _solve(matrix: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    det = np.linalg.det(matrix)
    if np.isfinite(det) and abs(det) < _SINGULAR_LIMIT:
        raise SingularMatrixError("matrix is singular")
    try:
        return np.linalg.solve(matrix, rhs)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError("matrix is singular") from exc


@dataclass(frozen=True)
class EdgeIntersection:
    """Intersection of a projected preimage edge with an image edge.

    ``edge`` holds the edge numbers in the preimage and the image triangle.
    ``local`` holds the barycentric coordinates of the intersection with
    respect to the preimage and the image; the last entry of each is the
    distance along the respective normal.
    """

    edge: tuple[int, int]
    local: tuple[np.ndarray, np.ndarray]


class Projection:
    """Project a line (2d) or triangle (3d) onto another along corner normals.

    After :meth:`project`, :attr:`images` holds the images of the preimage
    corners and the preimages of the image corners in barycentric
    coordinates (last entry: signed distance along the normal),
    :attr:`success` tells per corner whether the (inverse) projection is
    feasible, and :attr:`edge_intersections` lists edge-edge intersections.
    """

    MAX_EDGE_INTERSECTIONS = 9

    def __init__(self, overlap: float = 0.0, max_normal_product: float = -0.1) -> None:
        self.overlap = float(overlap)
        self.max_normal_product = float(max_normal_product)
        self.epsilon = 1e-12
        self._images: tuple[np.ndarray, np.ndarray] | None = None
        self._success: tuple[list[bool], list[bool]] | None = None
        self._edge_intersections: list[EdgeIntersection] = []
        self._valid = False

    @property
    def images(self) -> tuple[np.ndarray, np.ndarray]:
        """Images of preimage corners and preimages of image corners."""
        if self._images is None:
            raise RuntimeError("project() has not been called")
        return self._images

    @property
    def success(self) -> tuple[tuple[bool, ...], tuple[bool, ...]]:
        """Per-corner feasibility of the projection and the inverse projection."""
        if self._success is None:
            raise RuntimeError("project() has not been called")
        return tuple(self._success[0]), tuple(self._success[1])

    @property
    def edge_intersections(self) -> list[EdgeIntersection]:
        """Feasible edge-edge intersections found by the last projection."""
        if self._images is None:
            raise RuntimeError("project() has not been called")
        return list(self._edge_intersections)

    @property
    def projection_valid(self) -> bool:
        """Whether every preimage corner could be projected onto the image plane."""
        return self._valid

    def project(
        self,
        corners: tuple[Sequence[Sequence[float]], Sequence[Sequence[float]]],
        normals: tuple[Sequence[Sequence[float]], Sequence[Sequence[float]]],
    ) -> None:
        """Project ``corners[0]`` onto ``corners[1]`` using the corner ``normals``."""
        xs, ys = (np.asarray(c, dtype=float) for c in corners)
        nxs, nys = (np.asarray(n, dtype=float) for n in normals)
        dim = xs.shape[-1] if xs.ndim == 2 else 0
        if dim not in (2, 3):
            raise ValueError("Projection only implemented for dim=2 or dim=3")
        for array in (xs, ys, nxs, nys):
            if array.shape != (dim, dim):
                raise ValueError(
                    f"expected {dim} corners or normals of dimension {dim}, "
                    f"got shape {array.shape}"
                )

        self._images = (np.zeros((dim, dim)), np.zeros((dim, dim)))
        self._success = ([False] * dim, [False] * dim)
        self._edge_intersections = []

        with np.errstate(divide="ignore", invalid="ignore"):
            self._forward(xs, ys, nxs, nys)
            self._inverse(xs, ys, nxs, nys)
            self._edges(xs, ys, nxs, nys)

    def _feasible(
        self,
        x: np.ndarray,
        nx: np.ndarray,
        px: np.ndarray,
        corners: np.ndarray,
        normals: np.ndarray,
    ) -> bool:
        if not inside(px, self.epsilon):
            return False
        limit = -self.overlap - self.epsilon
        if px[-1] < limit:
            return False
        n = interpolate_unit_normals(px, normals)
        if (x - interpolate(px, corners)) @ n < limit:
            return False
        if nx @ n > self.max_normal_product + self.epsilon:
            return False
        return True

    def _forward(self, xs, ys, nxs, nys) -> None:
        dim = xs.shape[1]
        images = self._images[0]
        success = self._success[0]

        # Columns are rescaled so they have a norm comparable to the unit normal.
        directions = ys[1:] - ys[0]
        scales = np.abs(directions).max(axis=1)
        directions = directions / scales[:, None]
        scale_sum = scales.sum()

        matrix = np.empty((dim, dim))
        matrix[:, : dim - 1] = directions.T

        self._valid = True
        for i, (x, n) in enumerate(zip(xs, nxs)):
            matrix[:, dim - 1] = n
            try:
                y = _solve(matrix, x - ys[0])
            except SingularMatrixError:
                success[i] = False
                self._valid = False
                continue
            y[: dim - 1] /= scales
            # The system yields -delta, since the term is "-delta n".
            y[dim - 1] *= -1.0
            images[i] = y

            # A projection far in the wrong direction would create spurious
            # inverse projections and edge intersections.
            if y[dim - 1] < -2.0 * scale_sum:
                success[i] = False
                self._valid = False
                return

            success[i] = self._feasible(x, n, y, ys, nys)

    def _inverse(self, xs, ys, nxs, nys) -> None:
        dim = xs.shape[1]
        success = self._success[1]
        if not self._valid:
            success[:] = [False] * dim
            return

        images = self._images[0]
        preimages = self._images[1]
        base = interpolate(images[0], ys)
        spans = [interpolate(images[i + 1], ys) - base for i in range(dim - 1)]
        matrix = np.array([[a @ b for b in spans] for a in spans])

        for i, (y, ny) in enumerate(zip(ys, nys)):
            offset = y - base
            rhs = np.array([offset @ span for span in spans])
            z = _solve(matrix, rhs)
            preimages[i, : dim - 1] = z
            x = interpolate(z, xs)
            preimages[i, dim - 1] = (x - y) @ ny
            success[i] = self._feasible(y, ny, preimages[i], xs, nxs)

    def _edges(self, xs, ys, nxs, nys) -> None:
        dim = xs.shape[1]
        if dim != 3:
            return
        success_x, success_y = self._success
        if not self._valid or all(success_x) or all(success_y):
            return

        images = self._images[0]
        eps = self.epsilon

        for edge_x in range(dim):
            i, j = edge_to_corners(edge_x)
            if success_x[i] and success_x[j]:
                continue
            pxi = interpolate(images[i], ys)
            pxj = interpolate(images[j], ys)
            pxjpxi = pxj - pxi

            for edge_y in range(dim):
                k, l = edge_to_corners(edge_y)
                if success_y[k] and success_y[l]:
                    continue
                ykyl = ys[k] - ys[l]
                ykpxi = ys[k] - pxi

                # Parallel edges are already handled by the corner projections.
                if np.all(np.abs(cross_product(ykyl, pxjpxi)) < _PARALLEL_LIMIT):
                    continue

                spans = [ys[m + 1] - ys[0] for m in range(dim - 1)]
                matrix = np.array([[pxjpxi @ s, ykyl @ s] for s in spans])
                rhs = np.array([ykpxi @ s for s in spans])
                try:
                    z = _solve(matrix, rhs)
                except SingularMatrixError:
                    continue

                if not (np.isfinite(z[0]) and np.isfinite(z[1])):
                    continue
                # Only genuine edge-edge intersections, not corner (pre)images.
                if (
                    z[0] < eps
                    or z[0] > 1.0 - eps
                    or z[1] < eps
                    or z[1] > 1.0 - eps
                ):
                    continue

                local_x = corner(i, dim) + z[0] * (corner(j, dim) - corner(i, dim))
                local_y = corner(k, dim) + z[1] * (corner(l, dim) - corner(k, dim))
                if not inside(local_x, eps) or not inside(local_y, eps):
                    continue

                xy = interpolate(local_x, xs) - interpolate(local_y, ys)
                nx = interpolate_unit_normals(local_x, nxs)
                ny = interpolate_unit_normals(local_y, nys)
                local_x[dim - 1] = -(xy @ nx)
                local_y[dim - 1] = xy @ ny

                limit = -self.overlap - eps
                if local_x[dim - 1] < limit or local_y[dim - 1] < limit:
                    continue
                if nx @ ny > self.max_normal_product + eps:
                    continue

                self._edge_intersections.append(
                    EdgeIntersection((edge_x, edge_y), (local_x, local_y))
                )