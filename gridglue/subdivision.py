"""Subdivision of reference elements into simplices."""

from __future__ import annotations

from typing import Sequence

__all__ = ["simplex_subdivision"]

_SEGMENT = ([[0, 1]], [[0, 1]])

_TRIANGLE = ([[0, 1, 2]], [[0, 1, 2]])

_QUADRILATERAL = (
    [[0, 1, 2], [1, 2, 3]],
    [[2, 0, -1], [-1, 1, 3]],
)

_TETRAHEDRON = ([[0, 1, 2, 3]], [[0, 1, 2, 3]])

_HEXAHEDRON = (
    [
        [0, 2, 3, 6],
        [0, 1, 3, 5],
        [0, 3, 5, 6],
        [0, 4, 5, 6],
        [3, 5, 6, 7],
    ],
    [
        [4, 0, -1, 3],
        [4, 2, -1, 1],
        [-1, -1, -1, -1],
        [2, 0, -1, 5],
        [-1, 1, 3, 5],
    ],
)

_BY_CORNER_COUNT = {
    2: {3: _TRIANGLE, 4: _QUADRILATERAL},
    3: {4: _TETRAHEDRON, 8: _HEXAHEDRON},
}


def _copy(table: tuple[list[list[int]], list[list[int]]]) -> tuple[list[list[int]], list[list[int]]]:
    sub_elements, face_ids = table
    return [list(s) for s in sub_elements], [list(f) for f in face_ids]


def simplex_subdivision(
    dim: int, element_corners: Sequence[Sequence[float]]
) -> tuple[list[list[int]], list[list[int]]]:
    """Split an element of dimension ``dim`` into simplices.

    Returns ``(sub_elements, face_ids)``: the local corner numbers of each
    simplex, and for each simplex the element face every simplex face lies
    on (``-1`` for faces inside the element).  Elements of dimension 2 or 3
    with a corner count that is not handled give two empty lists.
    """
    if dim == 0:
        return [[0]], []
    if dim == 1:
        return _copy(_SEGMENT)
    if dim in _BY_CORNER_COUNT:
        table = _BY_CORNER_COUNT[dim].get(len(element_corners))
        if table is None:
            return [], []
        return _copy(table)
    raise ValueError(f"no simplex subdivision for dimension {dim}")