"""Geometry for coupling non-matching grids: simplex intersections, projections and subdivision."""

__version__ = "0.1.0"

__all__ = [
    "geometry",
    "projection",
    "simplex_points",
    "simplex_segments",
    "simplex_volumes",
    "simplex_methods",
    "subdivision",
]