"""
Boundary Points
===============

Points placed evenly along the edge of the [0, size]² domain.

They bend slightly inward near the corners, which keeps the Delaunay
triangulation from producing long thin triangles along the hull and keeps
Poisson-disc sampling from crowding the edges.
"""

import math

import numpy as np


def generate_boundary_points(spacing: float, size: float) -> np.ndarray:
    """
    Lay out boundary points around a square domain.

    For N = ceil(size / spacing) and i = 0..N:
        t = (i + 0.5) / (N + 1),  w = size * t,  offset = (t - 0.5)²
    emit (offset, w), (size - offset, w), (w, offset), (w, size - offset).

    Args:
        spacing: target distance between neighbouring boundary points (> 0)
        size: side length of the domain

    Returns:
        (4 * (N + 1), 2) array
    """
    if spacing <= 0:
        raise ValueError(f"spacing must be > 0, got {spacing}")

    n = math.ceil(size / spacing)
    t = (np.arange(n + 1) + 0.5) / (n + 1)
    w = size * t
    offset = (t - 0.5) ** 2

    points = np.empty((n + 1, 4, 2), dtype=float)
    points[:, 0] = np.column_stack([offset, w])
    points[:, 1] = np.column_stack([size - offset, w])
    points[:, 2] = np.column_stack([w, offset])
    points[:, 3] = np.column_stack([w, size - offset])
    return points.reshape(-1, 2)
