"""
Delaunay Triangulation Adapter
==============================

Wraps scipy.spatial.Delaunay and reshapes its output into the flat
side-indexed form used everywhere else:

    triangles[s]  region at the start of side s
    halfedges[s]  opposite side of s, -1 if s is on the convex hull

SCIPY → SIDES:
    scipy gives simplices (T, 3) and neighbors (T, 3), where
    neighbors[t, j] is the simplex opposite vertex j.

    Side 3t+k runs simplices[t, k] → simplices[t, (k+1) % 3], so the
    triangle across it is opposite vertex (k+2) % 3:

        adjacent(3t+k) = neighbors[t, (k+2) % 3]

    Its opposite is the side of that triangle that starts where 3t+k ends.

WINDING:
    Qhull does not promise an orientation. Every simplex is re-wound
    counter-clockwise (positive signed area); swapping vertices 1 and 2
    also swaps neighbour slots 1 and 2 since neighbour j is opposite vertex j.
"""

import numpy as np
from scipy.spatial import Delaunay

from ..spec.constants import NO_SIDE
from ..spec.structures import Triangulation


def _as_points(points) -> np.ndarray:
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"points must have shape (N, 2), got {pts.shape}")
    if len(pts) < 3:
        raise ValueError(f"Need N >= 3 points to triangulate, got {len(pts)}")
    return pts


def orient_counter_clockwise(points: np.ndarray,
                             simplices: np.ndarray,
                             neighbors: np.ndarray):
    """
    Re-wind clockwise simplices in place.

    Args:
        points: (N, 2) positions
        simplices: (T, 3) vertex indices
        neighbors: (T, 3) neighbour simplex opposite each vertex

    Returns:
        number of simplices that were flipped
    """
    a = points[simplices[:, 0]]
    b = points[simplices[:, 1]]
    c = points[simplices[:, 2]]
    area2 = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) \
        - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])

    flip = area2 < 0
    simplices[flip] = simplices[flip][:, [0, 2, 1]]
    neighbors[flip] = neighbors[flip][:, [0, 2, 1]]
    return int(np.count_nonzero(flip))


def halfedges_from_neighbors(simplices: np.ndarray,
                             neighbors: np.ndarray) -> np.ndarray:
    """
    Build the opposite-side array from a neighbour table.

    Args:
        simplices: (T, 3) counter-clockwise vertex indices
        neighbors: (T, 3) neighbour opposite each vertex, -1 on the hull

    Returns:
        halfedges: (3T,) int32
    """
    start = simplices.ravel()
    end = simplices[:, [1, 2, 0]].ravel()
    adjacent = neighbors[:, [2, 0, 1]].ravel()

    halfedges = np.full(len(start), NO_SIDE, dtype=np.int32)
    paired = adjacent >= 0
    if not np.any(paired):
        return halfedges

    # The three sides of the adjacent triangle; pick the one starting where we end
    candidates = 3 * adjacent[paired][:, None] + np.arange(3)
    match = start[candidates] == end[paired][:, None]
    if not np.all(match.any(axis=1)):
        raise ValueError("Neighbour table is inconsistent with simplices")
    choice = np.argmax(match, axis=1)
    halfedges[paired] = candidates[np.arange(len(candidates)), choice]
    return halfedges


def triangulate(points) -> Triangulation:
    """
    Delaunay-triangulate a planar point set.

    Args:
        points: (N, 2) array-like, N >= 3, not all collinear

    Returns:
        Triangulation with len(triangles) == len(halfedges) == 3T

    Raises:
        ValueError: if points is not (N, 2), has fewer than 3 rows, or has
            points Qhull left out of every triangle (duplicates)
        scipy.spatial.QhullError: for degenerate (e.g. collinear) input
    """
    pts = _as_points(points)
    tri = Delaunay(pts)

    # Qhull keeps the first of coincident points; the rest land in coplanar
    if len(tri.coplanar):
        dropped = np.unique(tri.coplanar[:, 0]).tolist()
        raise ValueError(f"Points {dropped} were left out of the triangulation "
                         f"(duplicate or coincident points)")

    simplices = np.array(tri.simplices, dtype=np.int32)
    neighbors = np.array(tri.neighbors, dtype=np.int32)
    orient_counter_clockwise(pts, simplices, neighbors)

    return Triangulation(
        triangles=simplices.ravel().astype(np.int32),
        halfedges=halfedges_from_neighbors(simplices, neighbors),
    )
