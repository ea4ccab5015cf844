"""
Ghost Structure
===============

Close an open triangulation into a boundary-free mesh.

Every unpaired (hull) side s gets a ghost triangle glued onto it, whose
third corner is a single extra region, the ghost region. The ghost
triangles form a fan around the ghost region, so afterwards every side has
an opposite and every region can be circulated without special cases.

RING ORDER:
    Unpaired sides are visited in hull order, not index order. The
    successor of s is the unique unpaired side beginning at end_r(s).
    This makes the cyclic order around the ghost region match the
    geometric order of the hull.

LAYOUT (i-th unpaired side s, U unpaired sides, n = num_solid_sides):
    g = n + 3i
    triangles[g]     = end_r(s)     halfedges[g]     = s
    triangles[g + 1] = begin_r(s)   halfedges[g + 1] = side2 of ghost i-1
    triangles[g + 2] = ghost_r      halfedges[g + 2] = n + (3i + 4) % 3U

Arrays are allocated once at their final size n + 3U.

NOTE: input opposites are trusted. If halfedges is not an involution the
output is undefined; use analysis.checks.check_mesh_connectivity.
"""

import numpy as np

from ..spec.constants import GHOST_POSITION, NO_SIDE
from ..spec.structures import PartialMesh


def _next_side(s: int) -> int:
    return s - 2 if s % 3 == 2 else s + 1


def add_ghost_structure(points,
                        triangles,
                        halfedges,
                        ghost_position=GHOST_POSITION,
                        num_boundary_regions: int = 0) -> PartialMesh:
    """
    Append one ghost region and one ghost triangle per unpaired side.

    Args:
        points: (R, 2) region positions
        triangles: (3T,) begin region of each side
        halfedges: (3T,) opposite of each side, -1 if unpaired
        ghost_position: location of the ghost region
        num_boundary_regions: passed through to the result

    Returns:
        PartialMesh with R+1 points and 3T + 3U sides, U = unpaired sides.
        If U == 0 the input is returned unchanged (no ghost region added).
    """
    points = np.asarray(points, dtype=float)
    triangles = np.asarray(triangles, dtype=np.int32)
    halfedges = np.asarray(halfedges, dtype=np.int32)

    num_solid_sides = len(triangles)
    ghost_r = len(points)

    unpaired = np.flatnonzero(halfedges == NO_SIDE)
    num_unpaired = len(unpaired)

    if num_unpaired == 0:
        return PartialMesh(
            points=points.copy(),
            triangles=triangles.copy(),
            halfedges=halfedges.copy(),
            num_solid_sides=num_solid_sides,
            num_boundary_regions=num_boundary_regions,
        )

    # region -> unpaired side starting there (hull regions start exactly one)
    r_unpaired_s = np.full(len(points), NO_SIDE, dtype=np.int64)
    r_unpaired_s[triangles[unpaired]] = unpaired

    num_sides = num_solid_sides + 3 * num_unpaired
    s_start_r = np.empty(num_sides, dtype=np.int32)
    s_start_r[:num_solid_sides] = triangles
    s_opposite_s = np.empty(num_sides, dtype=np.int32)
    s_opposite_s[:num_solid_sides] = halfedges

    s = int(unpaired[0])
    for i in range(num_unpaired):
        end_r = int(s_start_r[_next_side(s)])

        ghost_s = num_solid_sides + 3 * i
        s_opposite_s[s] = ghost_s
        s_opposite_s[ghost_s] = s
        s_start_r[ghost_s] = end_r

        s_start_r[ghost_s + 1] = s_start_r[s]
        s_start_r[ghost_s + 2] = ghost_r
        k = num_solid_sides + (3 * i + 4) % (3 * num_unpaired)
        s_opposite_s[ghost_s + 2] = k
        s_opposite_s[k] = ghost_s + 2

        s = int(r_unpaired_s[end_r])

    new_points = np.empty((len(points) + 1, 2), dtype=float)
    new_points[:-1] = points
    new_points[-1] = ghost_position

    return PartialMesh(
        points=new_points,
        triangles=s_start_r,
        halfedges=s_opposite_s,
        num_solid_sides=num_solid_sides,
        num_boundary_regions=num_boundary_regions,
    )
