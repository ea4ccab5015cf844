"""
Mesh Consistency Checks
=======================

Optional diagnostics run by MeshBuilder.create(run_checks=True).

None of these mutate their input or abort construction. Each returns a
report dict and emits a warning when it finds something:

    check_point_inequality     collinear neighbours (placeholder)
    check_triangle_inequality  skinny triangles      MeshQualityWarning
    check_mesh_connectivity    broken opposites,     MeshConnectivityWarning
                               runaway circulation
"""

import warnings

import numpy as np
from typing import Dict

from ..spec.constants import BAD_ANGLE_LIMIT, MAX_CIRCULATION_STEPS, NO_SIDE
from ..spec.errors import MeshQualityWarning, MeshConnectivityWarning
from ..spec.structures import PartialMesh


def _next_side(s: int) -> int:
    return s - 2 if s % 3 == 2 else s + 1


def check_point_inequality(points, triangles) -> Dict:
    """
    Collinearity check (not implemented).

    Intended test: around each region P, if two neighbours Q and R are
    both connected to P and the directions P→Q and P→R are 180° apart,
    the points are collinear, which points at a problem with point
    selection.

    Returns:
        dict with 'implemented': False
    """
    return {'implemented': False, 'collinear_regions': []}


def triangle_min_angles(points, triangles) -> np.ndarray:
    """
    Smallest interior angle of each triangle, in degrees.

    Args:
        points: (R, 2) positions
        triangles: (3T,) region indices

    Returns:
        (T,) array
    """
    pts = np.asarray(points, dtype=float)
    corners = pts[np.asarray(triangles).reshape(-1, 3)]   # (T, 3, 2)

    angles = np.empty(corners.shape[:2])
    for k in range(3):
        p = corners[:, k]
        u = corners[:, (k + 1) % 3] - p
        v = corners[:, (k + 2) % 3] - p
        norm = np.linalg.norm(u, axis=1) * np.linalg.norm(v, axis=1)
        cos = np.einsum('ij,ij->i', u, v) / np.where(norm > 0, norm, 1.0)
        angles[:, k] = np.degrees(np.arccos(np.clip(cos, -1.0, 1.0)))
    return angles.min(axis=1) if len(angles) else np.empty(0)


def check_triangle_inequality(points,
                              triangles,
                              bad_angle_limit: int = BAD_ANGLE_LIMIT) -> Dict:
    """
    Find skinny triangles (some interior angle below bad_angle_limit).

    Args:
        points: (R, 2) positions
        triangles: (3T,) solid triangles only (no ghost region)
        bad_angle_limit: threshold in whole degrees

    Returns:
        dict with:
            'count': number of skinny triangles
            'bad_triangles': their triangle ids
            'histogram': (bad_angle_limit,) counts per whole degree of min angle
    """
    min_angles = triangle_min_angles(points, triangles)
    bad = np.flatnonzero(min_angles < bad_angle_limit)

    histogram = np.zeros(bad_angle_limit, dtype=int)
    np.add.at(histogram, min_angles[bad].astype(int), 1)

    # NOTE: inradius/circumradius ratio would be faster than angles
    if len(bad) > 0:
        warnings.warn(
            f"{len(bad)} triangle(s) with an angle below {bad_angle_limit}°, "
            f"bad angles: {' '.join(str(c) for c in histogram)}",
            MeshQualityWarning
        )

    return {
        'count': int(len(bad)),
        'bad_triangles': bad.tolist(),
        'histogram': histogram,
    }


def check_mesh_connectivity(mesh: PartialMesh,
                            max_steps: int = MAX_CIRCULATION_STEPS) -> Dict:
    """
    Verify opposite pairing and region circulation on a closed mesh.

    1. opposite(opposite(s)) == s for every side
    2. circulating from every side returns to it within max_steps
       (sides starting at the ghost region are exempt from the bound)

    Args:
        mesh: ghost-augmented PartialMesh
        max_steps: step bound for non-ghost regions

    Returns:
        dict with 'bad_opposites', 'failed_circulations' (side ids) and 'ok'
    """
    triangles = np.asarray(mesh.triangles)
    halfedges = np.asarray(mesh.halfedges)
    num_sides = len(triangles)
    ghost_r = len(mesh.points) - 1

    valid = (halfedges >= 0) & (halfedges < num_sides)
    s_all = np.arange(num_sides)
    back = np.full(num_sides, NO_SIDE, dtype=np.int64)
    back[valid] = halfedges[halfedges[valid]]
    bad_opposites = np.flatnonzero(back != s_all).tolist()

    failed = []
    for s0 in range(num_sides):
        limit = num_sides if triangles[s0] == ghost_r else max_steps
        s = s0
        for _ in range(limit):
            opposite = int(halfedges[s])
            if not 0 <= opposite < num_sides:
                s = NO_SIDE
                break
            s = _next_side(opposite)
            if s == s0:
                break
        if s != s0:
            failed.append(s0)

    if bad_opposites:
        warnings.warn(
            f"{len(bad_opposites)} side(s) whose opposite does not point back, "
            f"first: {bad_opposites[:10]}",
            MeshConnectivityWarning
        )
    for s0 in failed[:10]:
        warnings.warn(
            f"Failed to circulate around region {triangles[s0]} "
            f"starting from side {s0} (to region {triangles[_next_side(s0)]})",
            MeshConnectivityWarning
        )

    return {
        'bad_opposites': bad_opposites,
        'failed_circulations': failed,
        'ok': not bad_opposites and not failed,
    }
