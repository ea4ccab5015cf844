"""
Mesh Builder
============

Build a TriangleMesh from points, with ghost triangles around the exterior.

The builder assumes 0 <= x < size, 0 <= y < size (size = DOMAIN_SIZE).

PHASES (in this order, all chainable):
    1. Boundary points   MeshBuilder(boundary_spacing=...)
    2. Your own points   .add_points(points)
    3. Poisson disc      .add_poisson(spacing)
    4. Build             .create(run_checks=False)

    With boundary_spacing > 0 equally spaced points are placed around the
    domain edge. With Poisson-disc interior points, a boundary spacing of
    about 1.5x the Poisson spacing works well.

EXAMPLE:
    mesh = MeshBuilder(boundary_spacing=150).add_poisson(100).create()

The builder runs optional sanity checks but does not correct the points.
"""

import logging

import numpy as np
from typing import Callable, Optional

from ..analysis.checks import (
    check_point_inequality,
    check_triangle_inequality,
    check_mesh_connectivity,
)
from ..mesh.triangle_mesh import TriangleMesh
from ..spec.constants import DOMAIN_SIZE
from ..spec.structures import Triangulation
from .boundary import generate_boundary_points
from .ghost import add_ghost_structure
from .sampling import PoissonDiscSampler
from .triangulate import triangulate

log = logging.getLogger(__name__)

Sampler = Callable[[np.ndarray, float], np.ndarray]
Triangulator = Callable[[np.ndarray], Triangulation]


def _as_point_array(points) -> np.ndarray:
    pts = np.asarray(points, dtype=float)
    if pts.size == 0:
        return np.empty((0, 2))
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"points must have shape (N, 2), got {pts.shape}")
    return pts


class MeshBuilder:
    """
    Accumulates points, then triangulates and closes them into a mesh.

    Args:
        boundary_spacing: > 0 adds boundary points around the domain; 0 disables
        size: side length of the square domain
        triangulator: points -> Triangulation (default: scipy Delaunay)
        ghost_position: ghost region location (default: domain centre)

    The first num_boundary_regions points are always the boundary points.
    """

    def __init__(self,
                 boundary_spacing: float = 0,
                 size: float = DOMAIN_SIZE,
                 triangulator: Triangulator = triangulate,
                 ghost_position=None):
        if boundary_spacing < 0:
            raise ValueError(f"boundary_spacing must be >= 0, got {boundary_spacing}")

        self.size = float(size)
        self.triangulator = triangulator
        self.ghost_position = (self.size / 2, self.size / 2) if ghost_position is None \
            else tuple(ghost_position)

        if boundary_spacing > 0:
            self.points = generate_boundary_points(boundary_spacing, self.size)
        else:
            self.points = np.empty((0, 2))
        self.num_boundary_regions = len(self.points)
        log.debug(f"MeshBuilder: {self.num_boundary_regions} boundary points "
                  f"(spacing={boundary_spacing}, size={self.size})")

    def add_points(self, points) -> "MeshBuilder":
        """Append explicit (x, y) points."""
        new_points = _as_point_array(points)
        self.points = np.vstack([self.points, new_points])
        return self

    def get_non_boundary_points(self) -> np.ndarray:
        return self.points[self.num_boundary_regions:].copy()

    def clear_non_boundary_points(self) -> "MeshBuilder":
        """Drop everything but the boundary, e.g. to rebuild with a new interior."""
        self.points = self.points[:self.num_boundary_regions].copy()
        return self

    def add_poisson(self,
                    spacing: float,
                    sampler: Optional[Sampler] = None,
                    seed: Optional[int] = None) -> "MeshBuilder":
        """
        Fill the domain with Poisson-disc points.

        Existing points are exclusion seeds: new points keep `spacing`
        from them and from each other.

        Args:
            spacing: minimum distance between points
            sampler: (existing, min_distance) -> new points;
                     default PoissonDiscSampler(size, seed=seed)
            seed: seed for the default sampler
        """
        if sampler is None:
            sampler = PoissonDiscSampler(size=self.size, seed=seed)
        new_points = _as_point_array(sampler(self.points.copy(), spacing))
        log.debug(f"Poisson disc: {len(new_points)} points at spacing {spacing}")
        return self.add_points(new_points)

    def create(self, run_checks: bool = False) -> TriangleMesh:
        """
        Triangulate, add the ghost structure and build the mesh.

        Args:
            run_checks: run the consistency checks in analysis.checks;
                        findings are reported as warnings

        Returns:
            TriangleMesh

        Raises:
            ValueError: duplicate or coincident points (from the triangulator)
        """
        points = self.points.copy()
        triangulation = self.triangulator(points)
        log.debug(f"Triangulated {len(points)} points into "
                  f"{triangulation.num_triangles} triangles")

        if run_checks:
            check_point_inequality(points, triangulation.triangles)
            check_triangle_inequality(points, triangulation.triangles)

        partial = add_ghost_structure(
            points,
            triangulation.triangles,
            triangulation.halfedges,
            ghost_position=self.ghost_position,
            num_boundary_regions=self.num_boundary_regions,
        )
        log.debug(f"Ghost structure: {(len(partial.triangles) - partial.num_solid_sides) // 3} "
                  f"ghost triangles")

        if run_checks:
            report = check_mesh_connectivity(partial)
            if not report['ok']:
                log.warning("Mesh connectivity check failed")

        return TriangleMesh.from_partial_mesh(partial)
