"""
Triangle / Polygon Dual Mesh
============================

Represent a triangle mesh and its dual polygon mesh with three kinds of
element, each a dense integer id:

    Regions   (r)   0 <= r < num_regions     points; dual polygons
    Sides     (s)   0 <= s < num_sides       directed half-edges
    Triangles (t)   0 <= t < num_triangles   faces; dual vertices

NAMING:
    x_name_y takes an x (r, s, t) and returns a y (r, s, t). If the output
    is not a mesh index the _y suffix is omitted (r_x, t_pos, s_ghost).

SIDES:
    A side is directed. Two adjacent triangles t0, t1 share two sides, one
    owned by each (s_inner_t / s_outer_t). The same two sides separate the
    two regions at their ends (s_begin_r / s_end_r). Each side's partner is
    s_opposite_s.

GHOSTS:
    Built through add_ghost_structure, the mesh has no boundary: it wraps
    around the back through one ghost region (the last region). Ghost sides
    and ghost triangles join the hull to the ghost region. Everything else
    is solid. Boundary regions are the first num_boundary_regions regions,
    the ones seeded along the domain edge.

INVARIANTS (every side s, once ghosts are added):
    I1  s_opposite_s(s_opposite_s(s)) == s
    I2  s_begin_r(s) == s_end_r(s_opposite_s(s))
    I3  s_inner_t(s) == s_outer_t(s_opposite_s(s))
    I4  s_begin_r(s_next_s(s)) == s_begin_r(s_opposite_s(s))
    I5  region circulation returns to its start
    I6  num_sides == 3 num_triangles, num_solid_sides == 3 num_solid_triangles

Derived arrays are owned by the mesh; inputs are copied.
"""

import operator

import numpy as np
from typing import List

from ..spec.constants import GHOST_OFFSET, EPS_ZERO, NO_SIDE
from ..spec.errors import MeshIndexError, InvalidRegionError, MeshCorruptionError
from ..spec.structures import PartialMesh, Triangulation


def _check_index(kind: str, i, n: int) -> int:
    """Return i as a plain int in [0, n), or raise MeshIndexError."""
    try:
        idx = operator.index(i)
    except TypeError:
        raise MeshIndexError(f"{kind} index {i!r} is not an integer") from None
    if not 0 <= idx < n:
        raise MeshIndexError(f"{kind} index {idx} out of range [0, {n})")
    return idx


def _next_side(s: int) -> int:
    return s - 2 if s % 3 == 2 else s + 1


def _prev_side(s: int) -> int:
    return s + 2 if s % 3 == 0 else s - 1


class TriangleMesh:
    """
    Queryable dual mesh.

    Args:
        points: (R, 2) region positions, ghost region last
        triangles: (3T,) begin region of each side
        halfedges: (3T,) opposite of each side
        num_solid_sides: sides at or above this index are ghost sides
        num_boundary_regions: regions below this index are boundary regions
    """

    def __init__(self,
                 points,
                 triangles,
                 halfedges,
                 num_solid_sides: int,
                 num_boundary_regions: int = 0):
        self.num_boundary_regions = int(num_boundary_regions)
        self._r_vertex = np.array(points, dtype=float).reshape(-1, 2)
        self._triangles = np.array(triangles, dtype=np.int32)
        self._halfedges = np.array(halfedges, dtype=np.int32)
        self.num_solid_sides = int(num_solid_sides)
        self._update()

    @classmethod
    def from_partial_mesh(cls, mesh: PartialMesh) -> "TriangleMesh":
        return cls(mesh.points, mesh.triangles, mesh.halfedges,
                   num_solid_sides=mesh.num_solid_sides,
                   num_boundary_regions=mesh.num_boundary_regions)

    @classmethod
    def from_triangulation(cls, points, triangulation: Triangulation) -> "TriangleMesh":
        """
        Mesh straight from a triangulation: no boundary regions, no ghosts.

        The hull stays open, so opposites may be -1 and region circulation
        stops at the hull.
        """
        return cls(points, triangulation.triangles, triangulation.halfedges,
                   num_solid_sides=len(triangulation.triangles),
                   num_boundary_regions=0)

    # ═══════════════════════════════════════════════════════════════
    # DERIVED DATA
    # ═══════════════════════════════════════════════════════════════

    def update(self, points, triangles, halfedges, num_solid_sides: int):
        """
        Re-derive everything from a new triangulation of the same points.

        Boundary regions are kept. Not safe to call while another caller is
        reading this mesh.

        Raises:
            ValueError: if the number of regions changes
        """
        points = np.array(points, dtype=float).reshape(-1, 2)
        if len(points) != self.num_regions:
            raise ValueError(f"update() needs the same {self.num_regions} regions, "
                             f"got {len(points)}")
        self._r_vertex = points
        self._triangles = np.array(triangles, dtype=np.int32)
        self._halfedges = np.array(halfedges, dtype=np.int32)
        self.num_solid_sides = int(num_solid_sides)
        self._update()

    def _update(self):
        triangles = self._triangles
        halfedges = self._halfedges
        r_vertex = self._r_vertex

        if len(triangles) != len(halfedges):
            raise ValueError(f"triangles ({len(triangles)}) and halfedges "
                             f"({len(halfedges)}) differ in length")
        if len(triangles) % 3 != 0 or self.num_solid_sides % 3 != 0:
            raise ValueError("Side counts must be multiples of 3")

        self.num_sides = len(triangles)
        self.num_regions = len(r_vertex)
        self.num_solid_regions = self.num_regions - 1
        self.num_triangles = self.num_sides // 3
        self.num_solid_triangles = self.num_solid_sides // 3

        # Region -> one incoming side. First side wins; a side with no
        # opposite overrides so an open fan is walked from its first edge.
        s = np.arange(self.num_sides)
        s_next = np.where(s % 3 == 2, s - 2, s + 1)
        end_r = triangles[s_next]

        r_in_s = np.full(self.num_regions, NO_SIDE, dtype=np.int32)
        regions, first = np.unique(end_r, return_index=True)
        r_in_s[regions] = first
        unpaired = np.flatnonzero(halfedges == NO_SIDE)
        r_in_s[end_r[unpaired]] = unpaired
        self._r_in_s = r_in_s

        # Dual vertices
        a = r_vertex[triangles[0::3]]
        b = r_vertex[triangles[1::3]]
        c = r_vertex[triangles[2::3]]
        t_vertex = (a + b + c) / 3

        ghost = slice(self.num_solid_triangles, self.num_triangles)
        d = b[ghost] - a[ghost]
        length = np.hypot(d[:, 0], d[:, 1])
        scale = np.where(length > EPS_ZERO, GHOST_OFFSET / np.maximum(length, EPS_ZERO), 0.0)
        # Outside is to the left of side0 (it runs against the hull winding)
        t_vertex[ghost, 0] = 0.5 * (a[ghost, 0] + b[ghost, 0]) - d[:, 1] * scale
        t_vertex[ghost, 1] = 0.5 * (a[ghost, 1] + b[ghost, 1]) + d[:, 0] * scale
        self._t_vertex = t_vertex

    # ═══════════════════════════════════════════════════════════════
    # POSITIONS
    # ═══════════════════════════════════════════════════════════════

    def r_x(self, r: int) -> float:
        r = _check_index("region", r, self.num_regions)
        return float(self._r_vertex[r, 0])

    def r_y(self, r: int) -> float:
        r = _check_index("region", r, self.num_regions)
        return float(self._r_vertex[r, 1])

    def t_x(self, t: int) -> float:
        t = _check_index("triangle", t, self.num_triangles)
        return float(self._t_vertex[t, 0])

    def t_y(self, t: int) -> float:
        t = _check_index("triangle", t, self.num_triangles)
        return float(self._t_vertex[t, 1])

    def r_pos(self, r: int) -> np.ndarray:
        r = _check_index("region", r, self.num_regions)
        return self._r_vertex[r].copy()

    def t_pos(self, t: int) -> np.ndarray:
        t = _check_index("triangle", t, self.num_triangles)
        return self._t_vertex[t].copy()

    # ═══════════════════════════════════════════════════════════════
    # SIDES
    # ═══════════════════════════════════════════════════════════════

    def s_to_t(self, s: int) -> int:
        s = _check_index("side", s, self.num_sides)
        return s // 3

    def s_next_s(self, s: int) -> int:
        s = _check_index("side", s, self.num_sides)
        return _next_side(s)

    def s_prev_s(self, s: int) -> int:
        s = _check_index("side", s, self.num_sides)
        return _prev_side(s)

    def s_begin_r(self, s: int) -> int:
        s = _check_index("side", s, self.num_sides)
        return int(self._triangles[s])

    def s_end_r(self, s: int) -> int:
        s = _check_index("side", s, self.num_sides)
        return int(self._triangles[_next_side(s)])

    def s_inner_t(self, s: int) -> int:
        s = _check_index("side", s, self.num_sides)
        return s // 3

    def s_outer_t(self, s: int) -> int:
        """Triangle on the other side of s; -1 if s has no opposite."""
        opposite = self.s_opposite_s(s)
        return NO_SIDE if opposite == NO_SIDE else opposite // 3

    def s_opposite_s(self, s: int) -> int:
        s = _check_index("side", s, self.num_sides)
        return int(self._halfedges[s])

    # ═══════════════════════════════════════════════════════════════
    # CIRCULATION
    # ═══════════════════════════════════════════════════════════════

    def t_circulate_s(self, t: int) -> List[int]:
        t = _check_index("triangle", t, self.num_triangles)
        return [3 * t, 3 * t + 1, 3 * t + 2]

    def t_circulate_r(self, t: int) -> List[int]:
        t = _check_index("triangle", t, self.num_triangles)
        return [int(r) for r in self._triangles[3 * t:3 * t + 3]]

    def t_circulate_t(self, t: int) -> List[int]:
        return [self.s_outer_t(s) for s in self.t_circulate_s(t)]

    def _incoming_sides(self, r: int) -> List[int]:
        """
        Sides ending at r, in rotational order.

        Walk: incoming → next (outgoing from r) → its opposite (the next
        incoming). Stops on return to the start, or at a missing opposite
        on an open mesh.

        Raises:
            InvalidRegionError: r out of range or touched by no side
            MeshCorruptionError: no return within num_sides steps
        """
        try:
            r = operator.index(r)
        except TypeError:
            raise InvalidRegionError(f"Invalid region {r!r}, expected an integer") from None
        if not 0 <= r < self.num_regions:
            raise InvalidRegionError(f"Invalid region {r}, expected [0, {self.num_regions})")
        s0 = int(self._r_in_s[r])
        if s0 == NO_SIDE:
            raise InvalidRegionError(f"Region {r} has no incident side")

        halfedges = self._halfedges
        incoming = s0
        out = []
        for _ in range(self.num_sides):
            out.append(incoming)
            incoming = int(halfedges[_next_side(incoming)])
            if incoming == s0 or incoming == NO_SIDE:
                return out
        raise MeshCorruptionError(f"Circulation around region {r} did not return to "
                                  f"side {s0} within {self.num_sides} steps")

    def r_circulate_s(self, r: int) -> List[int]:
        """Sides beginning at r."""
        return [int(self._halfedges[s]) for s in self._incoming_sides(r)]

    def r_circulate_r(self, r: int) -> List[int]:
        """Neighbouring regions of r."""
        return [int(self._triangles[s]) for s in self._incoming_sides(r)]

    def r_circulate_t(self, r: int) -> List[int]:
        """Triangles around r (the corners of r's dual polygon)."""
        return [s // 3 for s in self._incoming_sides(r)]

    # ═══════════════════════════════════════════════════════════════
    # CLASSIFICATION
    # ═══════════════════════════════════════════════════════════════

    def ghost_r(self) -> int:
        return self.num_regions - 1

    def s_ghost(self, s: int) -> bool:
        s = _check_index("side", s, self.num_sides)
        return s >= self.num_solid_sides

    def r_ghost(self, r: int) -> bool:
        r = _check_index("region", r, self.num_regions)
        return r == self.num_regions - 1

    def t_ghost(self, t: int) -> bool:
        t = _check_index("triangle", t, self.num_triangles)
        return self.s_ghost(3 * t)

    def s_boundary(self, s: int) -> bool:
        """Ghost side glued onto a hull side."""
        return self.s_ghost(s) and s % 3 == 0

    def r_boundary(self, r: int) -> bool:
        r = _check_index("region", r, self.num_regions)
        return r < self.num_boundary_regions

    def __repr__(self):
        return (f"TriangleMesh(regions={self.num_regions}, "
                f"triangles={self.num_triangles} ({self.num_solid_triangles} solid), "
                f"boundary_regions={self.num_boundary_regions})")
