"""Dual-mesh data structure."""

from .triangle_mesh import TriangleMesh
