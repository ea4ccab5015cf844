"""Mesh construction: triangulation, ghost structure, point generation, builder."""

from .triangulate import triangulate
from .ghost import add_ghost_structure
from .boundary import generate_boundary_points
from .sampling import PoissonDiscSampler, sample_poisson_disc
from .mesh_builder import MeshBuilder
