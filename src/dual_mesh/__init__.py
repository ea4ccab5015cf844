"""
dual_mesh
=========

Triangle / polygon dual mesh over a planar point set.

Modules:
    spec      - constants, error taxonomy, mesh contract containers
    builders  - triangulation, ghost structure, point generation, MeshBuilder
    mesh      - TriangleMesh, the queryable dual mesh
    analysis  - optional consistency checks

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"dual_mesh requires Python >= 3.9, got {sys.version}")

# scipy version check (Delaunay neighbour table, QhullError export)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"dual_mesh requires scipy >= 1.11, got {scipy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"dual_mesh requires numpy >= 1.20, got {np.__version__}")

from . import spec
from . import builders
from . import mesh
from . import analysis

from .builders import MeshBuilder, add_ghost_structure, triangulate
from .mesh import TriangleMesh
from .spec import (
    DualMeshError,
    MeshIndexError,
    InvalidRegionError,
    MeshCorruptionError,
    MeshQualityWarning,
    MeshConnectivityWarning,
    PartialMesh,
    Triangulation,
)

__version__ = "0.1.0"
