"""Constants, error taxonomy and the mesh contract containers."""

from .constants import (
    EPS_ZERO,
    EPS_CLOSE,
    DOMAIN_SIZE,
    GHOST_POSITION,
    GHOST_OFFSET,
    NO_SIDE,
    BAD_ANGLE_LIMIT,
    MAX_CIRCULATION_STEPS,
    POISSON_TRIES,
    DEFAULT_SEED,
)
from .errors import (
    DualMeshError,
    MeshIndexError,
    InvalidRegionError,
    MeshCorruptionError,
    MeshQualityWarning,
    MeshConnectivityWarning,
)
from .structures import Triangulation, PartialMesh
