"""
Error and warning taxonomy
==========================

Errors are raised on misuse and are fatal to the calling operation.
Warnings carry non-fatal diagnostics from the optional consistency checks.

    DualMeshError
     ├── MeshIndexError (IndexError)       out-of-range r / s / t
     │    └── InvalidRegionError           circulation without a start side
     └── MeshCorruptionError (RuntimeError) circulation never returns

    MeshQualityWarning       skinny triangles
    MeshConnectivityWarning  broken opposites / runaway circulation
"""


class DualMeshError(Exception):
    """Base class for dual_mesh errors."""


class MeshIndexError(DualMeshError, IndexError):
    """A region, side or triangle index is out of range."""


class InvalidRegionError(MeshIndexError):
    """Circulation requested for a region with no representative side."""


class MeshCorruptionError(DualMeshError, RuntimeError):
    """A region circulation failed to return to its starting side."""


class MeshQualityWarning(UserWarning):
    pass


class MeshConnectivityWarning(UserWarning):
    pass
