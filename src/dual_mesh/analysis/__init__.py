"""
Analysis functions - diagnostics over built or partially built meshes.

Separated from builders to keep the layering:
    builders → mesh → spec
    analysis → spec

Includes:
- checks: skinny triangles, opposite pairing, region circulation
"""

from .checks import (
    check_point_inequality,
    check_triangle_inequality,
    check_mesh_connectivity,
    triangle_min_angles,
)
