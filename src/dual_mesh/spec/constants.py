"""
Global constants for dual_mesh
==============================

All tolerances and magic numbers in ONE place.
"""

# Numerical tolerances
EPS_ZERO = 1e-12       # For "is this zero?" (degenerate edge lengths)
EPS_CLOSE = 1e-10      # For "are these equal?" (positions, exact combinatorics)

# Domain
DOMAIN_SIZE = 1000.0   # Builder assumes 0 <= x, y < DOMAIN_SIZE
GHOST_POSITION = (DOMAIN_SIZE / 2, DOMAIN_SIZE / 2)  # Reference location of the ghost region

# Ghost triangle dual vertex sits this far outside its unpaired side
GHOST_OFFSET = 10.0

# Index sentinel for "no opposite side" / "no representative side"
NO_SIDE = -1

# Diagnostics
BAD_ANGLE_LIMIT = 30          # Degrees; smaller interior angles count as skinny
MAX_CIRCULATION_STEPS = 100   # Connectivity check gives up on a region after this many steps
# NOTE: the ghost region is exempt, its valence equals the number of hull sides.

# Poisson-disc sampling
POISSON_TRIES = 30     # Candidates per active point before it is retired (Bridson k)

# Default random seed (for reproducibility)
DEFAULT_SEED = 42

# =============================================================================
# SIDE CONVENTIONS
# =============================================================================
#
# Triangle t owns sides 3t, 3t+1, 3t+2.
# Side s runs from triangles[s] to triangles[s_next_s(s)].
#
#   s_next_s(s) = s - 2 if s % 3 == 2 else s + 1
#   s_prev_s(s) = s + 2 if s % 3 == 0 else s - 1
#
# Solid triangles are wound counter-clockwise (positive signed area, y up),
# so the interior of a solid triangle lies to the LEFT of each of its sides.
#
# Ghost triangle i for the i-th unpaired side s (walked in hull order):
#   side0: end_r(s)   -> begin_r(s)   opposite of s
#   side1: begin_r(s) -> ghost_r      opposite of side2 of ghost i-1
#   side2: ghost_r    -> end_r(s)     opposite of side1 of ghost i+1
#
# =============================================================================
