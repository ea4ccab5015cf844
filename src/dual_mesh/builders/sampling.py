"""
Poisson-Disc Sampling
=====================

Evenly spaced random points for the interior of the mesh.

Hard-core (Poisson-disc) point set in [0, size)²: every pair of points is
at least min_distance apart. Points already in the builder (boundary
points, user points) act as exclusion seeds: new points keep min_distance
from them too, and sampling grows outward from them.

ALGORITHM (Bridson 2007):
    1. Background grid of cell size r/√2, each cell lists its points.
    2. Active list starts with the seeds (or one random point).
    3. Pop a random active point, throw up to k candidates in the annulus
       [r, 2r] around it, accept the first one with no neighbour closer
       than r. Retire the active point when all k fail.

SAMPLER CONTRACT:
    sampler(existing_points, min_distance) -> (M, 2) NEW points only
"""

import math
from collections import defaultdict
from typing import Optional

import numpy as np

from ..spec.constants import DOMAIN_SIZE, POISSON_TRIES


class PoissonDiscSampler:
    """
    Callable Poisson-disc sampler over a square domain.

    Args:
        size: side length of the domain
        k: candidates per active point (POISSON_TRIES)
        seed: seed for numpy's default_rng; None for a fresh stream
    """

    def __init__(self,
                 size: float = DOMAIN_SIZE,
                 k: int = POISSON_TRIES,
                 seed: Optional[int] = None):
        self.size = float(size)
        self.k = int(k)
        self.rng = np.random.default_rng(seed)

    def __call__(self, existing, min_distance: float) -> np.ndarray:
        if min_distance <= 0:
            raise ValueError(f"min_distance must be > 0, got {min_distance}")

        r = float(min_distance)
        r2 = r * r
        cell = r / math.sqrt(2)
        size = self.size
        rng = self.rng

        grid = defaultdict(list)

        def key(p):
            return int(p[0] // cell), int(p[1] // cell)

        def far_enough(p):
            gx, gy = key(p)
            for ix in range(gx - 2, gx + 3):
                for iy in range(gy - 2, gy + 3):
                    for q in grid.get((ix, iy), ()):
                        dx = p[0] - q[0]
                        dy = p[1] - q[1]
                        if dx * dx + dy * dy < r2:
                            return False
            return True

        active = []
        for p in np.asarray(existing, dtype=float).reshape(-1, 2):
            p = (float(p[0]), float(p[1]))
            grid[key(p)].append(p)
            if 0 <= p[0] < size and 0 <= p[1] < size:
                active.append(p)

        new_points = []
        if not active:
            p = (float(rng.uniform(0, size)), float(rng.uniform(0, size)))
            if far_enough(p):
                grid[key(p)].append(p)
                active.append(p)
                new_points.append(p)

        while active:
            idx = int(rng.integers(len(active)))
            base = active[idx]
            for _ in range(self.k):
                radius = r * math.sqrt(rng.uniform(1.0, 4.0))
                angle = rng.uniform(0.0, 2 * math.pi)
                p = (base[0] + radius * math.cos(angle),
                     base[1] + radius * math.sin(angle))
                if not (0 <= p[0] < size and 0 <= p[1] < size):
                    continue
                if far_enough(p):
                    grid[key(p)].append(p)
                    active.append(p)
                    new_points.append(p)
                    break
            else:
                # Swap-remove the exhausted point
                active[idx] = active[-1]
                active.pop()

        return np.array(new_points, dtype=float).reshape(-1, 2)


def sample_poisson_disc(existing,
                        min_distance: float,
                        size: float = DOMAIN_SIZE,
                        seed: Optional[int] = None) -> np.ndarray:
    """One-shot convenience wrapper around PoissonDiscSampler."""
    return PoissonDiscSampler(size=size, seed=seed)(existing, min_distance)
