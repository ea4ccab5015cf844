"""Shared fixtures for dual_mesh core tests."""

import numpy as np
import pytest


# Square corners + centre: 4 solid triangles, 4 hull sides
FIVE_POINTS = np.array([
    [0.0, 0.0],
    [1000.0, 0.0],
    [1000.0, 1000.0],
    [0.0, 1000.0],
    [500.0, 500.0],
])


@pytest.fixture
def five_points():
    return FIVE_POINTS.copy()
