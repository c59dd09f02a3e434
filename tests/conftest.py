"""Shared direction sets for the test-suite."""
import numpy as np
import pytest

from fabricanalysis.core.conversions import line_to_dcos, plane_to_dcos


@pytest.fixture
def cluster():
    """Tight cluster of 8 near-vertical lines around the nadir."""
    return np.array([
        line_to_dcos(0, 85),
        line_to_dcos(90, 87),
        line_to_dcos(180, 86),
        line_to_dcos(270, 88),
        line_to_dcos(45, 89),
        line_to_dcos(135, 86),
        line_to_dcos(225, 87),
        line_to_dcos(315, 88),
    ])


@pytest.fixture
def girdle():
    """Poles of planes striking N-S, dipping 10-80 degrees to the east and west."""
    poles = []
    for dip in range(10, 81, 10):
        poles.append(plane_to_dcos(90, dip))
        poles.append(plane_to_dcos(270, dip))
    return np.array(poles)


@pytest.fixture
def single():
    return np.array([plane_to_dcos(120, 45)])
