"""
Common test fixtures and configuration for pytiles tests.
"""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add the project root to Python path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from pytiles import unit_axis, strided_axis, make_box


@pytest.fixture
def axis_2_10():
    """The unit axis 2..10 used throughout the tiling examples."""
    return unit_axis(2, 10)


@pytest.fixture
def sample_axes():
    """Axes of different kinds and origins, all of length 9 or more."""
    return {
        'one_based': unit_axis(1, 10),
        'offset': unit_axis(2, 10),
        'negative': unit_axis(-5, 7),
        'strided': strided_axis(1, 2, 19),
        'zero_based': range(0, 12),
    }


@pytest.fixture
def edge_boxes():
    """Outer/inner box pair of the boundary iteration example."""
    return make_box(((-1, 4), (0, 3))), make_box(((1, 3), (1, 2)))


@pytest.fixture
def random_array():
    """Deterministic random 2D array for sweep tests."""
    rng = np.random.default_rng(1234)
    return rng.random((37, 23))


# Pytest configuration hooks
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names."""
    for item in items:
        # Mark integration tests
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        # Mark slow tests
        if any(keyword in item.nodeid for keyword in ["large", "exhaustive"]):
            item.add_marker(pytest.mark.slow)
