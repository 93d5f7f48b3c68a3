"""
Shared fixtures for integration tests.
"""

import pytest


@pytest.fixture
def xor_inputs():
    """XOR inputs, one list per case."""
    return [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]


@pytest.fixture
def xor_outputs():
    """XOR expected outputs, one value per case."""
    return [0.0, 1.0, 1.0, 0.0]
