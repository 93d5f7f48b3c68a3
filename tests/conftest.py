"""Pytest configuration and shared fixtures."""

import random
import numpy as np
import pytest

from evoneat.run.config import Config


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Set random seeds for reproducibility."""
    random.seed(42)
    np.random.seed(42)

    yield

    random.seed(None)
    np.random.seed(None)


@pytest.fixture
def default_config():
    """A Config holding the default values (2 inputs, 1 output)."""
    return Config()


@pytest.fixture
def small_config():
    """A small, fast configuration: 10 genomes in 2 species, 3 generations."""
    config = Config()
    config.num_inputs      = 2
    config.num_outputs     = 1
    config.population_size = 10
    config.num_species     = 2
    config.max_generations = 3
    return config
