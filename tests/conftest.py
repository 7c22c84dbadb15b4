"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from sca2d import GrowthConfig, SimulationConfig, Tree, Vector2D


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def root_tree():
    """Single root at the origin with radius 1."""
    return Tree(Vector2D(0.0, 0.0), 1.0)


@pytest.fixture
def line_tree():
    """Root at the origin plus a chain of children at x = 1, 2, 3, 4."""
    tree = Tree(Vector2D(0.0, 0.0), 1.0)
    parent = next(tree.ids())
    for x in range(1, 5):
        parent = tree.add_child(parent, Vector2D(float(x), 0.0), 1.0)
    return tree


@pytest.fixture
def growth_config():
    return GrowthConfig(
        influence_radius=20.0,
        kill_radius=1.0,
        step_len=2.0,
        tropism=Vector2D(0.0, 0.0),
    )


@pytest.fixture
def small_sim_config():
    """A quick, seeded simulation: 200 attractors in an oval above the root."""
    return SimulationConfig(
        num_attractors=200,
        region_center=(0.0, 40.0),
        region_extents=(30.0, 30.0),
        influence_radius=40.0,
        kill_radius=4.0,
        step_len=2.0,
        max_iterations=200,
        stagnation_limit=10,
        log_interval=0,
        random_seed=7,
    )
