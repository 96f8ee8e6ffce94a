"""
Shared pytest fixtures for centered-interval-tree tests.
"""

import numpy as np
import pytest
import yaml

from centered_interval_tree.accessors import Interval
from centered_interval_tree.script_utils import random_intervals


@pytest.fixture
def disjoint_intervals():
    """Non-overlapping intervals in sorted order; the last has start == end."""
    return [
        Interval(10, 20),
        Interval(40, 75),
        Interval(78, 85),
        Interval(89, 94),
        Interval(96, 97),
        Interval(99, 99),
    ]


@pytest.fixture
def nested_intervals():
    """Overlapping and nested intervals, including duplicates."""
    return [
        Interval(0, 100),
        Interval(10, 20),
        Interval(15, 60),
        Interval(15, 60),
        Interval(50, 50),
        Interval(55, 90),
        Interval(70, 80),
        Interval(95, 120),
    ]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def many_intervals(rng):
    """A few hundred random intervals with plenty of overlap."""
    return random_intervals(300, low=0, high=1000, max_length=80, rng=rng)


@pytest.fixture
def write_config(tmp_path):
    """Write a dict as YAML into tmp_path and return its path."""
    def _write(config, name="config.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(config))
        return path
    return _write
