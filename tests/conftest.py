"""
Shared fixtures

ScriptedRandom stands in for random.Random where a test needs exact
arrival samples and request floors.
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import pytest
import simpy

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class ScriptedRandom:
    """
    Replays fixed values for random() and randint().

    Once a script runs out, random() returns default_sample and randint()
    returns the lower bound.
    """

    def __init__(self, samples=(), floors=(), default_sample=0.99):
        self.samples = list(samples)
        self.floors = list(floors)
        self.default_sample = default_sample

    def random(self):
        if self.samples:
            return self.samples.pop(0)
        return self.default_sample

    def randint(self, a, b):
        value = self.floors.pop(0) if self.floors else a
        assert a <= value <= b, f"scripted floor {value} outside [{a}, {b}]"
        return value


@pytest.fixture
def env():
    return simpy.Environment()


@pytest.fixture
def scripted_random():
    return ScriptedRandom
