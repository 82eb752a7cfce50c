"""Test configuration for ripplesurf."""

import numpy as np
import pytest

from ripplesurf.geometry import lattice_positions


class FakeClock:
    """Deterministic clock for pointer velocity tests."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def unit_lattice():
    """Factory for unit-spaced positions with a chosen cell on the origin."""
    def make(width, height, origin=(0, 0)):
        return lattice_positions(width, height, spacing=1.0, origin=origin)
    return make


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
