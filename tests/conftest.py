"""Pytest configuration and fixtures."""

import pytest
import numpy as np
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from distribution.runner import CreativeRow, build_metrics


class FixedDraws:
    """Randomness source replaying a fixed sequence of uniforms."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self, size):
        self.calls += 1
        if size > len(self.values):
            raise AssertionError(f"Requested {size} draws, only {len(self.values)} queued")
        out = np.array(self.values[:size], dtype=float)
        self.values = self.values[size:]
        return out


@pytest.fixture
def fixed_draws():
    """Factory for deterministic randomness sources."""
    return FixedDraws


@pytest.fixture
def rng():
    """Seeded numpy generator."""
    return np.random.default_rng(42)


@pytest.fixture
def sample_metrics():
    """Default metrics with the secondary column enabled."""
    return build_metrics("Paid Events", "Second Event")


@pytest.fixture
def sample_rows():
    """Three distributed creatives, one with an awkward name."""
    return [
        CreativeRow(1, 'Creative 1', {
            'impressions': 500, 'clicks': 40, 'installs': 10,
            'primary_events': 3, 'secondary_events': 1
        }),
        CreativeRow(2, 'Summer, "Hero" cut', {
            'impressions': 300, 'clicks': 25, 'installs': 6,
            'primary_events': 2, 'secondary_events': 1
        }),
        CreativeRow(3, 'Line\nbreak', {
            'impressions': 200, 'clicks': 15, 'installs': 4,
            'primary_events': 1, 'secondary_events': 0
        }),
    ]
