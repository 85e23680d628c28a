"""Randomized weight vectors for spreading totals across creatives."""

from enum import Enum
import logging
from typing import Union

import numpy as np

from config import (
    BALANCED_NOISE,
    MODERATE_LOW,
    MODERATE_HIGH,
    MULTIPLICATIVE_FACTORS,
    PROFILE_ALIASES,
    UNIFORM_MAX,
    WEIGHT_EPS,
)
from utils.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class VarianceProfile(str, Enum):
    """How unequal creatives are allowed to be."""

    BALANCED = "balanced"
    MODERATE = "moderate"
    HIGH = "high"


class WeightScheme(str, Enum):
    """Concrete mapping from a variance profile to raw weight draws."""

    SPREAD = "spread"
    MULTIPLICATIVE = "multiplicative"


def parse_profile(value: Union[str, VarianceProfile]) -> VarianceProfile:
    """Resolve a profile name (case-insensitive, aliases allowed)."""
    if isinstance(value, VarianceProfile):
        return value
    name = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    name = PROFILE_ALIASES.get(name, name)
    try:
        return VarianceProfile(name)
    except ValueError:
        valid = sorted([p.value for p in VarianceProfile] + list(PROFILE_ALIASES))
        raise InvalidInputError(f"Unknown variance profile '{value}'. Available: {valid}")


def parse_scheme(value: Union[str, WeightScheme]) -> WeightScheme:
    if isinstance(value, WeightScheme):
        return value
    try:
        return WeightScheme(str(value).strip().lower())
    except ValueError:
        raise InvalidInputError(
            f"Unknown weight scheme '{value}'. Available: {[s.value for s in WeightScheme]}"
        )


class WeightGenerator:
    """Draws normalized weight vectors under a variance profile.

    The randomness source only needs a numpy-style ``random(size)`` method
    returning uniforms in [0, 1), so tests can substitute a fixed sequence.
    """

    def __init__(self, rng=None, scheme: Union[str, WeightScheme] = WeightScheme.SPREAD):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.scheme = parse_scheme(scheme)

    def generate(self, count: int, profile: Union[str, VarianceProfile]) -> np.ndarray:
        """Generate a weight vector.

        Args:
            count: Number of creatives (negative values are treated as 0)
            profile: Variance profile or its name

        Returns:
            Array of ``count`` positive weights summing to 1
        """
        profile = parse_profile(profile)
        count = max(0, int(count))
        if count == 0:
            return np.array([], dtype=float)

        # Injected sources may return exactly 1.0; keep draws inside [0, 1)
        u = np.clip(np.asarray(self.rng.random(count), dtype=float), 0.0, UNIFORM_MAX)
        raw = self._raw_weights(u, profile)

        # Guard against zero, negative or infinite draws
        raw = np.where(np.isfinite(raw) & (raw > 0), raw, WEIGHT_EPS)

        weights = raw / raw.sum()
        logger.debug(
            f"Generated {count} weights ({self.scheme.value}/{profile.value}): "
            f"min={weights.min():.4f}, max={weights.max():.4f}"
        )
        return weights

    def _raw_weights(self, u: np.ndarray, profile: VarianceProfile) -> np.ndarray:
        if self.scheme == WeightScheme.MULTIPLICATIVE:
            return 1.0 + u * MULTIPLICATIVE_FACTORS[profile.value]

        if profile == VarianceProfile.BALANCED:
            return 1.0 + (2.0 * u - 1.0) * BALANCED_NOISE
        if profile == VarianceProfile.MODERATE:
            return MODERATE_LOW + u * (MODERATE_HIGH - MODERATE_LOW)
        # Exponential tail: a few large creatives, many small ones
        return -np.log1p(-u)


def generate_weights(
    count: int,
    profile: Union[str, VarianceProfile],
    rng=None,
    scheme: Union[str, WeightScheme] = WeightScheme.SPREAD,
) -> np.ndarray:
    """Convenience wrapper around ``WeightGenerator.generate``."""
    return WeightGenerator(rng=rng, scheme=scheme).generate(count, profile)
