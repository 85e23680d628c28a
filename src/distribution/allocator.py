"""Integer allocation of totals over weight vectors.

Two strategies are available and they differ in which creatives absorb the
rounding error:

* ``largest_remainder`` (default): floor every share, then hand the
  leftover units to the creatives with the largest fractional parts. Ties
  go to the lower index. Rounding error is spread as evenly as possible.
* ``running_remainder``: round each share in order and let the last
  creative take whatever is left of the pool.

Negative or non-finite weights count as a zero share. Under
``largest_remainder`` such a creative always gets 0. Under
``running_remainder`` the last creative takes the leftover pool whatever
its weight, so a zero-weight creative in last position can still receive
units.

Shares are computed with exact rationals, so any non-negative integer total
is supported. Both strategies return non-negative integers summing exactly
to the total.
"""

from enum import Enum
from fractions import Fraction
import logging
from typing import List, Sequence, Union

import numpy as np

from utils.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class AllocationStrategy(str, Enum):
    LARGEST_REMAINDER = "largest_remainder"
    RUNNING_REMAINDER = "running_remainder"


def parse_strategy(value: Union[str, AllocationStrategy]) -> AllocationStrategy:
    if isinstance(value, AllocationStrategy):
        return value
    try:
        return AllocationStrategy(str(value).strip().lower().replace("-", "_"))
    except ValueError:
        raise InvalidInputError(
            f"Unknown allocation strategy '{value}'. Available: {[s.value for s in AllocationStrategy]}"
        )


def _clean_weights(weights: Sequence[float]) -> List[Fraction]:
    """Zero out negative/non-finite weights and convert to exact rationals.

    All-zero input falls back to an even split.
    """
    w = np.asarray(weights, dtype=float)
    w = np.where(np.isfinite(w) & (w > 0), w, 0.0)
    if not (w > 0).any():
        return [Fraction(1)] * len(w)
    return [Fraction(float(x)) for x in w]


def _exact_shares(total: int, w: List[Fraction]) -> List[Fraction]:
    weight_sum = sum(w)
    return [total * wi / weight_sum for wi in w]


class IntegerAllocator:
    """Splits integer totals across weighted buckets without drift."""

    def __init__(self, strategy: Union[str, AllocationStrategy] = AllocationStrategy.LARGEST_REMAINDER):
        self.strategy = parse_strategy(strategy)

    def allocate(self, total: int, weights: Sequence[float]) -> List[int]:
        """Allocate ``total`` across ``weights``.

        Args:
            total: Non-negative integer total (negative values give zeros)
            weights: Weight per bucket

        Returns:
            List of ints, same length as ``weights``, summing to ``total``
        """
        n = len(weights)
        if n == 0:
            return []
        total = int(total)
        if total <= 0:
            return [0] * n

        shares = _exact_shares(total, _clean_weights(weights))
        if self.strategy == AllocationStrategy.RUNNING_REMAINDER:
            result = self._running_remainder(total, shares)
        else:
            result = self._largest_remainder(total, shares)

        logger.debug(f"Allocated {total} over {n} buckets ({self.strategy.value})")
        return result

    def _largest_remainder(self, total: int, shares: List[Fraction]) -> List[int]:
        result = [share.numerator // share.denominator for share in shares]
        frac = [share - floor for share, floor in zip(shares, result)]

        # Fractional parts sum to the shortfall, so it is always smaller than
        # the number of buckets with a non-zero fraction
        shortfall = total - sum(result)
        # sorted() is stable: lower index first on equal fractions
        order = sorted(range(len(shares)), key=lambda i: frac[i], reverse=True)
        for i in order[:shortfall]:
            result[i] += 1
        return result

    def _running_remainder(self, total: int, shares: List[Fraction]) -> List[int]:
        n = len(shares)
        result = [0] * n
        remaining = total
        for i in range(n - 1):
            # Round half up: floor(share + 1/2)
            share = shares[i]
            value = (2 * share.numerator + share.denominator) // (2 * share.denominator)
            value = min(value, remaining)
            result[i] = value
            remaining -= value
        result[-1] = remaining
        return result


def allocate(
    total: int,
    weights: Sequence[float],
    strategy: Union[str, AllocationStrategy] = AllocationStrategy.LARGEST_REMAINDER,
) -> List[int]:
    """Convenience wrapper around ``IntegerAllocator.allocate``."""
    return IntegerAllocator(strategy=strategy).allocate(total, weights)
