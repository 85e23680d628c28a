"""Creative-level distribution of report totals."""

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union

from config import (
    BASE_METRIC_LABELS,
    CREATIVE_NAME_TEMPLATE,
    DEFAULT_PRIMARY_LABEL,
    DEFAULT_SECONDARY_LABEL,
    METRIC_CLICKS,
    METRIC_IMPRESSIONS,
    METRIC_INSTALLS,
    METRIC_PRIMARY_EVENTS,
    METRIC_SECONDARY_EVENTS,
)
from distribution.allocator import AllocationStrategy, IntegerAllocator
from distribution.weights import VarianceProfile, WeightGenerator, WeightScheme, parse_profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricSpec:
    """A distributed metric and the header it is shown under."""
    key: str
    label: str


@dataclass(frozen=True)
class CreativeRow:
    """One creative's share of every metric."""
    index: int
    name: str
    values: Dict[str, int] = field(default_factory=dict)

    def get(self, metric: str) -> int:
        return self.values.get(metric, 0)


def build_totals(
    impressions: int,
    clicks: int,
    installs: int,
    primary_events: int,
    secondary_events: Optional[int] = None,
) -> Dict[str, int]:
    """Ordered totals mapping; secondary events only when given."""
    totals = {
        METRIC_IMPRESSIONS: impressions,
        METRIC_CLICKS: clicks,
        METRIC_INSTALLS: installs,
        METRIC_PRIMARY_EVENTS: primary_events,
    }
    if secondary_events is not None:
        totals[METRIC_SECONDARY_EVENTS] = secondary_events
    return totals


def build_metrics(
    primary_label: str = DEFAULT_PRIMARY_LABEL,
    secondary_label: Optional[str] = None,
) -> List[MetricSpec]:
    """Metric specs in display order.

    Args:
        primary_label: Header for the primary event column
        secondary_label: Header for the secondary event column; the column
            is left out when None

    Returns:
        List of MetricSpec
    """
    metrics = [MetricSpec(key, label) for key, label in BASE_METRIC_LABELS.items()]
    metrics.append(MetricSpec(METRIC_PRIMARY_EVENTS, primary_label or DEFAULT_PRIMARY_LABEL))
    if secondary_label is not None:
        metrics.append(MetricSpec(METRIC_SECONDARY_EVENTS, secondary_label or DEFAULT_SECONDARY_LABEL))
    return metrics


def run_distribution(
    creative_count: int,
    totals: Mapping[str, int],
    profile: Union[str, VarianceProfile],
    rng=None,
    scheme: Union[str, WeightScheme] = WeightScheme.SPREAD,
    strategy: Union[str, AllocationStrategy] = AllocationStrategy.LARGEST_REMAINDER,
    names: Optional[Sequence[str]] = None,
) -> List[CreativeRow]:
    """Distribute every metric total across creatives.

    One weight vector is drawn and shared by all metrics, so a creative
    that gets many impressions also gets many clicks and installs.

    Args:
        creative_count: Number of creatives (negative values are treated as 0)
        totals: Metric key -> total (negative values are treated as 0)
        profile: Variance profile or its name
        rng: Optional randomness source for the weight draw
        scheme: Weight scheme
        strategy: Integer allocation strategy
        names: Optional display names, by position

    Returns:
        One CreativeRow per creative, in index order
    """
    count = max(0, int(creative_count))
    profile = parse_profile(profile)
    clean_totals = {metric: max(0, int(value)) for metric, value in totals.items()}

    generator = WeightGenerator(rng=rng, scheme=scheme)
    allocator = IntegerAllocator(strategy=strategy)

    logger.info(
        f"Distributing {len(clean_totals)} metrics across {count} creatives "
        f"(profile={profile.value}, scheme={generator.scheme.value}, "
        f"strategy={allocator.strategy.value})"
    )

    weights = generator.generate(count, profile)

    allocations = {}
    for metric, total in clean_totals.items():
        allocations[metric] = allocator.allocate(total, weights)
        logger.debug(f"{metric}: total={total}, max share={max(allocations[metric], default=0)}")

    rows = []
    for i in range(count):
        name = None
        if names is not None and i < len(names) and names[i]:
            name = str(names[i])
        rows.append(
            CreativeRow(
                index=i + 1,
                name=name or CREATIVE_NAME_TEMPLATE.format(index=i + 1),
                values={metric: alloc[i] for metric, alloc in allocations.items()},
            )
        )
    return rows


def column_totals(rows: Sequence[CreativeRow], metrics: Sequence[MetricSpec]) -> Dict[str, int]:
    """Sum each metric back over the rows."""
    return {m.key: sum(row.get(m.key) for row in rows) for m in metrics}
