# src/distribution/__init__.py

from .weights import VarianceProfile, WeightScheme, WeightGenerator, generate_weights, parse_profile, parse_scheme
from .allocator import AllocationStrategy, IntegerAllocator, allocate, parse_strategy
from .runner import CreativeRow, MetricSpec, build_metrics, build_totals, column_totals, run_distribution

__all__ = [
    "VarianceProfile",
    "WeightScheme",
    "WeightGenerator",
    "generate_weights",
    "parse_profile",
    "parse_scheme",
    "AllocationStrategy",
    "IntegerAllocator",
    "allocate",
    "parse_strategy",
    "CreativeRow",
    "MetricSpec",
    "build_metrics",
    "build_totals",
    "column_totals",
    "run_distribution",
]
