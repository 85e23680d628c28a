"""Unit tests for the creative distribution runner."""

import pytest
import numpy as np
import dataclasses
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from distribution.runner import (
    CreativeRow,
    MetricSpec,
    build_metrics,
    build_totals,
    column_totals,
    run_distribution,
)


class TestRunDistribution:
    """Test distributing all metrics across creatives."""

    def setup_method(self):
        """Set up default totals."""
        self.totals = build_totals(
            impressions=100000, clicks=5000, installs=2000, primary_events=300
        )

    def test_rows_and_names(self, rng):
        """One row per creative, 1-based, with default names."""
        rows = run_distribution(4, self.totals, 'balanced', rng=rng)

        assert [r.index for r in rows] == [1, 2, 3, 4]
        assert [r.name for r in rows] == ['Creative 1', 'Creative 2', 'Creative 3', 'Creative 4']
        assert set(rows[0].values) == set(self.totals)

    @pytest.mark.parametrize('strategy', ['largest_remainder', 'running_remainder'])
    @pytest.mark.parametrize('profile', ['balanced', 'medium', 'high'])
    def test_every_metric_conserved(self, profile, strategy, rng):
        """Each metric column sums back to its total."""
        rows = run_distribution(10, self.totals, profile, rng=rng, strategy=strategy)
        metrics = build_metrics()

        assert column_totals(rows, metrics) == self.totals

    def test_metrics_share_one_weight_vector(self, fixed_draws):
        """All metrics are split with the same weights."""
        totals = {'impressions': 300, 'clicks': 30, 'installs': 3}
        rows = run_distribution(2, totals, 'moderate', rng=fixed_draws([0.0, 0.5]))

        assert rows[0].values == {'impressions': 100, 'clicks': 10, 'installs': 1}
        assert rows[1].values == {'impressions': 200, 'clicks': 20, 'installs': 2}

    def test_single_weight_draw(self, fixed_draws):
        """Only one batch of randomness is consumed per run."""
        draws = fixed_draws([0.2, 0.4, 0.6])
        run_distribution(3, self.totals, 'high', rng=draws)
        assert draws.calls == 1

    def test_custom_names(self, rng):
        """Provided names override defaults; gaps fall back."""
        rows = run_distribution(3, self.totals, 'balanced', rng=rng, names=['Hero', ''])

        assert [r.name for r in rows] == ['Hero', 'Creative 2', 'Creative 3']

    def test_zero_and_negative_count(self, rng):
        """No rows for zero or negative counts."""
        assert run_distribution(0, self.totals, 'balanced', rng=rng) == []
        assert run_distribution(-3, self.totals, 'balanced', rng=rng) == []

    def test_negative_totals_clamped(self, rng):
        """Negative totals are treated as zero."""
        rows = run_distribution(3, {'clicks': -50, 'installs': 9}, 'balanced', rng=rng)

        assert [r.get('clicks') for r in rows] == [0, 0, 0]
        assert sum(r.get('installs') for r in rows) == 9

    def test_seeded_runs_reproducible(self):
        """The same seed gives the same distribution."""
        a = run_distribution(5, self.totals, 'high', rng=np.random.default_rng(11))
        b = run_distribution(5, self.totals, 'high', rng=np.random.default_rng(11))
        assert a == b

    def test_rows_are_immutable(self, rng):
        rows = run_distribution(1, self.totals, 'balanced', rng=rng)
        with pytest.raises(dataclasses.FrozenInstanceError):
            rows[0].name = 'Other'


class TestMetricHelpers:
    """Test totals and metric spec builders."""

    def test_build_totals_without_secondary(self):
        totals = build_totals(10, 5, 2, 1)
        assert list(totals) == ['impressions', 'clicks', 'installs', 'primary_events']

    def test_build_totals_with_secondary(self):
        totals = build_totals(10, 5, 2, 1, secondary_events=0)
        assert totals['secondary_events'] == 0

    def test_build_metrics_default_labels(self):
        metrics = build_metrics()
        assert [m.label for m in metrics] == ['Impressions', 'Clicks', 'Installs', 'Paid Events']

    def test_build_metrics_custom_labels(self):
        metrics = build_metrics('Purchases', 'Trials')
        assert metrics[-2] == MetricSpec('primary_events', 'Purchases')
        assert metrics[-1] == MetricSpec('secondary_events', 'Trials')

    def test_blank_labels_fall_back(self):
        metrics = build_metrics('', '')
        assert [m.label for m in metrics][-2:] == ['Paid Events', 'Second Event']

    def test_missing_metric_reads_zero(self):
        row = CreativeRow(1, 'Creative 1', {'clicks': 4})
        assert row.get('installs') == 0
