"""Main CLI interface for the creative distribution helper."""

import click
import logging
from typing import Dict, List, Optional
import sys

import numpy as np
import pandas as pd

from distribution.allocator import AllocationStrategy, parse_strategy
from distribution.runner import CreativeRow, MetricSpec, build_metrics, build_totals, column_totals, run_distribution
from distribution.weights import VarianceProfile, WeightScheme, parse_profile, parse_scheme
from export.csv_export import build_columns, rows_to_frame, save_csv
from utils.validators import InputValidator
from utils.exceptions import CreativeSplitError, InvalidInputError
from config import (
    ARTIFACTS_DIR,
    DEFAULT_EXPORT_FILENAME,
    DEFAULT_PRIMARY_LABEL,
    DEFAULT_PROFILE,
    DEFAULT_SCHEME,
    DEFAULT_SECONDARY_LABEL,
    DEFAULT_STRATEGY,
    LOG_FORMAT,
)

logger = logging.getLogger(__name__)

PROFILE_CHOICES = {
    "1": VarianceProfile.BALANCED,
    "2": VarianceProfile.MODERATE,
    "3": VarianceProfile.HIGH,
}

PROFILE_DESCRIPTIONS = {
    VarianceProfile.BALANCED: "Balanced",
    VarianceProfile.MODERATE: "Medium variance",
    VarianceProfile.HIGH: "Very skewed",
}


class CreativeSplitCLI:
    """Thin adapter: validates input, calls the distribution core, renders rows."""

    def __init__(
        self,
        seed: Optional[int] = None,
        scheme: WeightScheme = WeightScheme.SPREAD,
        strategy: AllocationStrategy = AllocationStrategy.LARGEST_REMAINDER,
        interactive: bool = True,
    ):
        self.rng = np.random.default_rng(seed)
        self.scheme = scheme
        self.strategy = strategy
        self.interactive = interactive
        self.validator = InputValidator()

    def run(
        self,
        creatives: Optional[str] = None,
        totals: Optional[Dict[str, Optional[str]]] = None,
        primary_label: Optional[str] = None,
        secondary_label: Optional[str] = None,
        variance: Optional[str] = None,
        output: Optional[str] = None,
    ):
        """Run one distribution session."""
        if self.interactive:
            click.secho("Creative Report Distribution Helper", bold=True, fg='green')
            click.echo("=" * 50)

        totals = dict(totals or {})

        try:
            count = self._resolve_creative_count(creatives)
            primary_label = self._resolve_label(primary_label, "Primary event label", DEFAULT_PRIMARY_LABEL)

            secondary_enabled = secondary_label is not None or totals.get("secondary_events") is not None
            if not secondary_enabled and self.interactive:
                secondary_enabled = click.confirm("\nEnable second event type?", default=False)
            if secondary_enabled:
                secondary_label = self._resolve_label(
                    secondary_label, "Second event label", DEFAULT_SECONDARY_LABEL
                )

            metric_totals = build_totals(
                impressions=self._resolve_total(totals.get("impressions"), "Total impressions"),
                clicks=self._resolve_total(totals.get("clicks"), "Total clicks"),
                installs=self._resolve_total(totals.get("installs"), "Total installs"),
                primary_events=self._resolve_total(totals.get("primary_events"), f"Total {primary_label}"),
                secondary_events=(
                    self._resolve_total(totals.get("secondary_events"), f"Total {secondary_label}")
                    if secondary_enabled else None
                ),
            )
            profile = self._resolve_profile(variance)
            metrics = build_metrics(primary_label, secondary_label if secondary_enabled else None)

            rows = self._generate(count, metric_totals, profile)
            self._display_results(rows, metrics, profile)

            while self.interactive and click.confirm("\nRegenerate with a fresh random draw?", default=False):
                rows = self._generate(count, metric_totals, profile)
                self._display_results(rows, metrics, profile)

            self._export(rows, metrics, output)

        except InvalidInputError as e:
            click.secho(str(e), fg='red')
            sys.exit(1)
        except CreativeSplitError as e:
            click.secho(f"\nError: {str(e)}", fg='red')
            logger.exception("Distribution failed")
            sys.exit(1)
        except KeyboardInterrupt:
            click.echo("\n\nExiting...")
            sys.exit(0)

    def _resolve_creative_count(self, value: Optional[str]) -> int:
        """Use the given count or prompt until a valid one is entered."""
        if not self.interactive:
            return self.validator.parse_creative_count(value if value is not None else "")
        if value is not None:
            if self.validator.validate_creative_count(value):
                return int(value.strip())
            click.secho(f"Invalid number of creatives: {value!r}. Please enter a whole number greater than 0", fg='red')

        while True:
            count_str = click.prompt("\nNumber of creatives (e.g. 10)", type=str)
            if self.validator.validate_creative_count(count_str):
                return int(count_str.strip())
            click.secho("Invalid number of creatives. Please enter a whole number greater than 0", fg='red')

    def _resolve_total(self, value: Optional[str], label: str) -> int:
        if not self.interactive:
            return self.validator.parse_total(value, label.lower())
        if value is not None:
            if self.validator.validate_total(value):
                return self.validator.parse_total(value, label.lower())
            click.secho(f"Invalid value for {label.lower()}: {value!r}. Please enter a whole number of 0 or more", fg='red')

        while True:
            total_str = click.prompt(f"{label}", type=str, default="0")
            if self.validator.validate_total(total_str):
                return self.validator.parse_total(total_str, label.lower())
            click.secho(f"Invalid value for {label.lower()}. Please enter a whole number of 0 or more", fg='red')

    def _resolve_label(self, value: Optional[str], prompt: str, default: str) -> str:
        if value is not None:
            if not self.validator.validate_label(value):
                raise InvalidInputError(f"{prompt} must not be blank")
            return value
        if not self.interactive:
            return default
        return click.prompt(prompt, type=str, default=default)

    def _resolve_profile(self, value: Optional[str]) -> VarianceProfile:
        if value is not None or not self.interactive:
            return parse_profile(value if value is not None else DEFAULT_PROFILE)

        click.echo("\nDistribution style (how different creatives are from each other):")
        for key, profile in PROFILE_CHOICES.items():
            click.echo(f"  {key}. {PROFILE_DESCRIPTIONS[profile]}")
        pick = click.prompt("Select a style by its number", type=click.Choice(list(PROFILE_CHOICES)), default="1")
        return PROFILE_CHOICES[pick]

    def _generate(self, count: int, totals: Dict[str, int], profile: VarianceProfile) -> List[CreativeRow]:
        return run_distribution(
            count,
            totals,
            profile,
            rng=self.rng,
            scheme=self.scheme,
            strategy=self.strategy,
        )

    def _display_results(self, rows: List[CreativeRow], metrics: List[MetricSpec], profile: VarianceProfile):
        """Display distribution results."""
        click.echo("\n" + "=" * 80)
        click.secho(
            f"Distributed per creative - {PROFILE_DESCRIPTIONS[profile]} ({len(rows)} creatives)",
            bold=True, fg='cyan'
        )
        click.echo("=" * 80)

        if not rows:
            click.echo("Set number of creatives & totals to see the distribution.")
            return

        frame = rows_to_frame(rows, build_columns(metrics))
        with pd.option_context('display.max_rows', None, 'display.max_columns', None, 'display.width', None):
            click.echo(frame.to_string(index=False))

        sums = column_totals(rows, metrics)
        click.echo("-" * 80)
        click.echo("Totals: " + ", ".join(f"{m.label}={sums[m.key]}" for m in metrics))

    def _export(self, rows: List[CreativeRow], metrics: List[MetricSpec], output: Optional[str]):
        if output is None:
            if not self.interactive or not rows:
                return
            if not click.confirm(f"\nSave CSV to {ARTIFACTS_DIR}/?", default=False):
                return
            output = f"{ARTIFACTS_DIR}/{DEFAULT_EXPORT_FILENAME}"

        path = save_csv(rows, build_columns(metrics), output)
        click.secho(f"Saved: {path}", fg='green')


def _choice_callback(parser):
    def callback(ctx, param, value):
        if value is None:
            return None
        try:
            return parser(value)
        except InvalidInputError as e:
            raise click.BadParameter(str(e))
    return callback


@click.command()
@click.option('--creatives', '-n', type=str, default=None, help='Number of creatives.')
@click.option('--impressions', type=str, default=None, help='Total impressions.')
@click.option('--clicks', type=str, default=None, help='Total clicks.')
@click.option('--installs', type=str, default=None, help='Total installs.')
@click.option('--primary-events', type=str, default=None, help='Total primary events.')
@click.option('--primary-label', type=str, default=None, help=f'Primary event label (default "{DEFAULT_PRIMARY_LABEL}").')
@click.option('--secondary-events', type=str, default=None, help='Total secondary events (enables the column).')
@click.option('--secondary-label', type=str, default=None, help='Secondary event label (enables the column).')
@click.option('--variance', '-v', type=str, default=None, help='balanced | moderate (medium) | high (skewed).')
@click.option('--scheme', default=DEFAULT_SCHEME, callback=_choice_callback(parse_scheme),
              help='Weight scheme: spread | multiplicative.')
@click.option('--strategy', default=DEFAULT_STRATEGY, callback=_choice_callback(parse_strategy),
              help='Rounding strategy: largest_remainder | running_remainder.')
@click.option('--seed', type=int, default=None, help='Random seed for a reproducible draw.')
@click.option('--output', '-o', type=click.Path(dir_okay=False), default=None, help='Write CSV to this path.')
@click.option('--interactive/--no-interactive', default=True, help='Prompt for missing values.')
@click.option('--verbose', is_flag=True, help='Enable debug logging.')
def main(creatives, impressions, clicks, installs, primary_events, primary_label,
         secondary_events, secondary_label, variance, scheme, strategy, seed, output,
         interactive, verbose):
    """Distribute report totals across creatives."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT
    )

    cli = CreativeSplitCLI(seed=seed, scheme=scheme, strategy=strategy, interactive=interactive)
    cli.run(
        creatives=creatives,
        totals={
            "impressions": impressions,
            "clicks": clicks,
            "installs": installs,
            "primary_events": primary_events,
            "secondary_events": secondary_events,
        },
        primary_label=primary_label,
        secondary_label=secondary_label,
        variance=variance,
        output=output,
    )


if __name__ == "__main__":
    main()
