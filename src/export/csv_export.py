"""CSV export and tabular rendering of distributed creatives."""

import logging
from pathlib import Path
from typing import Any, Callable, List, Sequence, Tuple, Union

import pandas as pd

from config import ARTIFACTS_DIR, CREATIVE_HEADER, DEFAULT_EXPORT_FILENAME
from distribution.runner import CreativeRow, MetricSpec
from utils.exceptions import ExportError

logger = logging.getLogger(__name__)

Column = Tuple[str, Callable[[CreativeRow], Any]]


def _metric_accessor(key: str) -> Callable[[CreativeRow], int]:
    return lambda row: row.get(key)


def build_columns(metrics: Sequence[MetricSpec]) -> List[Column]:
    """Creative name column followed by one column per metric."""
    columns: List[Column] = [(CREATIVE_HEADER, lambda row: row.name)]
    for metric in metrics:
        columns.append((metric.label, _metric_accessor(metric.key)))
    return columns


def rows_to_frame(rows: Sequence[CreativeRow], columns: Sequence[Column]) -> pd.DataFrame:
    """Build a DataFrame with one row per creative.

    Headers may repeat (e.g. a custom label equal to a built-in one), so
    the frame is built positionally.
    """
    headers = [header for header, _ in columns]
    data = [[accessor(row) for _, accessor in columns] for row in rows]
    return pd.DataFrame(data, columns=headers)


def to_delimited_text(rows: Sequence[CreativeRow], columns: Sequence[Column]) -> str:
    """Serialize rows to comma-separated text.

    Fields containing a comma, double quote or newline are wrapped in
    double quotes with inner quotes doubled.

    Args:
        rows: Distributed creatives
        columns: Ordered (header, accessor) pairs

    Returns:
        CSV text, header line first
    """
    frame = rows_to_frame(rows, columns)
    return frame.to_csv(index=False, lineterminator="\n")


def save_csv(
    rows: Sequence[CreativeRow],
    columns: Sequence[Column],
    path: Union[str, Path, None] = None,
) -> Path:
    """Write the CSV export to disk.

    Args:
        rows: Distributed creatives
        columns: Ordered (header, accessor) pairs
        path: Output file; defaults to artifacts/creative_distribution.csv

    Returns:
        Path written
    """
    if not rows:
        raise ExportError("Nothing to export: no creatives were distributed")

    out = Path(path) if path is not None else Path(ARTIFACTS_DIR) / DEFAULT_EXPORT_FILENAME
    out.parent.mkdir(parents=True, exist_ok=True)

    text = to_delimited_text(rows, columns)
    try:
        out.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write {out}: {e}")

    logger.info(f"Exported {len(rows)} creatives to {out}")
    return out
