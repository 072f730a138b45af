"""Shared building blocks for the aggregators.

`summaries_to_frame` is the single conversion from validated summaries to a
pandas DataFrame; `year_counts` and `period_totals` are the year and period
bucketing shared by the timeline and statistics stages.
"""
from __future__ import annotations

from typing import Iterable

import pandas as pd

from dissertation_pipeline.models import DissertationSummary

SUMMARY_COLUMNS = ["year", "school", "subject_broad", "department_broad"]

# Used when no record carries a year.
DEFAULT_YEAR_RANGE: tuple[int, int] = (1878, 2025)

FIVE_YEARS = 5
DECADE = 10


def summaries_to_frame(summaries: Iterable[DissertationSummary]) -> pd.DataFrame:
    """Return a DataFrame with one row per summary, in input order.

    `year` is a nullable integer column (``Int64``); text columns keep ``None``
    for missing values.
    """
    rows = [s.model_dump() for s in summaries]
    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    df["year"] = pd.to_numeric(df["year"], errors="coerce").astype("Int64")
    return df


def year_counts(df: pd.DataFrame) -> pd.Series:
    """Return observed per-year record counts, ascending by year.

    Records without a year are ignored. Years with no records are absent.
    """
    years = df["year"].dropna()
    if years.empty:
        return pd.Series(dtype="int64")
    return years.astype("int64").value_counts().sort_index()


def year_range(counts: pd.Series) -> tuple[int, int]:
    """Return the (min, max) observed year, or `DEFAULT_YEAR_RANGE` if none."""
    if counts.empty:
        return DEFAULT_YEAR_RANGE
    return int(counts.index.min()), int(counts.index.max())


def period_label(start: int, interval: int) -> str:
    if interval == DECADE:
        return f"{start}s"
    return f"{start}-{start + interval - 1}"


def period_totals(counts: pd.Series, interval: int) -> pd.Series:
    """Sum per-year counts into periods starting at multiples of `interval`.

    Args:
        counts: Series of counts indexed by integer year.
        interval: Period length in years.

    Returns:
        Series of summed counts indexed by period start, ascending.
    """
    if counts.empty:
        return pd.Series(dtype="int64")
    starts = (counts.index.to_numpy(dtype="int64") // interval) * interval
    return counts.groupby(starts).sum().sort_index()


def share(part: float, total: float) -> float:
    """Return `part / total`, or 0.0 when the total is zero."""
    if not total:
        return 0.0
    return float(part) / float(total)
