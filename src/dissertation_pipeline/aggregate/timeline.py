"""Timeline aggregation: yearly counts with gaps filled, plus period roll-ups."""
from __future__ import annotations

import logging

import pandas as pd

from dissertation_pipeline.aggregate.frame import (
    DECADE,
    FIVE_YEARS,
    period_label,
    period_totals,
    year_counts,
    year_range,
)
from dissertation_pipeline.models import PeriodBucket, Timeline, YearBucket

log = logging.getLogger(__name__)


def period_buckets(counts: pd.Series, interval: int) -> list[PeriodBucket]:
    """Return `PeriodBucket`s for a per-year count series, ascending by start."""
    totals = period_totals(counts, interval)
    return [
        PeriodBucket(period=period_label(int(start), interval), start=int(start), count=int(n))
        for start, n in totals.items()
    ]


def fill_year_gaps(counts: pd.Series) -> pd.Series:
    """Reindex per-year counts over the full year range with 0 for missing years."""
    lo, hi = year_range(counts)
    return counts.reindex(range(lo, hi + 1), fill_value=0).astype("int64")


def build_timeline(df: pd.DataFrame) -> Timeline:
    """Build the timeline artifact from a summaries frame.

    Args:
        df: Frame produced by `summaries_to_frame`.

    Returns:
        `Timeline` with one bucket per year between the first and last
        observed year (or the default range when no record has a year),
        and the same counts rolled up into 5-year periods and decades.
    """
    filled = fill_year_gaps(year_counts(df))

    timeline = Timeline(
        by_year=[YearBucket(year=int(y), count=int(n)) for y, n in filled.items()],
        by_5year=period_buckets(filled, FIVE_YEARS),
        by_decade=period_buckets(filled, DECADE),
    )
    log.info(
        "Timeline covers %d years (%d-%d)",
        len(timeline.by_year),
        timeline.by_year[0].year,
        timeline.by_year[-1].year,
    )
    return timeline
