"""Summary statistics derived from the summaries frame and the school ranking."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from dissertation_pipeline.aggregate.frame import DECADE, share, year_counts, year_range
from dissertation_pipeline.aggregate.schools import TOP_SCHOOLS, hhi, top_count, top_quartile_size
from dissertation_pipeline.aggregate.timeline import period_buckets
from dissertation_pipeline.models import PeriodBucket, SchoolsSnapshot, StatisticsSnapshot

log = logging.getLogger(__name__)


def mean_and_median(values: Sequence[float]) -> tuple[float, float]:
    """Return (mean, median) of `values`, or (0.0, 0.0) when empty."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0, 0.0
    return float(arr.mean()), float(np.median(arr))


def decade_growth_rates(decades: Sequence[PeriodBucket]) -> dict[str, float]:
    """Relative change between consecutive decade buckets.

    Keys are ``"{prev}s_to_{curr}s"``. A pair whose previous decade has a
    zero count produces no entry.
    """
    rates: dict[str, float] = {}
    for prev, curr in zip(decades, decades[1:]):
        if prev.count > 0:
            rates[f"{prev.start}s_to_{curr.start}s"] = (curr.count - prev.count) / prev.count
    return rates


def build_statistics(df: pd.DataFrame, schools: SchoolsSnapshot) -> StatisticsSnapshot:
    """Build the statistics artifact.

    Mean and median are taken over the annual totals of the years that have
    at least one record, not over individual records. Growth rates use the
    raw (not gap-filled) yearly counts rolled up by decade.

    Args:
        df: Frame produced by `summaries_to_frame`.
        schools: Output of `build_schools` for the same frame.
    """
    counts = year_counts(df)
    mean, median = mean_and_median(counts.to_numpy())

    ranked = schools.schools
    school_counts = [s.count for s in ranked]
    total = sum(school_counts)

    stats = StatisticsSnapshot(
        total_dissertations=len(df),
        total_schools=len(ranked),
        year_range=year_range(counts),
        mean_per_year=mean,
        median_per_year=median,
        growth_rates=decade_growth_rates(period_buckets(counts, DECADE)),
        hhi=hhi(school_counts),
        gini=schools.pareto.gini,
        top_10_share=share(top_count(ranked, TOP_SCHOOLS), total),
        top_25_share=share(top_count(ranked, top_quartile_size(len(ranked))), total),
    )
    log.info(
        "Statistics: %d dissertations, %d schools, hhi=%.4f",
        stats.total_dissertations,
        stats.total_schools,
        stats.hhi,
    )
    return stats
