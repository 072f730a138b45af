"""Per-school yearly counts for the racing bar, map and comparison charts."""
from __future__ import annotations

import logging
from typing import Sequence

import pandas as pd

from dissertation_pipeline.aggregate.frame import year_counts
from dissertation_pipeline.models import SchoolTimeseries, TimeseriesPoint

log = logging.getLogger(__name__)

MAX_COMPARED_SCHOOLS = 5


def build_school_timeseries(df: pd.DataFrame, school_names: Sequence[str]) -> SchoolTimeseries:
    """Return sparse per-year counts for each selected school.

    Args:
        df: Frame produced by `summaries_to_frame`.
        school_names: Ordered selection of schools.

    Returns:
        `SchoolTimeseries` keyed by school in selection order. Each series is
        ascending by year and omits years with no records; a selected school
        with no dated records maps to an empty list. Unselected schools are
        absent.
    """
    selected = df[df["school"].isin(list(school_names))]
    by_school = dict(tuple(selected.groupby("school", sort=False)))

    series: dict[str, list[TimeseriesPoint]] = {}
    for name in school_names:
        group = by_school.get(name)
        if group is None:
            series[name] = []
            continue
        series[name] = [
            TimeseriesPoint(year=int(y), count=int(n)) for y, n in year_counts(group).items()
        ]

    log.info("Built time series for %d schools", len(series))
    return SchoolTimeseries(series)


def compare_schools(df: pd.DataFrame, school_names: Sequence[str]) -> SchoolTimeseries:
    """Time series for an ad-hoc comparison of up to five schools.

    Blank names are ignored and names beyond the fifth are dropped.

    Raises:
        ValueError: if no non-blank school name is given.
    """
    names = [n.strip() for n in school_names if n and n.strip()]
    if not names:
        raise ValueError("at least one school name is required")
    if len(names) > MAX_COMPARED_SCHOOLS:
        log.warning(
            "Comparing only the first %d of %d schools", MAX_COMPARED_SCHOOLS, len(names)
        )
    return build_school_timeseries(df, names[:MAX_COMPARED_SCHOOLS])
