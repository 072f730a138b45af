"""Assemble every explorer artifact from one set of dissertation summaries."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from dissertation_pipeline.aggregate.frame import summaries_to_frame
from dissertation_pipeline.aggregate.schools import build_schools, top_school_names
from dissertation_pipeline.aggregate.statistics import build_statistics
from dissertation_pipeline.aggregate.timeline import build_timeline
from dissertation_pipeline.aggregate.timeseries import build_school_timeseries
from dissertation_pipeline.config import DEFAULT_TIMESERIES_TOP_N
from dissertation_pipeline.models import (
    DissertationSummary,
    SchoolsSnapshot,
    SchoolTimeseries,
    SnapshotMeta,
    StatisticsSnapshot,
    Timeline,
)

log = logging.getLogger(__name__)

TIMELINE_FILE = "timeline.json"
SCHOOLS_FILE = "schools.json"
STATISTICS_FILE = "statistics.json"
TIMESERIES_FILE = "school_timeseries.json"
META_FILE = "meta.json"


@dataclass(frozen=True)
class SnapshotBundle:
    """The five artifacts produced by one pipeline run."""
    timeline: Timeline
    schools: SchoolsSnapshot
    statistics: StatisticsSnapshot
    school_timeseries: SchoolTimeseries
    meta: SnapshotMeta

    def artifacts(self) -> dict[str, Any]:
        """Return JSON-ready payloads keyed by file name, `meta.json` last."""
        return {
            TIMELINE_FILE: self.timeline.model_dump(mode="json"),
            SCHOOLS_FILE: self.schools.model_dump(mode="json"),
            STATISTICS_FILE: self.statistics.model_dump(mode="json"),
            TIMESERIES_FILE: self.school_timeseries.model_dump(mode="json"),
            META_FILE: self.meta.model_dump(mode="json"),
        }


def build_snapshot(
    summaries: Iterable[DissertationSummary],
    top_n: int = DEFAULT_TIMESERIES_TOP_N,
    generated_at: datetime | None = None,
) -> SnapshotBundle:
    """Run every aggregator over `summaries` and build the meta descriptor.

    Args:
        summaries: Validated, non-deleted dissertation summaries.
        top_n: Number of top schools that get a time series.
        generated_at: Timestamp recorded in the meta; defaults to now (UTC).

    Returns:
        `SnapshotBundle` holding the timeline, schools, statistics,
        school time series and meta artifacts.
    """
    df = summaries_to_frame(summaries)
    log.info("Building snapshot from %d records", len(df))

    timeline = build_timeline(df)
    schools = build_schools(df)
    statistics = build_statistics(df, schools)
    school_timeseries = build_school_timeseries(df, top_school_names(schools.schools, top_n))

    meta = SnapshotMeta(
        generated_at=generated_at or datetime.now(timezone.utc),
        record_count=len(df),
        year_range=statistics.year_range,
        school_count=len(schools.schools),
    )
    return SnapshotBundle(
        timeline=timeline,
        schools=schools,
        statistics=statistics,
        school_timeseries=school_timeseries,
        meta=meta,
    )
