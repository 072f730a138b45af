"""Pydantic models used for ingestion and snapshot validation.

These models define the projection of a dissertation record the aggregators
work on and the schema of every JSON artifact written for the explorer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


class DissertationSummary(BaseModel):
    """Read-only projection of a dissertation record.

    Attributes:
        year: Year the dissertation was completed, if known.
        school: Awarding institution, if known.
        subject_broad: Broad subject classification.
        department_broad: Broad department classification.
    """
    model_config = ConfigDict(extra="ignore")
    year: int | None = None
    school: str | None = None
    subject_broad: str | None = None
    department_broad: str | None = None

    @field_validator("school", "subject_broad", "department_broad", mode="before")
    @classmethod
    def _normalize_text(cls, v: Any) -> Any:
        """Trim, collapse internal whitespace and map blanks to ``None``."""
        if isinstance(v, str):
            v = " ".join(v.split())
            return v or None
        return v

    @field_validator("year", mode="before")
    @classmethod
    def _blank_year(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class YearBucket(BaseModel):
    """Record count for a single year."""
    model_config = ConfigDict(extra="forbid")
    year: int
    count: int = Field(..., ge=0)


class PeriodBucket(BaseModel):
    """Record count for a 5-year period or a decade."""
    model_config = ConfigDict(extra="forbid")
    period: str
    start: int
    count: int = Field(..., ge=0)


class Timeline(BaseModel):
    """Contents of `timeline.json`."""
    model_config = ConfigDict(extra="forbid")
    by_year: list[YearBucket]
    by_5year: list[PeriodBucket]
    by_decade: list[PeriodBucket]


class SchoolRecord(BaseModel):
    """Per-institution count and the span of years it awarded degrees."""
    model_config = ConfigDict(extra="forbid")
    name: str
    count: int = Field(..., ge=1)
    min_year: int | None
    max_year: int | None


class ParetoSummary(BaseModel):
    """Concentration figures stored alongside the school list."""
    model_config = ConfigDict(extra="forbid")
    top_10_count: int = Field(..., ge=0)
    top_10_percent: float
    top_25_percent_count: int = Field(..., ge=0)
    top_25_percent: float
    gini: float


class SchoolsSnapshot(BaseModel):
    """Contents of `schools.json`."""
    model_config = ConfigDict(extra="forbid")
    schools: list[SchoolRecord]
    pareto: ParetoSummary


class ParetoEntry(SchoolRecord):
    """School record ranked by count and annotated with its share of the total.

    Serialized with the camelCase keys the chart layer reads
    (``cumulativePercentage``, ``schoolPercentile``).
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    rank: int = Field(..., ge=1)
    percentage: float
    cumulative_percentage: float = Field(..., alias="cumulativePercentage")
    school_percentile: float = Field(..., alias="schoolPercentile")


class ShareGroup(BaseModel):
    model_config = ConfigDict(extra="forbid")
    count: int = Field(..., ge=0)
    percentage: float
    schools: int = Field(..., ge=0)


class TopNComparison(BaseModel):
    """Split of the record total between the top N schools and the rest."""
    model_config = ConfigDict(extra="forbid")
    label: str
    top_n: int
    total_schools: int
    top: ShareGroup
    rest: ShareGroup


class StatisticsSnapshot(BaseModel):
    """Contents of `statistics.json`."""
    model_config = ConfigDict(extra="forbid")
    total_dissertations: int = Field(..., ge=0)
    total_schools: int = Field(..., ge=0)
    year_range: tuple[int, int]
    mean_per_year: float
    median_per_year: float
    growth_rates: dict[str, float]
    hhi: float
    gini: float
    top_10_share: float
    top_25_share: float


class TimeseriesPoint(BaseModel):
    model_config = ConfigDict(extra="forbid")
    year: int
    count: int = Field(..., ge=1)


class SchoolTimeseries(RootModel[dict[str, list[TimeseriesPoint]]]):
    """Contents of `school_timeseries.json`: school name → sparse yearly counts."""


class SnapshotMeta(BaseModel):
    """Contents of `meta.json`."""
    model_config = ConfigDict(extra="forbid")
    generated_at: datetime
    record_count: int = Field(..., ge=0)
    year_range: tuple[int, int]
    school_count: int = Field(..., ge=0)


class RefreshResult(BaseModel):
    """Outcome of a snapshot refresh as reported to the caller."""
    model_config = ConfigDict(extra="forbid")
    success: bool
    meta: SnapshotMeta | None = None
    error: str | None = None
