"""School aggregation and concentration measures.

Schools are ranked by record count, descending. Schools with equal counts keep
the order in which they first appear in the input (insertion-order stable);
no other tie-break is applied.

Concentration measures:
- Gini coefficient over the per-school counts.
- HHI, the sum of squared shares.
- Top-10 and top-quartile shares of the record total.
"""
from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
import pandas as pd

from dissertation_pipeline.aggregate.frame import share
from dissertation_pipeline.models import (
    ParetoEntry,
    ParetoSummary,
    SchoolRecord,
    SchoolsSnapshot,
    ShareGroup,
    TopNComparison,
)

log = logging.getLogger(__name__)

TOP_SCHOOLS = 10
TOP_FRACTION = 0.25


def _optional_year(value: object) -> int | None:
    return None if pd.isna(value) else int(value)  # type: ignore[arg-type]


def rank_schools(df: pd.DataFrame) -> list[SchoolRecord]:
    """Group a summaries frame by school and rank by count, descending.

    Records with no school are skipped. `min_year`/`max_year` are ``None``
    for a school none of whose records carries a year.
    """
    named = df[df["school"].notna()]
    if named.empty:
        return []

    # sort=False keeps first-seen order, which the stable sort below preserves for ties
    grouped = named.groupby("school", sort=False)
    table = pd.DataFrame(
        {
            "count": grouped.size(),
            "min_year": grouped["year"].min(),
            "max_year": grouped["year"].max(),
        }
    ).sort_values("count", ascending=False, kind="stable")

    return [
        SchoolRecord(
            name=str(name),
            count=int(row["count"]),
            min_year=_optional_year(row["min_year"]),
            max_year=_optional_year(row["max_year"]),
        )
        for name, row in table.iterrows()
    ]


def gini_coefficient(counts: Sequence[float]) -> float:
    """Return the Gini coefficient of a non-negative count distribution.

    Uses ``G = 2·Σ(i·c_i) / (n·total) − (n + 1) / n`` over the counts sorted
    ascending with 1-based ``i``. Returns 0.0 for an empty or all-zero input.
    """
    values = np.sort(np.asarray(counts, dtype=float))
    n = values.size
    if n == 0:
        return 0.0
    total = values.sum()
    if total == 0:
        return 0.0

    ranks = np.arange(1, n + 1)
    g = 2.0 * float(np.sum(ranks * values)) / (n * total) - (n + 1) / n
    # equal counts can land a hair below zero
    return max(0.0, g)


def hhi(counts: Sequence[float]) -> float:
    """Return the Herfindahl-Hirschman index (sum of squared shares)."""
    total = float(sum(counts))
    if total == 0:
        return 0.0
    return float(sum((c / total) ** 2 for c in counts))


def top_quartile_size(n_schools: int) -> int:
    """Number of schools in the top quarter, rounded up."""
    return math.ceil(n_schools * TOP_FRACTION)


def top_count(schools: Sequence[SchoolRecord], n: int) -> int:
    """Sum the counts of the first `n` schools of a ranked list."""
    return sum(s.count for s in schools[:n])


def pareto_summary(schools: Sequence[SchoolRecord]) -> ParetoSummary:
    """Compute top-10 / top-quartile shares and the Gini of a ranked school list."""
    total = sum(s.count for s in schools)
    top_10 = top_count(schools, TOP_SCHOOLS)
    top_25 = top_count(schools, top_quartile_size(len(schools)))

    return ParetoSummary(
        top_10_count=top_10,
        top_10_percent=share(top_10, total),
        top_25_percent_count=top_25,
        top_25_percent=share(top_25, total),
        gini=gini_coefficient([s.count for s in schools]),
    )


def build_schools(df: pd.DataFrame) -> SchoolsSnapshot:
    """Build the schools artifact from a summaries frame.

    Args:
        df: Frame produced by `summaries_to_frame`.

    Returns:
        `SchoolsSnapshot` with the ranked school list and its Pareto summary.
    """
    schools = rank_schools(df)
    snapshot = SchoolsSnapshot(schools=schools, pareto=pareto_summary(schools))
    log.info("Aggregated %d schools (gini=%.4f)", len(schools), snapshot.pareto.gini)
    return snapshot


def top_school_names(schools: Sequence[SchoolRecord], n: int) -> list[str]:
    """Names of the first `n` schools of a ranked list."""
    return [s.name for s in schools[:n]]


def pareto_entries(schools: Sequence[SchoolRecord]) -> list[ParetoEntry]:
    """Rank schools by count and annotate each with its share of the total.

    The running `cumulative_percentage` is non-decreasing and reaches 1.0 at
    the last entry (within floating-point tolerance).
    """
    ranked = sorted(schools, key=lambda s: s.count, reverse=True)
    total = sum(s.count for s in ranked)
    n = len(ranked)

    entries: list[ParetoEntry] = []
    cumulative = 0
    for i, school in enumerate(ranked, start=1):
        cumulative += school.count
        entries.append(
            ParetoEntry(
                **school.model_dump(),
                rank=i,
                percentage=share(school.count, total),
                cumulative_percentage=share(cumulative, total),
                school_percentile=i / n,
            )
        )
    return entries


def top_n_comparison(schools: Sequence[SchoolRecord], top_n: int) -> TopNComparison:
    """Split the record total between the top `top_n` schools and the rest.

    `top_n` is capped at the number of schools.

    Raises:
        ValueError: if `top_n` is less than 1.
    """
    if top_n < 1:
        raise ValueError("top_n must be at least 1")

    ranked = sorted(schools, key=lambda s: s.count, reverse=True)
    total = sum(s.count for s in ranked)
    n = min(top_n, len(ranked))

    top = top_count(ranked, n)
    rest = total - top
    return TopNComparison(
        label=f"Top {n}",
        top_n=n,
        total_schools=len(ranked),
        top=ShareGroup(count=top, percentage=share(top, total), schools=n),
        rest=ShareGroup(count=rest, percentage=share(rest, total), schools=len(ranked) - n),
    )
