from __future__ import annotations

import pandas as pd
import pytest

from dissertation_pipeline.aggregate.schools import (
    build_schools,
    gini_coefficient,
    hhi,
    pareto_entries,
    top_n_comparison,
    top_quartile_size,
)
from dissertation_pipeline.models import SchoolRecord
from conftest import make_frame


def _schools(*counts: int) -> list[SchoolRecord]:
    return [
        SchoolRecord(name=f"S{i}", count=c, min_year=None, max_year=None)
        for i, c in enumerate(counts)
    ]


def test_scenario_a_school_ranking(scenario_a: pd.DataFrame) -> None:
    out = build_schools(scenario_a)
    assert [s.model_dump() for s in out.schools] == [
        {"name": "X", "count": 2, "min_year": 1950, "max_year": 1952},
        {"name": "Y", "count": 1, "min_year": 1952, "max_year": 1952},
    ]


def test_ties_keep_first_seen_order() -> None:
    df = make_frame(
        {"school": "B"},
        {"school": "A"},
        {"school": "C"},
        {"school": "C"},
        {"school": "A"},
        {"school": "B"},
        {"school": "D"},
    )
    names = [s.name for s in build_schools(df).schools]
    assert names == ["B", "A", "C", "D"]


def test_schools_skip_missing_names_and_keep_null_year_span() -> None:
    df = make_frame(
        {"year": 1960, "school": None},
        {"year": 1961, "school": "   "},
        {"year": None, "school": "Undated"},
    )
    out = build_schools(df)
    assert [s.model_dump() for s in out.schools] == [
        {"name": "Undated", "count": 1, "min_year": None, "max_year": None}
    ]


def test_pareto_summary_shares() -> None:
    df = make_frame(*([{"school": "Big"}] * 6 + [{"school": f"Small{i}"} for i in range(12)]))
    p = build_schools(df).pareto
    # top 10 = Big (6) + 9 smalls; top quartile = ceil(13 * 0.25) = 4 schools
    assert p.top_10_count == 15
    assert p.top_10_percent == pytest.approx(15 / 18)
    assert p.top_25_percent_count == 9
    assert p.top_25_percent == pytest.approx(9 / 18)


def test_pareto_summary_on_empty_input() -> None:
    p = build_schools(make_frame()).pareto
    assert p.top_10_count == 0
    assert p.top_10_percent == 0.0
    assert p.top_25_percent == 0.0
    assert p.gini == 0.0


def test_top_quartile_rounds_up() -> None:
    assert top_quartile_size(0) == 0
    assert top_quartile_size(1) == 1
    assert top_quartile_size(4) == 1
    assert top_quartile_size(5) == 2


@pytest.mark.parametrize(
    "counts",
    [[1], [3, 3, 3], [1, 2, 3, 4, 100], [0, 0, 7], [5, 1], list(range(1, 50))],
)
def test_gini_bounds(counts: list[int]) -> None:
    assert 0.0 <= gini_coefficient(counts) <= 1.0


def test_gini_edge_values() -> None:
    assert gini_coefficient([]) == 0.0
    assert gini_coefficient([0, 0, 0]) == 0.0
    assert gini_coefficient([4, 4, 4, 4]) == pytest.approx(0.0)
    assert gini_coefficient([100]) == 0.0
    # one school of two holds everything: (n-1)/n
    assert gini_coefficient([0, 10]) == pytest.approx(0.5)


def test_hhi_bounds() -> None:
    assert hhi([100]) == 1.0
    assert hhi([5, 5, 5, 5]) == pytest.approx(0.25)
    counts = [7, 2, 1]
    assert 1 / len(counts) <= hhi(counts) <= 1.0
    assert hhi([]) == 0.0


def test_pareto_entries_are_monotonic() -> None:
    entries = pareto_entries(_schools(1, 5, 3, 1))
    assert [e.rank for e in entries] == [1, 2, 3, 4]
    assert [e.count for e in entries] == [5, 3, 1, 1]
    cumulative = [e.cumulative_percentage for e in entries]
    assert cumulative == sorted(cumulative)
    assert cumulative[-1] == pytest.approx(1.0)
    assert entries[0].percentage == pytest.approx(0.5)
    assert entries[-1].school_percentile == 1.0


def test_pareto_entries_empty() -> None:
    assert pareto_entries([]) == []


def test_top_n_comparison_caps_at_school_count() -> None:
    c = top_n_comparison(_schools(6, 3, 1), 10)
    assert c.label == "Top 3"
    assert c.top.count == 10
    assert c.top.percentage == 1.0
    assert c.rest.schools == 0
    assert c.rest.percentage == 0.0


def test_top_n_comparison_split() -> None:
    c = top_n_comparison(_schools(1, 6, 3), 1)
    assert c.top.count == 6
    assert c.rest.count == 4
    assert c.rest.schools == 2
    assert c.top.percentage == pytest.approx(0.6)


def test_top_n_comparison_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        top_n_comparison(_schools(1), 0)
