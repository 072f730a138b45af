from __future__ import annotations

from pathlib import Path

import pytest

from dissertation_pipeline.config import get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("MONGO_DB", "MONGO_COLLECTION", "EXPLORER_DATA_DIR", "FETCH_PAGE_SIZE", "TIMESERIES_TOP_N"):
        monkeypatch.delenv(var, raising=False)
    s = get_settings()
    assert s.mongo_db == "dissertations"
    assert s.mongo_collection == "dissertations"
    assert s.explorer_data_dir == Path("explorer/data")
    assert s.page_size == 1000
    assert s.timeseries_top_n == 50


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPLORER_DATA_DIR", "/srv/explorer")
    monkeypatch.setenv("FETCH_PAGE_SIZE", "250")
    s = get_settings()
    assert s.explorer_data_dir == Path("/srv/explorer")
    assert s.page_size == 250


@pytest.mark.parametrize("value", ["0", "-5", "many"])
def test_settings_reject_bad_page_size(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("FETCH_PAGE_SIZE", value)
    with pytest.raises(RuntimeError):
        get_settings()
