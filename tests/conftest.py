from __future__ import annotations

from typing import Any

import pandas as pd
import pytest
from pymongo.errors import PyMongoError

from dissertation_pipeline.aggregate.frame import summaries_to_frame
from dissertation_pipeline.models import DissertationSummary


def make_frame(*records: dict[str, Any]) -> pd.DataFrame:
    return summaries_to_frame(DissertationSummary.model_validate(r) for r in records)


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self._skip = 0
        self._limit = 0

    def sort(self, key: str, direction: int) -> "FakeCursor":
        self._docs = sorted(self._docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    def skip(self, n: int) -> "FakeCursor":
        self._skip = n
        return self

    def limit(self, n: int) -> "FakeCursor":
        self._limit = n
        return self

    def __iter__(self):
        docs = self._docs[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return iter(docs)


class FakeCollection:
    """Just enough of a pymongo Collection for paged `find` calls."""

    def __init__(self, docs: list[dict[str, Any]], fail_on_call: int | None = None) -> None:
        self.docs = [{"_id": i, **d} for i, d in enumerate(docs)]
        self.calls = 0
        self.fail_on_call = fail_on_call

    def _matches(self, doc: dict[str, Any], selector: dict[str, Any]) -> bool:
        for field, cond in selector.items():
            value = doc.get(field)
            if isinstance(cond, dict):
                if "$ne" in cond and value == cond["$ne"]:
                    return False
                if "$in" in cond and value not in cond["$in"]:
                    return False
            elif value != cond:
                return False
        return True

    def find(self, selector: dict[str, Any], projection: dict[str, Any]) -> FakeCursor:
        self.calls += 1
        if self.fail_on_call is not None and self.calls == self.fail_on_call:
            raise PyMongoError("connection reset")
        keep = [k for k, v in projection.items() if v and k != "_id"]
        docs = [
            {"_id": d["_id"], **{k: d[k] for k in keep if k in d}}
            for d in self.docs
            if self._matches(d, selector)
        ]
        return _ProjectedCursor(docs)


class _ProjectedCursor(FakeCursor):
    def __iter__(self):
        for d in super().__iter__():
            yield {k: v for k, v in d.items() if k != "_id"}


@pytest.fixture
def scenario_a() -> pd.DataFrame:
    return make_frame(
        {"year": 1950, "school": "X"},
        {"year": 1952, "school": "X"},
        {"year": 1952, "school": "Y"},
    )
