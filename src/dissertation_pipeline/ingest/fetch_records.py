"""Paginated reads of dissertation summaries from MongoDB.

Pages are requested sequentially in `_id` order so that consecutive pages
never overlap. A datastore error on any page aborts the whole fetch.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from dissertation_pipeline.config import DEFAULT_PAGE_SIZE
from dissertation_pipeline.ingest.validate import validate_records
from dissertation_pipeline.models import DissertationSummary

log = logging.getLogger(__name__)

SUMMARY_PROJECTION = {
    "_id": False,
    "year": True,
    "school": True,
    "subject_broad": True,
    "department_broad": True,
}
NOT_DELETED = {"is_deleted": {"$ne": True}}


class FetchError(RuntimeError):
    """Raised when the datastore fails while reading a page of records."""


def fetch_pages(
    collection: Collection[dict[str, Any]],
    query: dict[str, Any] | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[dict[str, Any]]:
    """Read every document matching `query` (and not soft-deleted), page by page.

    Args:
        collection: Source PyMongo collection.
        query: Optional extra filter merged with the not-deleted filter.
        page_size: Number of documents requested per page.

    Returns:
        All projected documents in `_id` order.

    Raises:
        FetchError: if any page read fails.
        ValueError: if `page_size` is not positive.
    """
    if page_size < 1:
        raise ValueError("page_size must be a positive integer")

    selector = {**NOT_DELETED, **(query or {})}
    docs: list[dict[str, Any]] = []
    offset = 0

    while True:
        try:
            page = list(
                collection.find(selector, SUMMARY_PROJECTION)
                .sort("_id", 1)
                .skip(offset)
                .limit(page_size)
            )
        except PyMongoError as e:
            raise FetchError(f"Failed to read records at offset {offset}: {e}") from e

        docs.extend(page)
        log.info("Fetched %d records (total: %d)", len(page), len(docs))

        if len(page) < page_size:
            break
        offset += page_size

    return docs


def fetch_summaries(
    collection: Collection[dict[str, Any]],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[DissertationSummary]:
    """Fetch and validate every non-deleted dissertation summary."""
    docs = fetch_pages(collection, page_size=page_size)
    summaries, _ = validate_records(docs)
    log.info("Found %d dissertations total", len(summaries))
    return summaries


def fetch_school_summaries(
    collection: Collection[dict[str, Any]],
    school_names: Sequence[str],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[DissertationSummary]:
    """Fetch and validate the summaries of the named schools only."""
    docs = fetch_pages(
        collection,
        query={"school": {"$in": list(school_names)}},
        page_size=page_size,
    )
    summaries, _ = validate_records(docs)
    return summaries
