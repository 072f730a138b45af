"""Fetch → build → write, reported as a single success/failure status.

This is the one entry point shared by the CLI and any service that wants to
trigger a regeneration. Aggregation itself never raises for degenerate data;
only datastore and filesystem failures turn into a failed result.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pymongo.collection import Collection

from dissertation_pipeline.config import DEFAULT_PAGE_SIZE, DEFAULT_TIMESERIES_TOP_N
from dissertation_pipeline.ingest.fetch_records import FetchError, fetch_summaries
from dissertation_pipeline.models import RefreshResult
from dissertation_pipeline.snapshot.build import build_snapshot
from dissertation_pipeline.snapshot.writer import SnapshotWriteError, write_snapshot

log = logging.getLogger(__name__)


def refresh_snapshot(
    collection: Collection[dict[str, Any]],
    out_dir: Path,
    page_size: int = DEFAULT_PAGE_SIZE,
    top_n: int = DEFAULT_TIMESERIES_TOP_N,
) -> RefreshResult:
    """Regenerate every explorer artifact from the current record set.

    Args:
        collection: Dissertation collection to read from.
        out_dir: Explorer data directory to write into.
        page_size: Records per fetched page.
        top_n: Number of top schools that get a time series.

    Returns:
        `RefreshResult` carrying the new meta on success, or the error
        message on failure.
    """
    log.info("Generating explorer data snapshots...")
    try:
        summaries = fetch_summaries(collection, page_size=page_size)
        bundle = build_snapshot(summaries, top_n=top_n)
        write_snapshot(bundle, out_dir)
    except FetchError as e:
        log.exception("Snapshot refresh aborted: could not fetch records")
        return RefreshResult(success=False, error=f"Failed to fetch records: {e}")
    except SnapshotWriteError as e:
        log.exception("Snapshot refresh failed while writing artifacts")
        return RefreshResult(success=False, error=f"Failed to refresh snapshots: {e}")

    log.info("Snapshot generation complete!")
    return RefreshResult(success=True, meta=bundle.meta)
