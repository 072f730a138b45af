"""dissertation_pipeline package.

Contains modules for fetching dissertation summaries from MongoDB, validating
them at the ingestion boundary, aggregating them into the explorer's
timeline/school/statistics/time-series snapshots, and persisting those
snapshots as JSON files for the read-only chart layer.

Architecture:
- Fetch → Aggregate → Snapshot, recomputed in full on every run
- pandas is used for grouping and gap-filling
- Pydantic models validate the ingested summaries and every artifact
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
