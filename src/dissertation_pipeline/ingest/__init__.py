"""Ingestion helpers for the snapshot pipeline.

Reads the non-deleted dissertation records page by page and validates them
into `DissertationSummary` objects before any aggregation runs.
"""
