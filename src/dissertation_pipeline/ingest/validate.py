"""Validation utilities for the ingestion boundary.

Every fetched document is validated against the `DissertationSummary` model.
Every summary field is optional, so a field that fails validation is nulled
and the rest of the record is kept: the record still counts towards the
totals and any valid year or school it carries is still aggregated. Only
documents that are not mappings at all are rejected.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from dissertation_pipeline.models import DissertationSummary

log = logging.getLogger(__name__)


def _without_invalid_fields(doc: dict[str, Any], error: ValidationError) -> dict[str, Any]:
    invalid = {err["loc"][0] for err in error.errors() if err["loc"]}
    return {k: v for k, v in doc.items() if k not in invalid}


def validate_records(
    docs: Iterable[Any],
) -> tuple[list[DissertationSummary], int]:
    """Validate raw datastore documents using Pydantic.

    Args:
        docs: Documents projected to the summary fields.

    Returns:
        A tuple of (list_of_validated_summaries, bad_count), where
        `bad_count` counts the documents that could not be used at all.
    """
    good: list[DissertationSummary] = []
    bad = 0
    repaired = 0

    for doc in docs:
        if not isinstance(doc, dict):
            bad += 1
            log.debug("Rejected non-document record %r", doc)
            continue
        try:
            good.append(DissertationSummary.model_validate(doc))
        except ValidationError as e:
            log.debug("Nulling invalid fields of %r: %s", doc, e)
            good.append(DissertationSummary.model_validate(_without_invalid_fields(doc, e)))
            repaired += 1

    if repaired:
        log.warning("Nulled invalid fields in %d record(s)", repaired)
    if bad:
        log.warning("Skipped %d record(s) that are not documents", bad)
    return good, bad
