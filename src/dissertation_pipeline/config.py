"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the datastore location, the explorer output directory and the paging /
selection sizes from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_PAGE_SIZE = 1000
DEFAULT_TIMESERIES_TOP_N = 50


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        mongo_uri: MongoDB connection URI.
        mongo_db: Target MongoDB database name.
        mongo_collection: Collection holding the dissertation records.
        explorer_data_dir: Directory the JSON snapshots are written to.
        page_size: Number of records fetched per page.
        timeseries_top_n: How many top schools get a time series.
    """
    mongo_uri: str
    mongo_db: str
    mongo_collection: str
    explorer_data_dir: Path
    page_size: int = DEFAULT_PAGE_SIZE
    timeseries_top_n: int = DEFAULT_TIMESERIES_TOP_N


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer (got {raw!r}).") from None
    if value < 1:
        raise RuntimeError(f"{name} must be a positive integer (got {value}).")
    return value


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `FETCH_PAGE_SIZE` or `TIMESERIES_TOP_N` is set to
            something other than a positive integer.
    """
    mongo_uri = os.getenv(
        "MONGO_URI",
        "mongodb://localhost:27017,localhost:27018,localhost:27019/?replicaSet=rs0",
    )
    mongo_db = os.getenv("MONGO_DB", "dissertations")
    mongo_collection = os.getenv("MONGO_COLLECTION", "dissertations")
    explorer_data_dir = Path(os.getenv("EXPLORER_DATA_DIR", "explorer/data"))

    return Settings(
        mongo_uri=mongo_uri,
        mongo_db=mongo_db,
        mongo_collection=mongo_collection,
        explorer_data_dir=explorer_data_dir,
        page_size=_positive_int("FETCH_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        timeseries_top_n=_positive_int("TIMESERIES_TOP_N", DEFAULT_TIMESERIES_TOP_N),
    )
