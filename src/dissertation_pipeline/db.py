"""MongoDB helpers.

Centralizes creation of Mongo clients and lookup of the dissertation
collection used by the fetch stage.
"""

from __future__ import annotations

from typing import Any

import certifi
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from dissertation_pipeline.config import Settings


def get_client(uri: str) -> MongoClient[dict[str, Any]]:
    """Return a configured PyMongo MongoClient for the provided URI.

    Args:
        uri: MongoDB connection URI.

    Returns:
        Configured MongoClient instance.
    """
    return MongoClient(
        uri,
        tls=True,
        tlsCAFile=certifi.where(),
        serverSelectionTimeoutMS=30000,
        socketTimeoutMS=30000,
        connectTimeoutMS=30000,
    )


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient.

    Args:
        client: PyMongo MongoClient.
        db_name: Database name.

    Returns:
        A Database object.
    """
    return client[db_name]


def get_dissertations(
    client: MongoClient[dict[str, Any]],
    settings: Settings,
) -> Collection[dict[str, Any]]:
    """Return the collection holding dissertation records."""
    return get_db(client, settings.mongo_db)[settings.mongo_collection]
