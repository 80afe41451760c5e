"""
MongoDB Connection Management

One lazily created client per process, shared by every repository.
"""
import logging
from typing import Optional

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from app.config import settings

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None
_database: Optional[Database] = None


def connect(connection_string: str = None, db_name: str = None) -> Database:
    """
    Open the shared connection (no-op when already connected).

    Args:
        connection_string: MongoDB URI (defaults to settings)
        db_name: Database name (defaults to settings)

    Returns:
        MongoDB Database instance

    Raises:
        ConnectionFailure: If the server cannot be reached
    """
    global _client, _database

    if _database is not None:
        return _database

    database_name = db_name or settings.MONGODB_DB_NAME
    client_options = {
        "serverSelectionTimeoutMS": 10000,
        "connectTimeoutMS": 15000,
        "socketTimeoutMS": 15000,
        "retryWrites": True,
        "maxPoolSize": 50,
    }
    if settings.MONGODB_TLS:
        client_options.update(tls=True, tlsCAFile=certifi.where())

    try:
        _client = MongoClient(connection_string or settings.MONGODB_URI, **client_options)
        _client.admin.command("ping")
        _database = _client[database_name]
        logger.info(f"[MongoDB] Connected to database: {database_name}")
        return _database
    except (ConnectionFailure, ServerSelectionTimeoutError) as e:
        logger.error(f"[MongoDB] Connection failed: {e}")
        raise


def get_database() -> Database:
    if _database is None:
        return connect()
    return _database


def close_database():
    """Close the shared connection."""
    global _client, _database
    if _client:
        _client.close()
        _client = None
        _database = None
        logger.info("[MongoDB] Disconnected")


def get_collection(collection_name: str):
    return get_database()[collection_name]
