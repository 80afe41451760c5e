"""
Base Repository Pattern

Shared collection access and document helpers for the MongoDB repositories.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pymongo.collection import Collection

from app.infra.mongodb.connection import get_collection

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Dict[str, Any])


class BaseRepository(Generic[T]):
    """
    Base repository with the CRUD helpers the pipeline needs.

    Subclasses set the collection_name class attribute. A collection can be
    injected directly instead of resolving it through the shared connection.
    """

    collection_name: str = None  # Override in subclass

    def __init__(self, collection: Optional[Collection] = None):
        if not self.collection_name:
            raise ValueError(f"collection_name must be set in {self.__class__.__name__}")
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is not None:
            return self._collection
        return get_collection(self.collection_name)

    @staticmethod
    def _stringify_id(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if document and "_id" in document:
            document["_id"] = str(document["_id"])
        return document

    def insert_one(self, document: Dict[str, Any]) -> str:
        """
        Insert a single document, stamping created_at.

        Returns:
            Inserted document ID as string
        """
        document.setdefault("created_at", datetime.utcnow())
        result = self.collection.insert_one(document)
        return str(result.inserted_id)

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._stringify_id(self.collection.find_one(query))

    def find_many(
        self,
        query: Dict[str, Any] = None,
        limit: int = 50,
        sort: List[tuple] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents.

        Args:
            query: MongoDB query dict
            limit: Maximum documents to return
            sort: List of (field, direction) tuples

        Returns:
            List of documents with string ids
        """
        cursor = self.collection.find(query or {})
        if sort:
            cursor = cursor.sort(sort)
        return [self._stringify_id(doc) for doc in cursor.limit(limit)]

    def update_one(self, query: Dict[str, Any], update: Dict[str, Any], upsert: bool = False) -> bool:
        """Apply update operators; True when a document was modified or upserted."""
        result = self.collection.update_one(query, update, upsert=upsert)
        return result.modified_count > 0 or result.upserted_id is not None
