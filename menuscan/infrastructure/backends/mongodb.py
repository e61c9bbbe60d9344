"""MongoDB document backend - implements IDocumentBackend port.

Stores every catalog collection as a MongoDB collection of the same name.
Backend documents are mapped as follows:

- ``$id``        <-> ``_id``
- ``$createdAt`` <-> ``created_at`` (ISO 8601 string, UTC)
- ``$updatedAt`` <-> ``updated_at``

All operations log failures with context and re-raise them as
BackendError, except duplicate ids (ConflictError) and missing documents
(NotFoundError).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from menuscan.config import get_mongodb_database, get_mongodb_uri
from menuscan.domain.shared.errors import (
    BackendError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
)
from menuscan.domain.shared.ports.document_backend import Document
from menuscan.domain.shared.query import Equal, OrderDesc, QueryList

logger = logging.getLogger(__name__)

_FIELD_MAP = {
    "$id": "_id",
    "$createdAt": "created_at",
    "$updatedAt": "updated_at",
}


def _mongo_field(field: str) -> str:
    return _FIELD_MAP.get(field, field)


class MongoDocumentBackend:
    """
    MongoDB implementation of IDocumentBackend port.

    Example:
        >>> backend = MongoDocumentBackend()  # Uses MONGODB_URI
        >>> await backend.create_document("foods", "f1", {"name": "Pizza"})
    """

    def __init__(self, client: Optional[AsyncIOMotorClient[Dict[str, Any]]] = None):
        """
        Initialize backend with optional client.

        Args:
            client: Motor client (if None, creates new one from config)

        Raises:
            ConfigurationError: If no client is given and MONGODB_URI is not set
        """
        if client is None:
            uri = get_mongodb_uri()
            if not uri:
                raise ConfigurationError(
                    "MONGODB_URI not configured. "
                    "Set MONGODB_URI, MONGODB_USER, "
                    "and MONGODB_PASSWORD environment variables."
                )
            self._client: AsyncIOMotorClient[Dict[str, Any]] = AsyncIOMotorClient(uri)
        else:
            self._client = client

        self._db = self._client[get_mongodb_database()]
        logger.info(
            "Initialized MongoDocumentBackend",
            extra={"database": get_mongodb_database()},
        )

    def collection(self, name: str) -> AsyncIOMotorCollection[Dict[str, Any]]:
        """Get MongoDB collection handle."""
        return self._db[name]

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def to_document(raw: Mapping[str, Any], collection: str) -> Document:
        """Convert a MongoDB document to a backend document."""
        doc: Document = {
            k: v for k, v in raw.items() if k not in ("_id", "created_at", "updated_at")
        }
        doc["$id"] = str(raw["_id"])
        doc["$collectionId"] = collection
        doc["$createdAt"] = raw.get("created_at")
        doc["$updatedAt"] = raw.get("updated_at")
        return doc

    @staticmethod
    def _user_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in data.items() if not k.startswith("$")}

    @staticmethod
    def build_filter(queries: QueryList) -> Tuple[Dict[str, Any], List[Tuple[str, int]]]:
        """Translate query value objects into a Mongo filter and sort spec."""
        filter_dict: Dict[str, Any] = {}
        sort: List[Tuple[str, int]] = []
        for query in queries:
            if isinstance(query, Equal):
                filter_dict[_mongo_field(query.field)] = {"$in": list(query.values)}
            elif isinstance(query, OrderDesc):
                sort.append((_mongo_field(query.field), -1))
        return filter_dict, sort

    async def get_document(self, collection: str, document_id: str) -> Document:
        try:
            raw = await self.collection(collection).find_one({"_id": document_id})
        except PyMongoError as e:
            logger.error(
                "Error in find_one",
                extra={"collection": collection, "document_id": document_id, "error": str(e)},
            )
            raise BackendError(str(e)) from e

        if raw is None:
            raise NotFoundError(f"Document {collection}/{document_id} not found")
        return self.to_document(raw, collection)

    async def list_documents(
        self, collection: str, queries: QueryList = ()
    ) -> List[Document]:
        filter_dict, sort = self.build_filter(queries)
        try:
            cursor = self.collection(collection).find(filter_dict)
            if sort:
                cursor = cursor.sort(sort)
            raws = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(
                "Error in find_many",
                extra={"collection": collection, "filter": filter_dict, "error": str(e)},
            )
            raise BackendError(str(e)) from e

        return [self.to_document(raw, collection) for raw in raws]

    async def create_document(
        self, collection: str, document_id: str, data: Mapping[str, Any]
    ) -> Document:
        now = self._now()
        raw: Dict[str, Any] = self._user_fields(data)
        raw.update({"_id": document_id, "created_at": now, "updated_at": now})
        try:
            await self.collection(collection).insert_one(raw)
        except DuplicateKeyError as e:
            raise ConflictError(f"Document {collection}/{document_id} already exists") from e
        except PyMongoError as e:
            logger.error(
                "Error in insert_one",
                extra={"collection": collection, "error": str(e)},
            )
            raise BackendError(str(e)) from e

        return self.to_document(raw, collection)

    async def update_document(
        self, collection: str, document_id: str, patch: Mapping[str, Any]
    ) -> Document:
        update = self._user_fields(patch)
        update["updated_at"] = self._now()
        try:
            raw = await self.collection(collection).find_one_and_update(
                {"_id": document_id},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(
                "Error in update_one",
                extra={"collection": collection, "document_id": document_id, "error": str(e)},
            )
            raise BackendError(str(e)) from e

        if raw is None:
            raise NotFoundError(f"Document {collection}/{document_id} not found")
        return self.to_document(raw, collection)

    async def delete_document(self, collection: str, document_id: str) -> None:
        try:
            result = await self.collection(collection).delete_one({"_id": document_id})
        except PyMongoError as e:
            logger.error(
                "Error in delete_one",
                extra={"collection": collection, "document_id": document_id, "error": str(e)},
            )
            raise BackendError(str(e)) from e

        if result.deleted_count == 0:
            raise NotFoundError(f"Document {collection}/{document_id} not found")

    async def close(self) -> None:
        """Close MongoDB connection."""
        self._client.close()
        logger.info("Closed MongoDocumentBackend connection")
