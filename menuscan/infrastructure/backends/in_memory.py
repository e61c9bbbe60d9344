"""In-memory document backend implementation.

Provides a dictionary-based implementation of the IDocumentBackend port
for tests and local development, with the same error contract as the
hosted backend (NotFoundError / ConflictError).
"""

from collections import Counter
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Tuple

from menuscan.domain.shared.errors import ConflictError, NotFoundError
from menuscan.domain.shared.ports.document_backend import Document
from menuscan.domain.shared.query import Equal, OrderDesc, QueryList

SYSTEM_FIELDS = ("$id", "$collectionId", "$createdAt", "$updatedAt")


class InMemoryDocumentBackend:
    """
    In-memory implementation of IDocumentBackend port.

    Thread safety: NOT thread-safe (single event loop only)
    Persistence: Data lost on process restart (in-memory only)

    Every call is counted in ``calls`` so tests can assert how many backend
    round-trips a cached accessor actually made.

    Example:
        >>> backend = InMemoryDocumentBackend()
        >>> doc = await backend.create_document("foods", "f1", {"name": "Pizza"})
        >>> await backend.get_document("foods", "f1")
    """

    def __init__(self) -> None:
        """Initialize backend with empty storage."""
        self._storage: Dict[str, Dict[str, Document]] = {}
        self._sequence: Dict[Tuple[str, str], int] = {}
        self._next_sequence = 0
        self.calls: Counter[str] = Counter()

    def _collection(self, collection: str) -> Dict[str, Document]:
        return self._storage.setdefault(collection, {})

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    async def get_document(self, collection: str, document_id: str) -> Document:
        self.calls["get_document"] += 1
        doc = self._collection(collection).get(document_id)
        if doc is None:
            raise NotFoundError(f"Document {collection}/{document_id} not found")
        return deepcopy(doc)

    async def list_documents(
        self, collection: str, queries: QueryList = ()
    ) -> List[Document]:
        self.calls["list_documents"] += 1
        docs = list(self._collection(collection).values())

        for query in queries:
            if isinstance(query, Equal):
                docs = [d for d in docs if d.get(query.field) in query.values]

        for query in queries:
            if isinstance(query, OrderDesc):
                field = query.field
                docs.sort(
                    key=lambda d: (
                        str(d.get(field, "")),
                        self._sequence.get((collection, d["$id"]), 0),
                    ),
                    reverse=True,
                )

        return [deepcopy(d) for d in docs]

    async def create_document(
        self, collection: str, document_id: str, data: Mapping[str, Any]
    ) -> Document:
        self.calls["create_document"] += 1
        docs = self._collection(collection)
        if document_id in docs:
            raise ConflictError(f"Document {collection}/{document_id} already exists")

        now = self._now()
        doc: Document = {k: deepcopy(v) for k, v in data.items() if k not in SYSTEM_FIELDS}
        doc.update(
            {
                "$id": document_id,
                "$collectionId": collection,
                "$createdAt": now,
                "$updatedAt": now,
            }
        )
        docs[document_id] = doc
        self._next_sequence += 1
        self._sequence[(collection, document_id)] = self._next_sequence
        return deepcopy(doc)

    async def update_document(
        self, collection: str, document_id: str, patch: Mapping[str, Any]
    ) -> Document:
        self.calls["update_document"] += 1
        doc = self._collection(collection).get(document_id)
        if doc is None:
            raise NotFoundError(f"Document {collection}/{document_id} not found")

        for key, value in patch.items():
            if key not in SYSTEM_FIELDS:
                doc[key] = deepcopy(value)
        doc["$updatedAt"] = self._now()
        return deepcopy(doc)

    async def delete_document(self, collection: str, document_id: str) -> None:
        self.calls["delete_document"] += 1
        docs = self._collection(collection)
        if document_id not in docs:
            raise NotFoundError(f"Document {collection}/{document_id} not found")
        del docs[document_id]
        self._sequence.pop((collection, document_id), None)

    def count(self, collection: str) -> int:
        """Number of stored documents in a collection (no call counted)."""
        return len(self._storage.get(collection, {}))

    def clear(self) -> None:
        """Drop all data and reset call counters (for testing)."""
        self._storage.clear()
        self._sequence.clear()
        self.calls.clear()
