"""Appwrite document backend - implements IDocumentBackend port.

Maps the port onto the Appwrite Databases REST API:

    GET    /databases/{db}/collections/{col}/documents/{id}
    GET    /databases/{db}/collections/{col}/documents?queries[]=...
    POST   /databases/{db}/collections/{col}/documents
    PATCH  /databases/{db}/collections/{col}/documents/{id}
    DELETE /databases/{db}/collections/{col}/documents/{id}
"""

import json
import logging
from typing import Any, Dict, List, Mapping

from menuscan.domain.shared.errors import ConfigurationError
from menuscan.domain.shared.ports.document_backend import Document
from menuscan.domain.shared.query import Equal, OrderDesc, Query, QueryList
from menuscan.infrastructure.backends.appwrite_http import AppwriteHttpClient

logger = logging.getLogger(__name__)


def encode_query(query: Query) -> str:
    """
    Encode a query value object as an Appwrite JSON query string.

    Example:
        >>> encode_query(OrderDesc("$createdAt"))
        '{"method": "orderDesc", "attribute": "$createdAt"}'
    """
    if isinstance(query, Equal):
        payload: Dict[str, Any] = {
            "method": "equal",
            "attribute": query.field,
            "values": list(query.values),
        }
    elif isinstance(query, OrderDesc):
        payload = {"method": "orderDesc", "attribute": query.field}
    else:
        raise TypeError(f"Unsupported query: {query!r}")
    return json.dumps(payload)


class AppwriteDocumentBackend:
    """
    Appwrite implementation of IDocumentBackend port.

    Example:
        >>> http = AppwriteHttpClient(AppwriteSettings.from_env())
        >>> backend = AppwriteDocumentBackend(http, database_id="main")
        >>> food = await backend.get_document("foods", "f1")
    """

    def __init__(self, http: AppwriteHttpClient, database_id: str) -> None:
        """
        Initialize backend.

        Args:
            http: Shared Appwrite transport
            database_id: Appwrite database id

        Raises:
            ConfigurationError: If database_id is empty
        """
        if not database_id:
            raise ConfigurationError("Missing Appwrite DB config. Set APPWRITE_DATABASE_ID.")
        self._http = http
        self._database_id = database_id

    def _documents_path(self, collection: str) -> str:
        return f"/databases/{self._database_id}/collections/{collection}/documents"

    async def get_document(self, collection: str, document_id: str) -> Document:
        result: Document = await self._http.request(
            "GET", f"{self._documents_path(collection)}/{document_id}"
        )
        return result

    async def list_documents(
        self, collection: str, queries: QueryList = ()
    ) -> List[Document]:
        params = [("queries[]", encode_query(q)) for q in queries]
        result = await self._http.request(
            "GET", self._documents_path(collection), params=params or None
        )
        documents: List[Document] = list((result or {}).get("documents", []))
        logger.debug(
            "Listed documents",
            extra={"collection": collection, "count": len(documents)},
        )
        return documents

    async def create_document(
        self, collection: str, document_id: str, data: Mapping[str, Any]
    ) -> Document:
        result: Document = await self._http.request(
            "POST",
            self._documents_path(collection),
            json={"documentId": document_id, "data": dict(data)},
        )
        return result

    async def update_document(
        self, collection: str, document_id: str, patch: Mapping[str, Any]
    ) -> Document:
        result: Document = await self._http.request(
            "PATCH",
            f"{self._documents_path(collection)}/{document_id}",
            json={"data": dict(patch)},
        )
        return result

    async def delete_document(self, collection: str, document_id: str) -> None:
        await self._http.request(
            "DELETE", f"{self._documents_path(collection)}/{document_id}"
        )
