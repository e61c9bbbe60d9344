"""Document backend port (interface).

Defines the contract for the hosted document database the catalog reads
from and writes to. Follows the Dependency Inversion Principle: the domain
defines the port, infrastructure provides the implementation.
"""

from typing import Any, Dict, List, Mapping, Protocol

from menuscan.domain.shared.query import QueryList

# Raw backend document: user fields plus system fields ($id, $createdAt, ...)
Document = Dict[str, Any]


class IDocumentBackend(Protocol):
    """
    Interface for document CRUD operations.

    Implementations:
    - InMemoryDocumentBackend (tests, local development)
    - AppwriteDocumentBackend (hosted backend over REST)
    - MongoDocumentBackend (self-hosted MongoDB)

    Error contract:
    - NotFoundError: document or collection does not exist
    - ConflictError: create with an id that already exists
    - BackendError: any other failure (transient, never cached)
    """

    async def get_document(self, collection: str, document_id: str) -> Document:
        """
        Fetch a single document.

        Args:
            collection: Collection identifier
            document_id: Document identifier

        Returns:
            Document with system fields

        Raises:
            NotFoundError: If the document does not exist
        """
        ...

    async def list_documents(
        self, collection: str, queries: QueryList = ()
    ) -> List[Document]:
        """
        List documents matching every query.

        Args:
            collection: Collection identifier
            queries: Equal filters and OrderDesc orderings

        Returns:
            Matching documents (possibly empty)
        """
        ...

    async def create_document(
        self, collection: str, document_id: str, data: Mapping[str, Any]
    ) -> Document:
        """
        Create a document.

        Args:
            collection: Collection identifier
            document_id: Id to assign (use new_document_id() for a fresh one)
            data: User fields

        Returns:
            Created document with system fields

        Raises:
            ConflictError: If the id is already taken
        """
        ...

    async def update_document(
        self, collection: str, document_id: str, patch: Mapping[str, Any]
    ) -> Document:
        """
        Apply a partial update.

        Returns:
            Updated document

        Raises:
            NotFoundError: If the document does not exist
        """
        ...

    async def delete_document(self, collection: str, document_id: str) -> None:
        """
        Delete a document.

        Raises:
            NotFoundError: If the document does not exist
        """
        ...
