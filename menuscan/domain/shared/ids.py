"""Document id generation."""

from uuid import uuid4

# Appwrite accepts ids up to 36 chars of [a-zA-Z0-9._-]; 20 hex chars matches ID.unique()
DOCUMENT_ID_LENGTH = 20


def new_document_id() -> str:
    """Return a fresh, backend-agnostic document id."""
    return uuid4().hex[:DOCUMENT_ID_LENGTH]
