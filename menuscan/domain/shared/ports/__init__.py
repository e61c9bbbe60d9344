"""Domain ports (interfaces for infrastructure adapters)."""

from menuscan.domain.shared.ports.document_backend import Document, IDocumentBackend
from menuscan.domain.shared.ports.file_storage import IFileStorage
from menuscan.domain.shared.ports.session_provider import ISessionProvider

__all__ = [
    "Document",
    "IDocumentBackend",
    "IFileStorage",
    "ISessionProvider",
]
