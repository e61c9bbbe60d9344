"""Document backend and file storage implementations."""

from menuscan.infrastructure.backends.appwrite import AppwriteDocumentBackend
from menuscan.infrastructure.backends.appwrite_http import AppwriteHttpClient
from menuscan.infrastructure.backends.appwrite_storage import AppwriteFileStorage
from menuscan.infrastructure.backends.in_memory import InMemoryDocumentBackend
from menuscan.infrastructure.backends.in_memory_storage import InMemoryFileStorage

__all__ = [
    "AppwriteDocumentBackend",
    "AppwriteFileStorage",
    "AppwriteHttpClient",
    "InMemoryDocumentBackend",
    "InMemoryFileStorage",
]
