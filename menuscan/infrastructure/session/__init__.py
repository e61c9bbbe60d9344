"""Session provider implementations."""

from menuscan.infrastructure.session.appwrite import AppwriteSessionProvider
from menuscan.infrastructure.session.in_memory import InMemorySessionProvider

__all__ = [
    "AppwriteSessionProvider",
    "InMemorySessionProvider",
]
