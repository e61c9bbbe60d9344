"""File storage port (interface)."""

from typing import Protocol


class IFileStorage(Protocol):
    """Interface for resolving stored files (food images) to URLs."""

    def get_file_view_url(self, bucket_id: str, file_id: str) -> str:
        """
        Build a URL the client can use to display a stored file.

        Pure string construction, no network I/O.

        Args:
            bucket_id: Storage bucket identifier
            file_id: File identifier

        Returns:
            View URL
        """
        ...
