"""Appwrite file storage - implements IFileStorage port."""

from urllib.parse import quote

from menuscan.config import AppwriteSettings


class AppwriteFileStorage:
    """
    Builds Appwrite file view URLs.

    The project id travels as a query parameter so the URL works in an
    image component without custom headers.
    """

    def __init__(self, settings: AppwriteSettings) -> None:
        self._settings = settings

    def get_file_view_url(self, bucket_id: str, file_id: str) -> str:
        return (
            f"{self._settings.endpoint}/storage/buckets/{quote(bucket_id)}"
            f"/files/{quote(file_id)}/view?project={quote(self._settings.project_id)}"
        )
