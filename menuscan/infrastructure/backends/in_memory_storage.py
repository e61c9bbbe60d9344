"""In-memory file storage (URL construction only)."""


class InMemoryFileStorage:
    """IFileStorage that builds ``memory://`` URLs."""

    def get_file_view_url(self, bucket_id: str, file_id: str) -> str:
        return f"memory://{bucket_id}/{file_id}"
