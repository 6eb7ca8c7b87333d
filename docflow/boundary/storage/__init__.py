"""File storage boundary."""

from docflow.boundary.storage.file_storage import FileStorage, StoredFile

__all__ = ["FileStorage", "StoredFile"]
