"""
Local file storage for uploaded documents.

Writes uploads under a configured directory with collision-resistant names
and removes them on delete.

Dependencies: pathlib (stdlib), docflow.core.exceptions
System role: Raw document persistence on disk
"""

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path

from docflow.core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """Location and size of a file written to storage."""

    filename: str
    path: str
    size: int


class FileStorage:
    """Store uploaded files in a local directory."""

    def __init__(self, directory: str | Path) -> None:
        """
        Initialize storage rooted at a directory.

        Args:
            directory: Upload directory (created on first save)
        """
        self.directory = Path(directory)

    @staticmethod
    def generate_filename(original_name: str) -> str:
        """Build a unique stored name: '<epoch-ms>-<random><ext>'."""
        suffix = Path(original_name).suffix.lower()
        unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{unique}{suffix}"

    def save(self, content: bytes, original_name: str) -> StoredFile:
        """
        Write uploaded bytes to a new file.

        Args:
            content: File content
            original_name: Filename supplied by the user (extension is kept)

        Returns:
            StoredFile: Stored name, path and size

        Raises:
            StorageError: Directory creation or write failed
        """
        filename = self.generate_filename(original_name)
        path = self.directory / filename
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise StorageError(
                "Failed to save uploaded file",
                operation="save",
                details={"path": str(path), "error": str(e)},
            ) from e

        logger.info(
            "File saved to upload directory",
            extra={"file_path": str(path), "size": len(content)},
        )
        return StoredFile(filename=filename, path=str(path), size=len(content))

    @staticmethod
    def exists(path: str) -> bool:
        return Path(path).is_file()

    @staticmethod
    def delete(path: str) -> bool:
        """
        Remove a stored file.

        Args:
            path: File path

        Returns:
            bool: True if removed, False if it was already missing

        Raises:
            StorageError: Removal failed for another reason
        """
        try:
            Path(path).unlink()
        except FileNotFoundError:
            logger.warning(
                "File not found on disk; proceeding with metadata deletion",
                extra={"file_path": path},
            )
            return False
        except OSError as e:
            raise StorageError(
                "Failed to delete file from disk",
                operation="delete",
                details={"path": path, "error": str(e)},
            ) from e
        logger.debug("Deleted stored file", extra={"file_path": path})
        return True
