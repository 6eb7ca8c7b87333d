"""
Upload service orchestrator.

Coordinates file storage and upload metadata: create, list, fetch, delete,
and preparing an upload for processing.

Dependencies: docflow.boundary.db, docflow.boundary.storage, docflow.core.exceptions
System role: Upload management orchestration
"""

import logging
from pathlib import Path
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.boundary.db.CRUD.upload_crud import upload_crud
from docflow.boundary.db.models.upload_model import UploadModel, UploadStatus, UploadType
from docflow.boundary.storage.file_storage import FileStorage
from docflow.configs.storage import StorageSettings
from docflow.core.exceptions import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def parse_upload_id(upload_id: UUID | str) -> UUID:
    """
    Coerce a path id to a UUID.

    Raises:
        NotFoundError: The id is not a UUID, so no upload can have it
    """
    if isinstance(upload_id, UUID):
        return upload_id
    try:
        return UUID(upload_id)
    except ValueError as e:
        raise NotFoundError("File not found", resource_id=str(upload_id)) from e


class UploadService:
    """
    Upload service orchestrator.

    Owns the upload lifecycle up to the point a processing job is scheduled.
    Commits its own transactions.
    """

    def __init__(
        self,
        db: AsyncSession,
        storage: FileStorage,
        settings: StorageSettings | None = None,
    ) -> None:
        """
        Initialize upload service.

        Args:
            db: AsyncSession for upload metadata
            storage: File storage for raw documents
            settings: Storage settings (uses defaults if None)
        """
        self.db = db
        self.storage = storage
        self.settings = settings or StorageSettings()

    def validate_upload(self, original_name: str | None, size: int) -> UploadType:
        """
        Check filename, extension and size of an incoming file.

        Returns:
            UploadType: Type derived from the extension

        Raises:
            ValidationError: Missing filename, disallowed extension or oversized file
        """
        if not original_name:
            raise ValidationError("No file uploaded", field="file")

        extension = Path(original_name).suffix.lower()
        allowed = {ext.lower() for ext in self.settings.allowed_extensions}
        if extension not in allowed:
            raise ValidationError(
                "Only PDF and HTML files are allowed",
                field="file",
                details={"extension": extension},
            )

        if size > self.settings.max_file_size:
            raise ValidationError(
                f"File too large. Maximum size: {self.settings.max_file_size // (1024 * 1024)}MB",
                field="file",
                details={"size": size},
            )

        return UploadType.from_extension(extension)

    async def create_upload(self, original_name: str | None, content: bytes) -> UploadModel:
        """
        Validate, store and record an uploaded file.

        Args:
            original_name: Filename supplied by the user
            content: File bytes

        Returns:
            UploadModel: Created record (status PROCESSING)

        Raises:
            ValidationError: Upload rejected
            StorageError: File write or database insert failed
        """
        upload_type = self.validate_upload(original_name, len(content))
        stored = self.storage.save(content, original_name)

        try:
            upload = await upload_crud.create(
                self.db,
                filename=stored.filename,
                original_name=original_name,
                path=stored.path,
                status=UploadStatus.PROCESSING,
                type=upload_type,
                size=stored.size,
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.storage.delete(stored.path)
            raise StorageError(
                "Failed to save file information",
                operation="insert",
                details={"error": str(e)},
            ) from e

        logger.info(
            "Upload recorded",
            extra={"upload_id": str(upload.id), "original_name": original_name, "size": stored.size},
        )
        return upload

    async def list_uploads(self) -> Sequence[UploadModel]:
        """List all uploads, newest first."""
        return await upload_crud.list_newest_first(self.db)

    async def get_upload(self, upload_id: UUID | str) -> UploadModel:
        """
        Fetch an upload record.

        Raises:
            NotFoundError: No record with this id, or the id is not a UUID
        """
        upload = await upload_crud.get_by_id(self.db, parse_upload_id(upload_id))
        if upload is None:
            raise NotFoundError("File not found", resource_id=str(upload_id))
        return upload

    async def get_upload_file(self, upload_id: UUID | str) -> UploadModel:
        """
        Fetch an upload whose file is present on disk.

        Raises:
            NotFoundError: Record missing, or file missing on disk
        """
        upload = await self.get_upload(upload_id)
        if not self.storage.exists(upload.path):
            logger.warning(
                "Upload file missing on disk",
                extra={"upload_id": str(upload_id), "file_path": upload.path},
            )
            raise NotFoundError("File content not found on disk", resource_id=str(upload_id))
        return upload

    async def delete_upload(self, upload_id: UUID | str) -> None:
        """
        Delete the stored file and the upload record.

        A file already missing on disk does not prevent metadata deletion.

        Raises:
            NotFoundError: No record with this id
            StorageError: File removal failed for another reason
        """
        upload = await self.get_upload(upload_id)
        self.storage.delete(upload.path)
        await upload_crud.delete_by_id(self.db, upload.id)
        await self.db.commit()
        logger.info("Upload deleted", extra={"upload_id": str(upload_id)})

    async def start_processing(self, upload_id: UUID | str) -> UploadModel:
        """
        Put an upload into PROCESSING ahead of a pipeline run.

        Raises:
            NotFoundError: No record with this id
        """
        upload = await self.get_upload(upload_id)
        upload = await upload_crud.set_status(self.db, upload.id, UploadStatus.PROCESSING)
        await self.db.commit()
        return upload
