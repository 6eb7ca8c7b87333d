"""
Tests for UploadService.

Runs against an in-memory SQLite database and a temp upload directory.
Dependencies: pytest, sqlalchemy, docflow.application.services
System role: Upload lifecycle validation
"""

import uuid
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.application.services import UploadService
from docflow.boundary.db.CRUD.upload_crud import upload_crud
from docflow.boundary.db.models.upload_model import UploadStatus, UploadType
from docflow.configs.storage import StorageSettings
from docflow.core.exceptions import NotFoundError, StorageError, ValidationError


@pytest.fixture
def upload_service(test_async_db: AsyncSession, storage) -> UploadService:
    return UploadService(db=test_async_db, storage=storage, settings=StorageSettings())


class TestValidateUpload:
    """Test suite for UploadService.validate_upload()."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("report.pdf", UploadType.PDF), ("PAGE.HTML", UploadType.HTML), ("a.b.html", UploadType.HTML)],
    )
    def test_accepts_pdf_and_html(self, upload_service, name, expected) -> None:
        assert upload_service.validate_upload(name, 10) == expected

    @pytest.mark.parametrize("name", ["notes.txt", "image.png", "page.htm", "noextension"])
    def test_rejects_other_types(self, upload_service, name) -> None:
        with pytest.raises(ValidationError, match="Only PDF and HTML files are allowed"):
            upload_service.validate_upload(name, 10)

    @pytest.mark.parametrize("name", [None, ""])
    def test_rejects_missing_file(self, upload_service, name) -> None:
        with pytest.raises(ValidationError, match="No file uploaded"):
            upload_service.validate_upload(name, 10)

    def test_rejects_oversized_file(self, test_async_db, storage) -> None:
        service = UploadService(test_async_db, storage, StorageSettings(max_file_size=100))

        with pytest.raises(ValidationError, match="File too large"):
            service.validate_upload("big.pdf", 101)

        assert service.validate_upload("big.pdf", 100) == UploadType.PDF


class TestCreateUpload:
    """Test suite for UploadService.create_upload()."""

    @pytest.mark.asyncio
    async def test_stores_file_and_record(self, upload_service, test_async_db) -> None:
        upload = await upload_service.create_upload("report.pdf", b"%PDF-1.4 data")

        assert upload.original_name == "report.pdf"
        assert upload.status == UploadStatus.PROCESSING
        assert upload.type == UploadType.PDF
        assert upload.size == 13
        assert Path(upload.path).read_bytes() == b"%PDF-1.4 data"
        assert await upload_crud.get_by_id(test_async_db, upload.id) is not None

    @pytest.mark.asyncio
    async def test_rejected_file_is_not_stored(self, upload_service, storage) -> None:
        with pytest.raises(ValidationError):
            await upload_service.create_upload("notes.txt", b"text")

        assert not storage.directory.exists() or not any(storage.directory.iterdir())

    @pytest.mark.asyncio
    async def test_database_failure_removes_file(self, storage) -> None:
        db = AsyncMock(spec=AsyncSession)
        db.add = MagicMock()
        db.flush.side_effect = OperationalError("INSERT", {}, Exception("db down"))
        service = UploadService(db=db, storage=storage)

        with pytest.raises(StorageError, match="Failed to save file information"):
            await service.create_upload("report.pdf", b"data")

        db.rollback.assert_awaited_once()
        assert list(storage.directory.iterdir()) == []


class TestReadOperations:
    """Test suite for list and get operations."""

    @pytest.mark.asyncio
    async def test_list_uploads(self, upload_service) -> None:
        await upload_service.create_upload("a.pdf", b"a")
        await upload_service.create_upload("b.html", b"<p>b</p>")

        uploads = await upload_service.list_uploads()

        assert {u.original_name for u in uploads} == {"a.pdf", "b.html"}

    @pytest.mark.asyncio
    async def test_get_upload_missing_raises(self, upload_service) -> None:
        with pytest.raises(NotFoundError, match="File not found"):
            await upload_service.get_upload(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_get_upload_malformed_id_raises(self, upload_service) -> None:
        with pytest.raises(NotFoundError, match="File not found"):
            await upload_service.get_upload("not-a-uuid")

    @pytest.mark.asyncio
    async def test_get_upload_file_missing_on_disk(self, upload_service) -> None:
        upload = await upload_service.create_upload("a.pdf", b"a")
        Path(upload.path).unlink()

        with pytest.raises(NotFoundError, match="File content not found on disk"):
            await upload_service.get_upload_file(upload.id)


class TestDeleteUpload:
    """Test suite for UploadService.delete_upload()."""

    @pytest.mark.asyncio
    async def test_removes_file_and_record(self, upload_service, test_async_db) -> None:
        upload = await upload_service.create_upload("a.pdf", b"a")

        await upload_service.delete_upload(upload.id)

        assert not Path(upload.path).exists()
        assert await upload_crud.get_by_id(test_async_db, upload.id) is None

    @pytest.mark.asyncio
    async def test_missing_file_still_deletes_record(self, upload_service, test_async_db) -> None:
        upload = await upload_service.create_upload("a.pdf", b"a")
        Path(upload.path).unlink()

        await upload_service.delete_upload(upload.id)

        assert await upload_crud.get_by_id(test_async_db, upload.id) is None

    @pytest.mark.asyncio
    async def test_unknown_id_raises(self, upload_service) -> None:
        with pytest.raises(NotFoundError):
            await upload_service.delete_upload(uuid.uuid4())


class TestStartProcessing:
    """Test suite for UploadService.start_processing()."""

    @pytest.mark.asyncio
    async def test_resets_status_to_processing(self, upload_service, test_async_db) -> None:
        upload = await upload_service.create_upload("a.pdf", b"a")
        await upload_crud.mark_failed(test_async_db, upload.id, "earlier failure")

        updated = await upload_service.start_processing(upload.id)

        assert updated.status == UploadStatus.PROCESSING

    @pytest.mark.asyncio
    async def test_unknown_id_raises(self, upload_service) -> None:
        with pytest.raises(NotFoundError):
            await upload_service.start_processing(uuid.uuid4())
