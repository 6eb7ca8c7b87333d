"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: docflow.configs, docflow.application, docflow.boundary, docflow.core
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docflow.application.services import ProcessingService, UploadService
from docflow.boundary.db import get_async_db, get_async_session_factory
from docflow.boundary.storage import FileStorage
from docflow.configs import Settings, get_settings
from docflow.core.document_processing import DocumentPipeline
from docflow.core.progress_broker import ProgressBroker


class ServiceCache:
    """Container for process-wide service instances."""

    def __init__(self) -> None:
        self._progress_broker: ProgressBroker | None = None
        self._document_pipeline: DocumentPipeline | None = None
        self._file_storage: FileStorage | None = None

    @property
    def progress_broker(self) -> ProgressBroker:
        """Get cached progress broker."""
        if self._progress_broker is None:
            settings = get_settings()
            self._progress_broker = ProgressBroker(
                queue_size=settings.pipeline.progress_queue_size,
            )
        return self._progress_broker

    @property
    def document_pipeline(self) -> DocumentPipeline:
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            self._document_pipeline = DocumentPipeline(get_settings().pipeline)
        return self._document_pipeline

    @property
    def file_storage(self) -> FileStorage:
        """Get cached file storage."""
        if self._file_storage is None:
            self._file_storage = FileStorage(get_settings().storage.directory)
        return self._file_storage

    def clear(self) -> None:
        """Clear all cached instances."""
        self._progress_broker = None
        self._document_pipeline = None
        self._file_storage = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for work that outlives the request (background jobs)."""
    return get_async_session_factory()


def get_progress_broker() -> ProgressBroker:
    """Get the process-wide progress broker."""
    return get_service_cache().progress_broker


def get_file_storage() -> FileStorage:
    """Get the upload file storage."""
    return get_service_cache().file_storage


def get_document_pipeline() -> DocumentPipeline:
    """Get the document pipeline."""
    return get_service_cache().document_pipeline


def get_upload_service(
    db: AsyncSession = Depends(get_async_db),
    storage: FileStorage = Depends(get_file_storage),
    settings: Settings = Depends(get_settings_dependency),
) -> UploadService:
    """
    Get upload service instance.

    Args:
        db: Async database session (injected via Depends)
        storage: File storage (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        UploadService: Upload service bound to the request session
    """
    return UploadService(db=db, storage=storage, settings=settings.storage)


def get_processing_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    pipeline: DocumentPipeline = Depends(get_document_pipeline),
    broker: ProgressBroker = Depends(get_progress_broker),
    settings: Settings = Depends(get_settings_dependency),
) -> ProcessingService:
    """
    Get processing service instance.

    Returns:
        ProcessingService: Job runner using its own sessions from the factory
    """
    return ProcessingService(
        session_factory=session_factory,
        pipeline=pipeline,
        broker=broker,
        settings=settings.pipeline,
    )
