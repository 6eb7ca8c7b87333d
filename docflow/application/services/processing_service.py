"""
Processing job runner.

Runs the document pipeline for one upload in the background: reads the
stored file, drives the pipeline, persists the result and publishes the
terminal event.

On failure the job publishes an error event and the upload keeps its
PROCESSING status, unless failures are configured to be marked.

Dependencies: docflow.core.document_processing, docflow.core.progress_broker,
    docflow.boundary.db
System role: Background job orchestration
"""

import logging
from pathlib import Path
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docflow.boundary.db.CRUD.upload_crud import upload_crud
from docflow.boundary.db.models.upload_model import UploadModel, UploadType
from docflow.configs.pipeline import PipelineSettings
from docflow.core.document_processing import DocumentPipeline, PipelineStage
from docflow.core.document_processing.models import (
    ProcessingResult,
    chunk_count,
    serialize_result,
)
from docflow.core.exceptions import NotFoundError, ParsingError
from docflow.core.progress_broker import ProgressBroker, ProgressPublisher

logger = logging.getLogger(__name__)


class ProcessingService:
    """Run processing jobs, each with its own database session."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        pipeline: DocumentPipeline,
        broker: ProgressBroker,
        settings: PipelineSettings | None = None,
    ) -> None:
        """
        Initialize processing service.

        Args:
            session_factory: Factory for the job's own database session
            pipeline: Document pipeline
            broker: Progress broker publishing job events
            settings: Pipeline settings (uses defaults if None)
        """
        self._session_factory = session_factory
        self._pipeline = pipeline
        self._broker = broker
        self._settings = settings or PipelineSettings()

    async def run_job(self, upload_id: UUID) -> None:
        """
        Process one upload end to end.

        Never raises: failures are logged and published as an error event.

        Args:
            upload_id: Upload (and job) id
        """
        job_id = str(upload_id)
        publisher = self._broker.publisher_for(job_id)
        logger.info("Starting processing job", extra={"job_id": job_id})

        async with self._session_factory() as db:
            try:
                upload = await upload_crud.get_by_id(db, upload_id)
                if upload is None:
                    raise NotFoundError("File not found", resource_id=job_id)

                result = await self._process(upload, publisher)
                serialized = serialize_result(result)

                await upload_crud.mark_completed(db, upload_id, serialized)
                await db.commit()

                logger.info(
                    f"Job {job_id}: {PipelineStage.COMPLETED.value}",
                    extra={"job_id": job_id, "chunk_count": chunk_count(result)},
                )
                publisher.completed(serialized)

            except Exception as e:
                logger.exception(
                    f"Job {job_id}: {PipelineStage.FAILED.value}",
                    extra={
                        "job_id": job_id,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
                await db.rollback()
                publisher.error(str(e))
                if self._settings.mark_failed_on_error:
                    await self._record_failure(db, upload_id, str(e))

    async def _process(
        self,
        upload: UploadModel,
        publisher: ProgressPublisher,
    ) -> ProcessingResult:
        if upload.type == UploadType.HTML:
            html_content = self._read_html(upload.path)
            return await self._pipeline.process_html(html_content, publisher)
        return await self._pipeline.process_pdf(upload.path, publisher)

    @staticmethod
    def _read_html(path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError as e:
            raise NotFoundError("File content not found on disk", details={"path": path}) from e
        except OSError as e:
            raise ParsingError(f"Failed to read HTML file: {e}", file_type="html") from e

    async def _record_failure(self, db: AsyncSession, upload_id: UUID, message: str) -> None:
        try:
            await upload_crud.mark_failed(db, upload_id, message)
            await db.commit()
        except Exception as inner_e:
            logger.exception(
                "Failed to record job failure",
                extra={"job_id": str(upload_id), "inner_error": str(inner_e)},
            )
            await db.rollback()
