"""
Document pipeline orchestrator.

Coordinates extraction, chunking and embedding for HTML and PDF documents
and reports progress through the job's publisher. Every external call is
awaited before the next one starts; there is no fan-out.

Dependencies: All task modules, docflow.configs, docflow.core.progress_broker
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import enum
import logging

from docflow.configs.pipeline import PipelineSettings
from docflow.core.progress_broker import ProgressPublisher

from .models import Chunk, HtmlProcessingResult, PdfPageResult
from .tasks import (
    ChunkingTask,
    EmbeddingTask,
    HtmlExtractionTask,
    OcrTask,
    PageRenderTask,
)

logger = logging.getLogger(__name__)


class PipelineStage(str, enum.Enum):
    """Per-job pipeline states, in order."""

    STARTING = "starting"
    EXTRACTING = "extracting"
    EMBEDDING = "embedding"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    FAILED = "failed"


class DocumentPipeline:
    """Orchestrate document processing: extract -> chunk -> embed."""

    def __init__(
        self,
        settings: PipelineSettings | None = None,
        *,
        chunking_task: ChunkingTask | None = None,
        extraction_task: HtmlExtractionTask | None = None,
        embedding_task: EmbeddingTask | None = None,
        ocr_task: OcrTask | None = None,
        page_render_task: PageRenderTask | None = None,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Tasks not passed in are built from settings.

        Args:
            settings: Pipeline settings (uses defaults if None)
        """
        self._settings = settings or PipelineSettings()

        self._chunking_task = chunking_task or ChunkingTask(
            max_length=self._settings.max_chunk_length,
        )
        self._extraction_task = extraction_task or HtmlExtractionTask()
        self._embedding_task = embedding_task or EmbeddingTask(
            api_url=self._settings.embed_api_url,
            timeout=self._settings.request_timeout,
            dimensions=self._settings.embedding_dimensions,
        )
        self._ocr_task = ocr_task or OcrTask(
            api_url=self._settings.ocr_api_url,
            timeout=self._settings.request_timeout,
        )
        self._page_render_task = page_render_task or PageRenderTask(
            pages_directory=self._settings.pages_directory,
        )

    async def process_html(
        self,
        html_content: str,
        publisher: ProgressPublisher,
    ) -> HtmlProcessingResult:
        """
        Process an HTML document.

        Args:
            html_content: Raw markup
            publisher: Progress publisher for this job

        Returns:
            HtmlProcessingResult: Markup, extracted text and embedded chunks

        Raises:
            ParsingError: Markup could not be parsed
            EmbeddingRequestFailed: Embedding service failed for a chunk
        """
        job_id = publisher.job_id
        self._log_stage(job_id, PipelineStage.STARTING, document_type="html")
        publisher.processing_starting()

        self._log_stage(job_id, PipelineStage.EXTRACTING)
        extracted_text = self._extraction_task.extract(html_content)

        chunks = await self._chunk_and_embed(extracted_text, publisher)

        self._log_stage(job_id, PipelineStage.FINALIZING, chunk_count=len(chunks))
        publisher.finalizing()

        return HtmlProcessingResult(
            full_html=html_content,
            extracted_text=extracted_text,
            chunks=chunks,
        )

    async def process_pdf(
        self,
        pdf_path: str,
        publisher: ProgressPublisher,
        total_pages: int | None = None,
    ) -> list[PdfPageResult]:
        """
        Process a PDF document page by page.

        Each page is rendered, sent to OCR, then chunked and embedded before
        the next page starts.

        Args:
            pdf_path: Stored PDF path
            publisher: Progress publisher for this job
            total_pages: Number of pages to process (read from the PDF if None)

        Returns:
            list[PdfPageResult]: One result per page, in page order

        Raises:
            ParsingError: PDF could not be read
            OcrRequestFailed: OCR service failed for a page
            EmbeddingRequestFailed: Embedding service failed for a chunk
        """
        job_id = publisher.job_id
        self._log_stage(job_id, PipelineStage.STARTING, document_type="pdf")
        publisher.processing_starting()

        document = await asyncio.to_thread(self._page_render_task.open, pdf_path)
        try:
            if total_pages is None:
                total_pages = document.page_count

            results: list[PdfPageResult] = []
            for page_number in range(1, total_pages + 1):
                self._log_stage(job_id, PipelineStage.EXTRACTING, page_number=page_number)
                image_path = await asyncio.to_thread(
                    self._page_render_task.render, document, page_number
                )
                extracted_text = await self._ocr_task.recognize(image_path)

                chunks = await self._chunk_and_embed(
                    extracted_text, publisher, page_number=page_number
                )
                results.append(
                    PdfPageResult(
                        page_number=page_number,
                        image_path=image_path,
                        extracted_text=extracted_text,
                        chunks=chunks,
                    )
                )
        finally:
            document.close()

        self._log_stage(job_id, PipelineStage.FINALIZING, page_count=len(results))
        publisher.finalizing()
        return results

    async def _chunk_and_embed(
        self,
        text: str,
        publisher: ProgressPublisher,
        page_number: int | None = None,
    ) -> list[Chunk]:
        """Chunk text and embed each chunk sequentially, reporting after each."""
        texts = self._chunking_task.chunk(text)
        total = len(texts)
        self._log_stage(
            publisher.job_id,
            PipelineStage.EMBEDDING,
            total_chunks=total,
            page_number=page_number,
        )

        chunks: list[Chunk] = []
        for index, chunk_text in enumerate(texts, start=1):
            embedding = await self._embedding_task.embed(chunk_text)
            chunks.append(Chunk(text=chunk_text, embedding=embedding))
            publisher.progress_update(index, total, page_number=page_number)
        return chunks

    @staticmethod
    def _log_stage(job_id: str, stage: PipelineStage, **context) -> None:
        logger.info(
            f"Job {job_id}: {stage.value}",
            extra={"job_id": job_id, "stage": stage.value, **context},
        )
