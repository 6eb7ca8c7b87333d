"""
Test doubles and document builders shared across the suite.

Dependencies: PyMuPDF, docflow.core.document_processing
System role: Test support
"""

import asyncio
from pathlib import Path
from typing import Any

import fitz  # PyMuPDF

from docflow.configs.pipeline import PipelineSettings
from docflow.core.document_processing import DocumentPipeline
from docflow.core.document_processing.tasks import ChunkingTask

SAMPLE_HTML = """<html>
<head><title>Sample</title><style>body { color: red; }</style></head>
<body>
<h1>Quarterly report</h1>

<p>Revenue grew in every region.</p>

<p>Costs were flat.</p>
<script>console.log("ignored")</script>
</body>
</html>
"""


class FakeEmbeddingTask:
    """Embedding task returning deterministic vectors and recording calls."""

    def __init__(self, fail_on: int | None = None, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self.fail_on = fail_on
        self.error = error
        self.in_flight = 0
        self.max_in_flight = 0

    async def embed(self, text: str) -> list[float]:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            self.calls.append(text)
            if self.fail_on is not None and len(self.calls) == self.fail_on:
                raise self.error or RuntimeError("embedding failed")
            return [float(len(text)), 0.5, 1.0]
        finally:
            self.in_flight -= 1


class FakeOcrTask:
    """OCR task returning canned text per call."""

    def __init__(self, pages: list[str], error: Exception | None = None) -> None:
        self.pages = pages
        self.error = error
        self.calls: list[str] = []

    async def recognize(self, image_path: str) -> str:
        self.calls.append(image_path)
        if self.error is not None:
            raise self.error
        return self.pages[len(self.calls) - 1]


class RecordingPublisher:
    """Progress publisher collecting events as (kind, payload) tuples."""

    def __init__(self, job_id: str = "job-1") -> None:
        self.job_id = job_id
        self.events: list[tuple[str, dict[str, Any]]] = []

    def processing_starting(self, message: str = "Processing started.") -> None:
        self.events.append(("processingStarting", {"message": message}))

    def progress_update(self, chunk_index, total_chunks, page_number=None) -> None:
        self.events.append((
            "progressUpdate",
            {"chunkIndex": chunk_index, "totalChunks": total_chunks, "pageNumber": page_number},
        ))

    def finalizing(self, message: str = "Finalizing processing.") -> None:
        self.events.append(("finalizing", {"message": message}))

    def completed(self, result) -> None:
        self.events.append(("completed", {"result": result}))

    def error(self, message: str) -> None:
        self.events.append(("error", {"message": message}))

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


def write_pdf(path: Path, pages: int) -> Path:
    """Write a PDF with blank pages."""
    document = fitz.open()
    for _ in range(pages):
        document.new_page(width=200, height=200)
    document.save(str(path))
    document.close()
    return path


def build_pipeline(
    tmp_path: Path,
    embedding_task=None,
    ocr_task=None,
    max_chunk_length: int = 500,
) -> DocumentPipeline:
    """DocumentPipeline wired to fakes and a temp pages directory."""
    settings = PipelineSettings(
        max_chunk_length=max_chunk_length,
        pages_directory=str(tmp_path / "pages"),
    )
    return DocumentPipeline(
        settings,
        chunking_task=ChunkingTask(max_length=max_chunk_length),
        embedding_task=embedding_task or FakeEmbeddingTask(),
        ocr_task=ocr_task or FakeOcrTask(pages=[]),
    )
