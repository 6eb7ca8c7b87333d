"""Document processing tasks."""

from .chunking_task import ChunkingTask, paragraph_chunk
from .embedding_task import EmbeddingTask
from .extraction_task import HtmlExtractionTask
from .ocr_task import OcrTask
from .page_render_task import PageRenderTask

__all__ = [
    "ChunkingTask",
    "EmbeddingTask",
    "HtmlExtractionTask",
    "OcrTask",
    "PageRenderTask",
    "paragraph_chunk",
]
