"""Document processing data models."""

from .chunk import Chunk
from .processing_result import (
    HtmlProcessingResult,
    PdfPageResult,
    ProcessingResult,
    chunk_count,
    serialize_result,
)

__all__ = [
    "Chunk",
    "HtmlProcessingResult",
    "PdfPageResult",
    "ProcessingResult",
    "chunk_count",
    "serialize_result",
]
