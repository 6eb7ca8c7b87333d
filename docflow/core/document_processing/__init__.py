"""
Document processing pipeline.

Exports the orchestrator and its result models.
"""

from .entrypoint import DocumentPipeline, PipelineStage
from .models import (
    Chunk,
    HtmlProcessingResult,
    PdfPageResult,
    ProcessingResult,
    serialize_result,
)

__all__ = [
    "Chunk",
    "DocumentPipeline",
    "HtmlProcessingResult",
    "PdfPageResult",
    "PipelineStage",
    "ProcessingResult",
    "serialize_result",
]
