"""
Processing result models.

HTML documents produce a single result; PDF documents produce one result
per page. Both serialise with camelCase keys, which is the shape stored on
the upload record and pushed in the completed event.

Dependencies: pydantic
System role: Pipeline output contracts
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .chunk import Chunk


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HtmlProcessingResult(_CamelModel):
    """Result of processing an HTML document."""

    full_html: str | None = Field(default=None, description="Original markup")
    extracted_text: str = Field(description="Body text content")
    chunks: list[Chunk] = Field(default_factory=list)


class PdfPageResult(_CamelModel):
    """Result of processing one PDF page."""

    page_number: int = Field(ge=1, description="1-based page number")
    image_path: str = Field(description="Rendered page file handed to OCR")
    extracted_text: str = Field(description="OCR output for the page")
    chunks: list[Chunk] = Field(default_factory=list)


ProcessingResult = Union[HtmlProcessingResult, list[PdfPageResult]]


def serialize_result(result: ProcessingResult) -> dict[str, Any] | list[dict[str, Any]]:
    """Convert a processing result to its JSON-ready camelCase form."""
    if isinstance(result, list):
        return [page.model_dump(by_alias=True) for page in result]
    return result.model_dump(by_alias=True)


def chunk_count(result: ProcessingResult) -> int:
    """Total number of chunks across a result."""
    if isinstance(result, list):
        return sum(len(page.chunks) for page in result)
    return len(result.chunks)
