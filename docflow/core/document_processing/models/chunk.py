"""
Chunk domain model for the document processing pipeline.

Represents a bounded slice of extracted text paired with its embedding vector.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Document chunk with its embedding vector. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text content")
    embedding: list[float] = Field(description="Embedding vector")
