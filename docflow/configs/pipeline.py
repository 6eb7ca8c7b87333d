"""
Configuration settings for the document processing pipeline.

Provides environment-based configuration for chunking, embedding and OCR calls.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field

from docflow.configs.base import BaseSettings, settings_config


class PipelineSettings(BaseSettings):
    """Settings for the chunk-and-embed pipeline."""

    model_config = settings_config("DOC_PIPELINE_")

    # Chunking settings
    max_chunk_length: int = Field(
        default=500,
        description="Maximum chunk size in characters (single oversized paragraphs excepted)",
    )

    # External services
    embed_api_url: str = Field(
        default="http://localhost:4002/embed",
        description="Embedding endpoint accepting {'text': ...}",
    )
    ocr_api_url: str = Field(
        default="http://localhost:4001/ocr",
        description="OCR endpoint accepting raw page bytes",
    )
    request_timeout: float | None = Field(
        default=None,
        description="Timeout in seconds for external calls (None disables it)",
    )
    embedding_dimensions: int | None = Field(
        default=None,
        description="Expected embedding length; responses of another length are rejected",
    )

    # Page rendering
    pages_directory: str = Field(
        default="./uploads/pages",
        description="Directory for per-page files handed to OCR",
    )

    # Failure handling
    mark_failed_on_error: bool = Field(
        default=False,
        description="Mark uploads as failed when a job errors (default leaves them processing)",
    )

    # Progress streaming
    progress_queue_size: int = Field(
        default=1000,
        description="Per-subscriber buffer size for progress events",
    )
