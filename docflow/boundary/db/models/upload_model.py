"""
Upload ORM model.

Represents uploaded files with processing status, metadata and the stored
processing result.

Dependencies: sqlalchemy, docflow.boundary.db.base
System role: Upload persistence for the processing pipeline
"""

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from docflow.boundary.db.base import Base, TimestampMixin, UUIDMixin, utcnow


class UploadStatus(str, enum.Enum):
    """
    Upload processing lifecycle states.

    PROCESSING: Uploaded, or a processing job has been requested
    COMPLETED: Pipeline finished; processing_result is populated
    FAILED: Processing error recorded (only when failures are marked)
    """

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class UploadType(str, enum.Enum):
    """Supported upload file types."""

    PDF = "pdf"
    HTML = "html"

    @property
    def media_type(self) -> str:
        return "application/pdf" if self is UploadType.PDF else "text/html"

    @classmethod
    def from_extension(cls, extension: str) -> "UploadType":
        """Map '.pdf' / '.html' (any case) to a type; ValueError otherwise."""
        return cls(extension.lower().lstrip("."))


class UploadModel(Base, UUIDMixin, TimestampMixin):
    """
    Upload ORM model tracking file metadata and pipeline state.

    Attributes:
        id: UUID primary key (auto-generated); doubles as the job id
        filename: Stored filename on disk
        original_name: Filename supplied by the user
        path: Absolute or relative path of the stored file
        uploaded_at: Upload timestamp (UTC)
        status: Current processing state
        type: pdf or html
        size: File size in bytes
        processing_result: JSON result (object for HTML, page list for PDF)
        error_message: Failure details when status is FAILED
    """

    __tablename__ = "uploads"

    filename: Mapped[str] = mapped_column(String(255), nullable=False)

    original_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Location of the stored file",
    )

    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    status: Mapped[UploadStatus] = mapped_column(
        Enum(UploadStatus, native_enum=False),
        nullable=False,
        default=UploadStatus.PROCESSING,
    )

    type: Mapped[UploadType] = mapped_column(
        Enum(UploadType, native_enum=False),
        nullable=False,
    )

    size: Mapped[int] = mapped_column(BigInteger, nullable=False)

    processing_result: Mapped[Any | None] = mapped_column(
        JSON,
        nullable=True,
        doc="Serialized processing result",
    )

    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if processing failed",
    )
