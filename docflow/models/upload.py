"""
Upload domain models and schemas.

Request/response schemas for upload operations. Field names are exposed in
camelCase to match the web client.

Dependencies: pydantic
System role: Upload API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UploadResponse(CamelModel):
    """Upload summary returned by create and list operations."""

    id: uuid.UUID
    filename: str = Field(description="Original filename supplied by the user")
    uploaded_at: datetime
    status: str
    type: str


class UploadDetailsResponse(CamelModel):
    """Upload metadata together with its processing result."""

    id: uuid.UUID
    filename: str
    status: str
    type: str
    size: int
    result: Any | None = Field(
        default=None,
        description="Processing result (object for HTML, page list for PDF)",
    )
    error_message: str | None = None


class ProcessJobResponse(CamelModel):
    """Acknowledgement that a processing job was scheduled."""

    message: str
    job_id: str


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str
