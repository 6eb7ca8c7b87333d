"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - UploadModel, UploadStatus, UploadType: Upload entity and enums
  - upload_crud: CRUD operation singleton

Dependencies: sqlalchemy, docflow.configs
System role: Database adapter providing persistent storage for upload metadata
"""

from docflow.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docflow.boundary.db.connection import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docflow.boundary.db.models.upload_model import UploadModel, UploadStatus, UploadType
from docflow.boundary.db.CRUD import UploadCRUD, upload_crud

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "UploadModel",
    "UploadStatus",
    "UploadType",
    "UploadCRUD",
    "upload_crud",
]
