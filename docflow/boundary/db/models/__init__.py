"""ORM models."""

from docflow.boundary.db.models.upload_model import UploadModel, UploadStatus, UploadType

__all__ = ["UploadModel", "UploadStatus", "UploadType"]
