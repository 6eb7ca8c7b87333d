"""Service orchestrators."""

from .processing_service import ProcessingService
from .upload_service import UploadService

__all__ = [
    "ProcessingService",
    "UploadService",
]
