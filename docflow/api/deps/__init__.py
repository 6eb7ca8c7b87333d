"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_document_pipeline,
    get_file_storage,
    get_processing_service,
    get_progress_broker,
    get_service_cache,
    get_session_factory,
    get_settings_dependency,
    get_upload_service,
)

__all__ = [
    "ServiceCache",
    "get_document_pipeline",
    "get_file_storage",
    "get_processing_service",
    "get_progress_broker",
    "get_service_cache",
    "get_session_factory",
    "get_settings_dependency",
    "get_upload_service",
]
