"""
Upload API endpoints.

Routes:
- POST /api/uploads - Upload a PDF or HTML file
- GET /api/uploads - List uploads, newest first
- GET /api/uploads/details/{id} - Upload metadata and processing result
- POST /api/uploads/process/{id} - Start the processing pipeline
- GET /api/uploads/{id} - Stream stored file bytes
- DELETE /api/uploads/{id} - Delete file and metadata

Dependencies: docflow.application.services, docflow.models
System role: Upload HTTP API
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, UploadFile
from fastapi.responses import FileResponse

from docflow.api.deps import get_processing_service, get_upload_service
from docflow.application.services import ProcessingService, UploadService
from docflow.boundary.db.models.upload_model import UploadModel
from docflow.core.exceptions import NotFoundError, StorageError, ValidationError
from docflow.models.upload import (
    MessageResponse,
    ProcessJobResponse,
    UploadDetailsResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


def _enum_value(value) -> str:
    return value.value if hasattr(value, "value") else value


def to_upload_response(upload: UploadModel) -> UploadResponse:
    """Map an upload record to its summary schema."""
    return UploadResponse(
        id=upload.id,
        filename=upload.original_name,
        uploaded_at=upload.uploaded_at,
        status=_enum_value(upload.status),
        type=_enum_value(upload.type),
    )


@router.post("", response_model=UploadResponse, status_code=201)
async def create_upload(
    file: UploadFile | None = File(None),
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """
    Upload a document via multipart form.

    Args:
        file: Uploaded file (multipart field 'file')
        upload_service: Injected UploadService

    Returns:
        UploadResponse: Created upload summary

    Raises:
        HTTPException(400): Missing, disallowed or oversized file
        HTTPException(500): File or metadata could not be saved
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    logger.info("Upload request received", extra={"original_name": file.filename})

    try:
        content = await file.read()
        upload = await upload_service.create_upload(file.filename, content)
    except ValidationError as e:
        logger.warning(
            "Upload rejected",
            extra={"original_name": file.filename, "error": str(e)},
        )
        raise HTTPException(status_code=400, detail=e.message)
    except StorageError as e:
        logger.exception("Failed to store upload", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail=e.message)
    finally:
        await file.close()

    return to_upload_response(upload)


@router.get("", response_model=list[UploadResponse])
async def list_uploads(
    upload_service: UploadService = Depends(get_upload_service),
) -> list[UploadResponse]:
    """
    List uploads, newest first.

    Raises:
        HTTPException(500): Database error
    """
    try:
        uploads = await upload_service.list_uploads()
    except Exception as e:
        logger.exception("Failed to retrieve uploads", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Failed to retrieve uploads")
    return [to_upload_response(upload) for upload in uploads]


@router.get("/details/{upload_id}", response_model=UploadDetailsResponse)
async def get_upload_details(
    upload_id: str,
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadDetailsResponse:
    """
    Get upload metadata and processing result.

    The result is null until a processing job has completed.

    Raises:
        HTTPException(404): Upload not found
    """
    try:
        upload = await upload_service.get_upload(upload_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return UploadDetailsResponse(
        id=upload.id,
        filename=upload.original_name,
        status=_enum_value(upload.status),
        type=_enum_value(upload.type),
        size=upload.size,
        result=upload.processing_result,
        error_message=upload.error_message,
    )


@router.post("/process/{upload_id}", response_model=ProcessJobResponse, status_code=202)
async def process_upload(
    upload_id: str,
    background_tasks: BackgroundTasks,
    upload_service: UploadService = Depends(get_upload_service),
    processing_service: ProcessingService = Depends(get_processing_service),
) -> ProcessJobResponse:
    """
    Start the processing pipeline for an upload.

    Responds immediately; progress and the result are pushed to WebSocket
    subscribers of the returned jobId.

    Raises:
        HTTPException(404): Upload not found
    """
    try:
        upload = await upload_service.start_processing(upload_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    job_id = str(upload.id)
    background_tasks.add_task(processing_service.run_job, upload.id)
    logger.info("Processing job scheduled", extra={"job_id": job_id})

    return ProcessJobResponse(message="Processing started", job_id=job_id)


@router.get("/{upload_id}")
async def download_upload(
    upload_id: str,
    upload_service: UploadService = Depends(get_upload_service),
) -> FileResponse:
    """
    Stream the stored file.

    Raises:
        HTTPException(404): Upload record or file on disk not found
    """
    try:
        upload = await upload_service.get_upload_file(upload_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return FileResponse(
        upload.path,
        media_type=upload.type.media_type,
        filename=upload.original_name,
        content_disposition_type="inline",
    )


@router.delete("/{upload_id}", response_model=MessageResponse)
async def delete_upload(
    upload_id: str,
    upload_service: UploadService = Depends(get_upload_service),
) -> MessageResponse:
    """
    Delete an upload's file and metadata.

    A file already missing on disk is tolerated.

    Raises:
        HTTPException(404): Upload not found
        HTTPException(500): File removal failed
    """
    try:
        await upload_service.delete_upload(upload_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except StorageError as e:
        logger.exception(
            "Failed to delete upload",
            extra={"upload_id": str(upload_id), "error": str(e)},
        )
        raise HTTPException(status_code=500, detail=e.message)

    return MessageResponse(message="File deleted successfully.")
