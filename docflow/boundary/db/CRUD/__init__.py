"""
CRUD operations for database models.

Usage:
    from docflow.boundary.db.CRUD import upload_crud

    upload = await upload_crud.get_by_id(db, upload_id)
"""

from docflow.boundary.db.CRUD.upload_crud import UploadCRUD, upload_crud

__all__ = [
    "UploadCRUD",
    "upload_crud",
]
