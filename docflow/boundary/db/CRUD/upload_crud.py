"""
Upload CRUD operations.

Persists upload records and walks them through the processing lifecycle:
pending -> processing -> completed | failed. Every write flushes but does
not commit; the calling service owns the transaction.

Dependencies: sqlalchemy, docflow.boundary.db.models.upload_model
System role: Upload persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.boundary.db.models.upload_model import UploadModel, UploadStatus

MAX_ERROR_LENGTH = 2048


class UploadCRUD:
    """Queries and status transitions for UploadModel."""

    async def create(self, session: AsyncSession, **fields: Any) -> UploadModel:
        """
        Insert an upload record.

        Args:
            session: Async database session
            **fields: UploadModel column values

        Returns:
            UploadModel with generated id and uploaded_at
        """
        upload = UploadModel(**fields)
        session.add(upload)
        await session.flush()
        await session.refresh(upload)
        return upload

    async def get_by_id(self, session: AsyncSession, id: UUID) -> UploadModel | None:
        result = await session.execute(select(UploadModel).where(UploadModel.id == id))
        return result.scalar_one_or_none()

    async def list_newest_first(
        self,
        session: AsyncSession,
        limit: int | None = None,
    ) -> Sequence[UploadModel]:
        """
        Retrieve uploads ordered by upload time, newest first.

        Args:
            session: Async database session
            limit: Maximum number of uploads to return

        Returns:
            Sequence of UploadModels
        """
        stmt = select(UploadModel).order_by(UploadModel.uploaded_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """Delete an upload record; False when no such record exists."""
        result = await session.execute(delete(UploadModel).where(UploadModel.id == id))
        return result.rowcount > 0

    async def set_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: UploadStatus,
        error_message: str | None = None,
    ) -> UploadModel | None:
        """
        Update upload processing status.

        Args:
            session: Async database session
            id: Upload UUID
            status: New processing status
            error_message: Error details if status is FAILED

        Returns:
            Updated UploadModel if found, None otherwise
        """
        fields: dict[str, Any] = {"status": status}
        if error_message is not None:
            fields["error_message"] = error_message
        return await self._update(session, id, **fields)

    async def mark_completed(
        self,
        session: AsyncSession,
        id: UUID,
        processing_result: Any,
    ) -> UploadModel | None:
        """Store the JSON-ready processing result and clear any earlier error."""
        return await self._update(
            session,
            id,
            status=UploadStatus.COMPLETED,
            processing_result=processing_result,
            error_message=None,
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        error_message: str,
    ) -> UploadModel | None:
        """Mark upload as failed; the message is truncated to MAX_ERROR_LENGTH."""
        return await self.set_status(
            session, id, UploadStatus.FAILED, error_message[:MAX_ERROR_LENGTH]
        )

    async def _update(self, session: AsyncSession, id: UUID, **fields: Any) -> UploadModel | None:
        stmt = (
            update(UploadModel)
            .where(UploadModel.id == id)
            .values(**fields)
            .returning(UploadModel)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


upload_crud = UploadCRUD()
