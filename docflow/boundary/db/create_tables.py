"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, docflow.boundary.db
System role: Database schema initialization

Usage:
    python -m docflow.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from docflow.boundary.db.base import Base
from docflow.boundary.db.connection import dispose_engine, get_async_engine

# Import all models to register them with Base.metadata
from docflow.boundary.db.models.upload_model import UploadModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Engine to use (defaults to the configured engine)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})


async def _main() -> None:
    await create_all_tables()
    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(_main())
