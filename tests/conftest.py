"""
Shared test fixtures and configuration for entire test suite.

Provides: async SQLite databases, temp storage, sample documents and an API
client wired to fake embedding and OCR services.
Dependencies: pytest, sqlalchemy, aiosqlite, fastapi
System role: Test infrastructure and fixture management
"""

import asyncio
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from docflow.api.deps import (
    get_document_pipeline,
    get_file_storage,
    get_progress_broker,
    get_session_factory,
)
from docflow.boundary.db import get_async_db
from docflow.boundary.db.base import Base
from docflow.boundary.storage import FileStorage
from docflow.core.progress_broker import ProgressBroker
from docflow.main import create_app

from fakes import SAMPLE_HTML, FakeEmbeddingTask, FakeOcrTask, build_pipeline, write_pdf


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


async def _create_tables(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
async def file_session_factory(tmp_path):
    """Session factory over a file-backed SQLite database (async tests)."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'docflow_jobs.db'}",
        poolclass=NullPool,
    )
    await _create_tables(engine)
    yield async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
def storage(tmp_path) -> FileStorage:
    """File storage rooted in a temp directory."""
    return FileStorage(tmp_path / "uploads")


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def sample_pdf(tmp_path) -> Path:
    """Two-page blank PDF."""
    return write_pdf(tmp_path / "sample.pdf", pages=2)


@pytest.fixture
def api(tmp_path, storage):
    """
    FastAPI TestClient with database, storage, broker and pipeline overridden.

    The database is a file-backed SQLite without pooling: every request (and
    every background job) runs on its own event loop, so connections must
    not outlive a session. Lifespan is not entered.

    Yields:
        SimpleNamespace: client, broker, storage, embedder, ocr and session_factory
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'docflow_api.db'}",
        poolclass=NullPool,
    )
    asyncio.run(_create_tables(engine))
    session_factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)

    broker = ProgressBroker()
    embedder = FakeEmbeddingTask()
    ocr = FakeOcrTask(pages=["Scanned page one", "Scanned page two"])
    pipeline = build_pipeline(tmp_path, embedding_task=embedder, ocr_task=ocr)

    async def override_db():
        async with session_factory() as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_async_db] = override_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_file_storage] = lambda: storage
    app.dependency_overrides[get_progress_broker] = lambda: broker
    app.dependency_overrides[get_document_pipeline] = lambda: pipeline

    yield SimpleNamespace(
        client=TestClient(app),
        broker=broker,
        storage=storage,
        embedder=embedder,
        ocr=ocr,
        session_factory=session_factory,
    )

    app.dependency_overrides.clear()
