"""
Shared fixtures for tests that run against a real database.

Each test gets its own on-disk SQLite file (via aiosqlite) with foreign keys
enforced, so transactions and constraints behave like they do in Postgres.
"""
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sneakers.domain.entities.owner import Owner
from sneakers.infrastructure.database.connection import Base
from sneakers.infrastructure.database.models import OwnerModel, OwnerSneakerModel, SneakerModel  # noqa: F401
from sneakers.infrastructure.database.repositories.owner_repository import (
    SqlAlchemyOwnerRepository,
)
from sneakers.infrastructure.database.repositories.sneaker_repository import (
    SqlAlchemySneakerRepository,
)
from sneakers.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork


@pytest_asyncio.fixture()
async def session_factory(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'sneakers.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest_asyncio.fixture()
async def sneaker_repo(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlAlchemySneakerRepository:
    return SqlAlchemySneakerRepository(session_factory)


@pytest_asyncio.fixture()
async def owner_repo(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlAlchemyOwnerRepository:
    return SqlAlchemyOwnerRepository(session_factory)


@pytest_asyncio.fixture()
async def unit_of_work(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory)


@pytest_asyncio.fixture()
async def seeded_owner(
    owner_repo: SqlAlchemyOwnerRepository, unit_of_work: SqlAlchemyUnitOfWork
) -> Owner:
    owner = Owner(id="u1", name="Jordan")
    async with unit_of_work.begin() as tx:
        await owner_repo.save(owner, tx)
    return owner
