from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sneakers.application.interfaces.unit_of_work import TransactionScope, UnitOfWork
from sneakers.infrastructure.database.connection import AsyncSessionLocal


class SqlAlchemyTransaction(TransactionScope):
    """A transaction scope backed by one AsyncSession inside session.begin()."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session


def session_of(tx: TransactionScope) -> AsyncSession:
    if not isinstance(tx, SqlAlchemyTransaction):
        raise TypeError(f"Expected SqlAlchemyTransaction, got {type(tx).__name__}")
    return tx.session


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Opens one session per transaction scope; commits or rolls back as a whole."""

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal
    ) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[SqlAlchemyTransaction]:
        async with self._session_factory() as session:
            async with session.begin():
                yield SqlAlchemyTransaction(session)
