from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sneakers.application.interfaces.owner_repository import OwnerRepository
from sneakers.application.interfaces.unit_of_work import TransactionScope
from sneakers.domain.entities.owner import Owner
from sneakers.infrastructure.database.connection import AsyncSessionLocal
from sneakers.infrastructure.database.models import OwnerModel, OwnerSneakerModel
from sneakers.infrastructure.database.unit_of_work import session_of


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemyOwnerRepository(OwnerRepository):
    """
    SQLAlchemy-backed implementation of OwnerRepository.

    Membership changes are staged on the transaction's session and written
    together with the owner row by save().
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal
    ) -> None:
        self._session_factory = session_factory

    async def get_by_id(self, owner_id: str) -> Owner | None:
        async with self._session_factory() as session:
            model = await session.get(OwnerModel, owner_id)
            if model is None:
                return None
            result = await session.execute(
                select(OwnerSneakerModel.sneaker_id).where(OwnerSneakerModel.owner_id == owner_id)
            )
            return Owner(id=model.id, name=model.name, sneaker_ids=set(result.scalars().all()))

    async def add_sneaker_ref(
        self, owner: Owner, sneaker_id: str, tx: TransactionScope
    ) -> None:
        session_of(tx).add(OwnerSneakerModel(owner_id=owner.id, sneaker_id=sneaker_id))
        owner.add_sneaker(sneaker_id)

    async def remove_sneaker_ref(
        self, owner: Owner, sneaker_id: str, tx: TransactionScope
    ) -> None:
        await session_of(tx).execute(
            delete(OwnerSneakerModel).where(
                OwnerSneakerModel.owner_id == owner.id,
                OwnerSneakerModel.sneaker_id == sneaker_id,
            )
        )
        owner.remove_sneaker(sneaker_id)

    async def save(self, owner: Owner, tx: TransactionScope) -> None:
        session = session_of(tx)
        model = await session.get(OwnerModel, owner.id)
        if model is None:
            session.add(OwnerModel(id=owner.id, name=owner.name))
        else:
            model.name = owner.name
            model.updated_at = _utcnow()
        await session.flush()
