from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sneakers.application.interfaces.sneaker_repository import SneakerRepository
from sneakers.application.interfaces.unit_of_work import TransactionScope
from sneakers.domain.entities.sneaker import Location, Sneaker
from sneakers.domain.exceptions import SneakerNotFoundError
from sneakers.infrastructure.database.connection import AsyncSessionLocal
from sneakers.infrastructure.database.models import SneakerModel
from sneakers.infrastructure.database.unit_of_work import session_of


def _to_domain(model: SneakerModel) -> Sneaker:
    return Sneaker(
        id=model.id,
        owner_id=model.owner_id,
        title=model.title,
        description=model.description,
        address=model.address,
        location=Location(lat=model.lat, lng=model.lng),
        url=model.url,
        image=model.image,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_model(sneaker: Sneaker) -> SneakerModel:
    return SneakerModel(
        id=sneaker.id,
        owner_id=sneaker.owner_id,
        title=sneaker.title,
        description=sneaker.description,
        address=sneaker.address,
        lat=sneaker.location.lat,
        lng=sneaker.location.lng,
        url=sneaker.url,
        image=sneaker.image,
        created_at=sneaker.created_at,
        updated_at=sneaker.updated_at,
    )


class SqlAlchemySneakerRepository(SneakerRepository):
    """SQLAlchemy implementation for sneaker persistence."""

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal
    ) -> None:
        self._session_factory = session_factory

    async def get_by_id(self, sneaker_id: str) -> Sneaker | None:
        async with self._session_factory() as session:
            model = await session.get(SneakerModel, sneaker_id)
            return _to_domain(model) if model is not None else None

    async def list_by_owner(self, owner_id: str) -> list[Sneaker]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(SneakerModel)
                .where(SneakerModel.owner_id == owner_id)
                .order_by(SneakerModel.created_at.asc())
            )
            return [_to_domain(m) for m in result.scalars().all()]

    async def add(self, sneaker: Sneaker, tx: TransactionScope) -> Sneaker:
        session = session_of(tx)
        session.add(_to_model(sneaker))
        await session.flush()
        return sneaker

    async def update_details(
        self, sneaker_id: str, *, title: str, description: str
    ) -> Sneaker:
        async with self._session_factory() as session, session.begin():
            model = await session.get(SneakerModel, sneaker_id)
            if model is None:
                raise SneakerNotFoundError()

            sneaker = _to_domain(model)
            sneaker.update_details(title=title, description=description)

            model.title = sneaker.title
            model.description = sneaker.description
            model.updated_at = sneaker.updated_at
        return sneaker

    async def delete(self, sneaker_id: str, tx: TransactionScope) -> None:
        session = session_of(tx)
        await session.execute(delete(SneakerModel).where(SneakerModel.id == sneaker_id))
        await session.flush()
