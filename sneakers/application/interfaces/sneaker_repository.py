from abc import ABC, abstractmethod

from sneakers.application.interfaces.unit_of_work import TransactionScope
from sneakers.domain.entities.sneaker import Sneaker


class SneakerRepository(ABC):
    """Port for persisting and querying Sneaker records."""

    @abstractmethod
    async def get_by_id(self, sneaker_id: str) -> Sneaker | None:
        ...

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> list[Sneaker]:
        ...

    @abstractmethod
    async def add(self, sneaker: Sneaker, tx: TransactionScope) -> Sneaker:
        ...

    @abstractmethod
    async def update_details(
        self, sneaker_id: str, *, title: str, description: str
    ) -> Sneaker:
        """Raises SneakerNotFoundError if the sneaker does not exist."""
        ...

    @abstractmethod
    async def delete(self, sneaker_id: str, tx: TransactionScope) -> None:
        ...
