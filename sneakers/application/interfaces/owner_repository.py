from abc import ABC, abstractmethod

from sneakers.application.interfaces.unit_of_work import TransactionScope
from sneakers.domain.entities.owner import Owner


class OwnerRepository(ABC):
    """Port for owners and their sneaker membership sets."""

    @abstractmethod
    async def get_by_id(self, owner_id: str) -> Owner | None:
        ...

    @abstractmethod
    async def add_sneaker_ref(
        self, owner: Owner, sneaker_id: str, tx: TransactionScope
    ) -> None:
        ...

    @abstractmethod
    async def remove_sneaker_ref(
        self, owner: Owner, sneaker_id: str, tx: TransactionScope
    ) -> None:
        ...

    @abstractmethod
    async def save(self, owner: Owner, tx: TransactionScope) -> None:
        ...
