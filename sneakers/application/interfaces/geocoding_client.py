from abc import ABC, abstractmethod

from sneakers.domain.entities.sneaker import Location


class GeocodingClient(ABC):
    """Port for turning a postal address into coordinates."""

    @abstractmethod
    async def resolve(self, address: str) -> Location:
        """Raises GeocodingError if the address cannot be resolved."""
        ...
