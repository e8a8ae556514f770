"""
FastAPI dependency injection wiring.

Each dependency function returns a fully-constructed object with its
collaborators injected, keeping the route handlers thin.
"""
from fastapi import Depends, Header, HTTPException, status

from sneakers.application.coordinators.sneaker_coordinator import SneakerCoordinator
from sneakers.application.interfaces.geocoding_client import GeocodingClient
from sneakers.application.interfaces.image_storage import ImageStorage
from sneakers.application.interfaces.owner_repository import OwnerRepository
from sneakers.application.interfaces.sneaker_repository import SneakerRepository
from sneakers.application.interfaces.unit_of_work import UnitOfWork
from sneakers.application.services.image_lifecycle import ImageLifecycleManager
from sneakers.infrastructure.database.repositories.owner_repository import (
    SqlAlchemyOwnerRepository,
)
from sneakers.infrastructure.database.repositories.sneaker_repository import (
    SqlAlchemySneakerRepository,
)
from sneakers.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork
from sneakers.infrastructure.external_services.google_geocoding_client import (
    GoogleGeocodingClient,
)
from sneakers.infrastructure.storage.local_image_storage import LocalImageStorage


# ---- Low-level dependencies ------------------------------------------------

def get_sneaker_repo() -> SneakerRepository:
    return SqlAlchemySneakerRepository()


def get_owner_repo() -> OwnerRepository:
    return SqlAlchemyOwnerRepository()


def get_unit_of_work() -> UnitOfWork:
    return SqlAlchemyUnitOfWork()


def get_geocoder() -> GeocodingClient:
    return GoogleGeocodingClient()


def get_image_storage() -> ImageStorage:
    return LocalImageStorage()


def get_image_lifecycle(
    storage: ImageStorage = Depends(get_image_storage),
) -> ImageLifecycleManager:
    return ImageLifecycleManager(storage)


# ---- Caller identity -------------------------------------------------------

def get_caller_id(x_user_id: str | None = Header(default=None)) -> str:
    """Identity asserted by the upstream authentication gateway."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication failed!")
    return x_user_id


# ---- Coordinator -----------------------------------------------------------

def get_sneaker_coordinator(
    sneaker_repo: SneakerRepository = Depends(get_sneaker_repo),
    owner_repo: OwnerRepository = Depends(get_owner_repo),
    unit_of_work: UnitOfWork = Depends(get_unit_of_work),
    geocoder: GeocodingClient = Depends(get_geocoder),
    image_lifecycle: ImageLifecycleManager = Depends(get_image_lifecycle),
) -> SneakerCoordinator:
    return SneakerCoordinator(sneaker_repo, owner_repo, unit_of_work, geocoder, image_lifecycle)
