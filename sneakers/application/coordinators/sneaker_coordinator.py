from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import structlog

from sneakers.application.interfaces.geocoding_client import GeocodingClient
from sneakers.application.interfaces.owner_repository import OwnerRepository
from sneakers.application.interfaces.sneaker_repository import SneakerRepository
from sneakers.application.interfaces.unit_of_work import UnitOfWork
from sneakers.application.services.image_lifecycle import ImageLifecycleManager
from sneakers.domain.entities.owner import Owner
from sneakers.domain.entities.sneaker import Sneaker
from sneakers.domain.exceptions import (
    OwnerNotFoundError,
    SneakerNotFoundError,
    SneakerServiceError,
    TransientFailureError,
    UnauthorizedError,
)
from sneakers.domain.policies.authorization_guard import AuthorizationGuard

logger = structlog.get_logger(__name__)


@contextmanager
def _storage_failure(message: str, event: str, **context: Any) -> Iterator[None]:
    """Convert unexpected storage errors into TransientFailureError."""
    try:
        yield
    except SneakerServiceError:
        raise
    except Exception as exc:
        logger.exception(event, **context)
        raise TransientFailureError(message) from exc


@dataclass
class CreateSneakerInput:
    owner_id: str
    title: str
    description: str
    address: str
    url: str
    image: str


@dataclass
class UpdateSneakerInput:
    sneaker_id: str
    caller_id: str
    title: str
    description: str


class SneakerCoordinator:
    """
    Keeps sneakers, their owners' membership sets and their image artifacts
    consistent.

    Create and delete write the sneaker record and the owner's membership set
    inside one transaction scope, so a reader never sees one without the
    other. Update and delete are gated on ownership. Image artifacts are
    removed only after a delete has committed.
    """

    def __init__(
        self,
        sneaker_repo: SneakerRepository,
        owner_repo: OwnerRepository,
        unit_of_work: UnitOfWork,
        geocoder: GeocodingClient,
        image_lifecycle: ImageLifecycleManager,
        guard: AuthorizationGuard | None = None,
    ) -> None:
        self._sneaker_repo = sneaker_repo
        self._owner_repo = owner_repo
        self._uow = unit_of_work
        self._geocoder = geocoder
        self._image_lifecycle = image_lifecycle
        self._guard = guard or AuthorizationGuard()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_by_id(self, sneaker_id: str) -> Sneaker:
        return await self._load_sneaker(
            sneaker_id, "Something went wrong, could not find a sneaker."
        )

    async def get_by_owner(self, owner_id: str) -> list[Sneaker]:
        """
        Return every sneaker owned by owner_id.

        An owner with no sneakers is reported as not found, the same kind as
        an unknown owner but with its own message.
        """
        with _storage_failure(
            "Fetching sneakers failed, please try again later.",
            "sneakers_by_owner_lookup_failed",
            owner_id=owner_id,
        ):
            owner = await self._owner_repo.get_by_id(owner_id)
            if owner is None:
                raise OwnerNotFoundError()
            if not owner.sneaker_ids:
                raise SneakerNotFoundError("Could not find sneakers for the provided user id.")
            sneakers = await self._sneaker_repo.list_by_owner(owner_id)

        if not sneakers:
            raise SneakerNotFoundError("Could not find sneakers for the provided user id.")
        return sneakers

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, input_data: CreateSneakerInput) -> Sneaker:
        # May raise GeocodingError; nothing has been written yet
        location = await self._geocoder.resolve(input_data.address)

        owner = await self._load_owner(
            input_data.owner_id, "Creating sneaker failed, please try again."
        )

        sneaker = Sneaker.create(
            owner_id=owner.id,
            title=input_data.title,
            description=input_data.description,
            address=input_data.address,
            location=location,
            url=input_data.url,
            image=input_data.image,
        )

        with _storage_failure(
            "Creating sneaker failed, please try again.",
            "sneaker_create_failed",
            owner_id=owner.id,
            sneaker_id=sneaker.id,
        ):
            async with self._uow.begin() as tx:
                await self._sneaker_repo.add(sneaker, tx)
                await self._owner_repo.add_sneaker_ref(owner, sneaker.id, tx)
                await self._owner_repo.save(owner, tx)

        logger.info(
            "sneaker_created",
            sneaker_id=sneaker.id,
            owner_id=owner.id,
            lat=location.lat,
            lng=location.lng,
        )
        return sneaker

    async def update(self, input_data: UpdateSneakerInput) -> Sneaker:
        failure = "Something went wrong, could not update sneaker."
        sneaker = await self._load_sneaker(input_data.sneaker_id, failure)

        if not self._guard.is_owner(input_data.caller_id, sneaker):
            logger.warning(
                "sneaker_update_denied",
                sneaker_id=sneaker.id,
                caller_id=input_data.caller_id,
            )
            raise UnauthorizedError("You are not allowed to edit this sneaker.")

        with _storage_failure(failure, "sneaker_update_failed", sneaker_id=sneaker.id):
            updated = await self._sneaker_repo.update_details(
                sneaker.id,
                title=input_data.title,
                description=input_data.description,
            )

        logger.info("sneaker_updated", sneaker_id=updated.id)
        return updated

    async def delete(self, sneaker_id: str, caller_id: str) -> None:
        failure = "Something went wrong, could not delete sneaker."
        sneaker = await self._load_sneaker(sneaker_id, failure)

        if not self._guard.is_owner(caller_id, sneaker):
            logger.warning("sneaker_delete_denied", sneaker_id=sneaker.id, caller_id=caller_id)
            raise UnauthorizedError("You are not allowed to delete this sneaker.")

        owner = await self._load_owner(sneaker.owner_id, failure)
        if not owner.owns(sneaker.id):
            logger.warning("sneaker_membership_missing", sneaker_id=sneaker.id, owner_id=owner.id)
        image_path = sneaker.image

        with _storage_failure(failure, "sneaker_delete_failed", sneaker_id=sneaker.id):
            async with self._uow.begin() as tx:
                # The membership row references the sneaker row, drop it first
                await self._owner_repo.remove_sneaker_ref(owner, sneaker.id, tx)
                await self._sneaker_repo.delete(sneaker.id, tx)
                await self._owner_repo.save(owner, tx)

        logger.info("sneaker_deleted", sneaker_id=sneaker.id, owner_id=owner.id)

        await self._image_lifecycle.discard(image_path)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _load_sneaker(self, sneaker_id: str, failure: str) -> Sneaker:
        with _storage_failure(failure, "sneaker_lookup_failed", sneaker_id=sneaker_id):
            sneaker = await self._sneaker_repo.get_by_id(sneaker_id)
        if sneaker is None:
            raise SneakerNotFoundError()
        return sneaker

    async def _load_owner(self, owner_id: str, failure: str) -> Owner:
        with _storage_failure(failure, "owner_lookup_failed", owner_id=owner_id):
            owner = await self._owner_repo.get_by_id(owner_id)
        if owner is None:
            raise OwnerNotFoundError()
        return owner
