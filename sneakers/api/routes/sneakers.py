from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from sneakers.api.dependencies import (
    get_caller_id,
    get_image_lifecycle,
    get_image_storage,
    get_sneaker_coordinator,
)
from sneakers.api.schemas.sneaker_responses import (
    LocationResponse,
    MessageResponse,
    SneakerEnvelope,
    SneakerListEnvelope,
    SneakerResponse,
    UpdateSneakerRequest,
)
from sneakers.application.coordinators.sneaker_coordinator import (
    CreateSneakerInput,
    SneakerCoordinator,
    UpdateSneakerInput,
)
from sneakers.application.interfaces.image_storage import ImageStorage
from sneakers.application.services.image_lifecycle import ImageLifecycleManager
from sneakers.domain.entities.sneaker import Sneaker
from sneakers.domain.exceptions import SneakerServiceError

router = APIRouter(prefix="/api/sneakers", tags=["sneakers"])

_STATUS_BY_KIND: dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "geocoding_failure": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "invalid_image": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "transient_failure": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _to_http_exception(exc: SneakerServiceError) -> HTTPException:
    return HTTPException(
        status_code=_STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=exc.message,
    )


def _sneaker_to_response(sneaker: Sneaker) -> SneakerResponse:
    return SneakerResponse(
        id=sneaker.id,
        owner_id=sneaker.owner_id,
        title=sneaker.title,
        description=sneaker.description,
        address=sneaker.address,
        location=LocationResponse(lat=sneaker.location.lat, lng=sneaker.location.lng),
        url=sneaker.url,
        image=sneaker.image,
        created_at=sneaker.created_at,
        updated_at=sneaker.updated_at,
    )


@router.get("/{sneaker_id}", response_model=SneakerEnvelope)
async def get_sneaker(
    sneaker_id: str,
    coordinator: SneakerCoordinator = Depends(get_sneaker_coordinator),
) -> SneakerEnvelope:
    try:
        sneaker = await coordinator.get_by_id(sneaker_id)
    except SneakerServiceError as exc:
        raise _to_http_exception(exc)
    return SneakerEnvelope(sneaker=_sneaker_to_response(sneaker))


@router.get("/user/{owner_id}", response_model=SneakerListEnvelope)
async def get_sneakers_by_owner(
    owner_id: str,
    coordinator: SneakerCoordinator = Depends(get_sneaker_coordinator),
) -> SneakerListEnvelope:
    try:
        sneakers = await coordinator.get_by_owner(owner_id)
    except SneakerServiceError as exc:
        raise _to_http_exception(exc)
    return SneakerListEnvelope(sneakers=[_sneaker_to_response(s) for s in sneakers])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SneakerEnvelope)
async def create_sneaker(
    title: str = Form(..., min_length=1),
    description: str = Form(..., min_length=5),
    address: str = Form(..., min_length=1),
    url: str = Form(..., min_length=1),
    image: UploadFile = File(...),
    caller_id: str = Depends(get_caller_id),
    storage: ImageStorage = Depends(get_image_storage),
    image_lifecycle: ImageLifecycleManager = Depends(get_image_lifecycle),
    coordinator: SneakerCoordinator = Depends(get_sneaker_coordinator),
) -> SneakerEnvelope:
    """Store the uploaded image, then geocode and create the sneaker for the caller."""
    try:
        image_path = await storage.store(
            image.filename or "", image.content_type or "", await image.read()
        )
    except SneakerServiceError as exc:
        raise _to_http_exception(exc)

    try:
        sneaker = await coordinator.create(
            CreateSneakerInput(
                owner_id=caller_id,
                title=title,
                description=description,
                address=address,
                url=url,
                image=image_path,
            )
        )
    except SneakerServiceError as exc:
        # The stored image never became owned by a sneaker
        await image_lifecycle.discard(image_path)
        raise _to_http_exception(exc)

    return SneakerEnvelope(sneaker=_sneaker_to_response(sneaker))


@router.patch("/{sneaker_id}", response_model=SneakerEnvelope)
async def update_sneaker(
    sneaker_id: str,
    body: UpdateSneakerRequest,
    caller_id: str = Depends(get_caller_id),
    coordinator: SneakerCoordinator = Depends(get_sneaker_coordinator),
) -> SneakerEnvelope:
    try:
        sneaker = await coordinator.update(
            UpdateSneakerInput(
                sneaker_id=sneaker_id,
                caller_id=caller_id,
                title=body.title,
                description=body.description,
            )
        )
    except SneakerServiceError as exc:
        raise _to_http_exception(exc)
    return SneakerEnvelope(sneaker=_sneaker_to_response(sneaker))


@router.delete("/{sneaker_id}", response_model=MessageResponse)
async def delete_sneaker(
    sneaker_id: str,
    caller_id: str = Depends(get_caller_id),
    coordinator: SneakerCoordinator = Depends(get_sneaker_coordinator),
) -> MessageResponse:
    try:
        await coordinator.delete(sneaker_id, caller_id)
    except SneakerServiceError as exc:
        raise _to_http_exception(exc)
    return MessageResponse(message="Deleted sneaker.")
