from datetime import datetime

from pydantic import BaseModel, Field


class LocationResponse(BaseModel):
    lat: float
    lng: float


class SneakerResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    description: str
    address: str
    location: LocationResponse
    url: str
    image: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SneakerEnvelope(BaseModel):
    sneaker: SneakerResponse


class SneakerListEnvelope(BaseModel):
    sneakers: list[SneakerResponse]


class UpdateSneakerRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=5)


class MessageResponse(BaseModel):
    message: str
