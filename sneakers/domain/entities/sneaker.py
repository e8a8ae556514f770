from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float


@dataclass
class Sneaker:
    """
    A sneaker listing owned by exactly one user.

    ``location`` is derived from ``address`` by geocoding at creation time and
    ``image`` points at an artifact stored outside the database. Neither
    changes after creation; only ``title`` and ``description`` are editable.
    """

    # Identity
    id: str = field(default_factory=_new_id)
    owner_id: str = ""

    # Listing data
    title: str = ""
    description: str = ""
    address: str = ""
    location: Location = field(default_factory=lambda: Location(lat=0.0, lng=0.0))
    url: str = ""
    image: str = ""

    # Timestamps
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        owner_id: str,
        title: str,
        description: str,
        address: str,
        location: Location,
        url: str,
        image: str,
    ) -> "Sneaker":
        return cls(
            owner_id=owner_id,
            title=title,
            description=description,
            address=address,
            location=location,
            url=url,
            image=image,
        )

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def update_details(self, *, title: str, description: str) -> None:
        self.title = title
        self.description = description
        self.updated_at = _utcnow()
