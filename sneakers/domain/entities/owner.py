from dataclasses import dataclass, field


@dataclass
class Owner:
    """A user together with the set of sneaker ids it owns."""

    id: str
    name: str | None = None
    sneaker_ids: set[str] = field(default_factory=set)

    def owns(self, sneaker_id: str) -> bool:
        return sneaker_id in self.sneaker_ids

    def add_sneaker(self, sneaker_id: str) -> None:
        self.sneaker_ids.add(sneaker_id)

    def remove_sneaker(self, sneaker_id: str) -> None:
        self.sneaker_ids.discard(sneaker_id)
