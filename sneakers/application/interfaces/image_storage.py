from abc import ABC, abstractmethod


class ImageStorage(ABC):
    """Port for the binary image artifacts referenced by sneakers."""

    @abstractmethod
    async def store(self, filename: str, content_type: str, data: bytes) -> str:
        """Persist an uploaded image and return its path."""
        ...

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Raises ArtifactCleanupError if the artifact could not be removed."""
        ...
