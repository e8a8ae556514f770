"""
Failure taxonomy shared by every layer.

Each error carries a stable ``kind`` so the outer layer can map it to a
response without inspecting messages.
"""


class SneakerServiceError(Exception):
    """Base class for all business failures."""

    kind: str = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(SneakerServiceError):
    kind = "not_found"


class SneakerNotFoundError(NotFoundError):
    def __init__(self, message: str = "Could not find sneaker for the provided id.") -> None:
        super().__init__(message)


class OwnerNotFoundError(NotFoundError):
    def __init__(self, message: str = "Could not find user for the provided id.") -> None:
        super().__init__(message)


class UnauthorizedError(SneakerServiceError):
    kind = "unauthorized"


class GeocodingError(SneakerServiceError):
    kind = "geocoding_failure"

    def __init__(
        self, message: str = "Could not find location for the specified address."
    ) -> None:
        super().__init__(message)


class TransientFailureError(SneakerServiceError):
    """Persistence or transaction failure. Safe for the caller to retry."""

    kind = "transient_failure"


class ArtifactCleanupError(SneakerServiceError):
    """Backing image could not be removed. Logged, never surfaced."""

    kind = "artifact_cleanup_failure"


class InvalidImageError(SneakerServiceError):
    kind = "invalid_image"

    def __init__(self, message: str = "Invalid mime type!") -> None:
        super().__init__(message)
