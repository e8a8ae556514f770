"""
Ties a sneaker's image artifact to the lifetime of its record.

Removal is fire-and-forget: it runs only after the record change has
committed, and a failure is logged without affecting the reported outcome.
"""
import structlog

from sneakers.application.interfaces.image_storage import ImageStorage
from sneakers.domain.exceptions import ArtifactCleanupError

logger = structlog.get_logger(__name__)


class ImageLifecycleManager:
    def __init__(self, storage: ImageStorage) -> None:
        self._storage = storage

    async def discard(self, path: str) -> None:
        if not path:
            return
        try:
            await self._storage.delete(path)
        except ArtifactCleanupError as exc:
            # The record is already gone; an orphaned file is recoverable.
            logger.warning("image_cleanup_failed", path=path, error=str(exc))
            return
        except Exception:
            logger.exception("image_cleanup_failed", path=path)
            return
        logger.info("image_discarded", path=path)
