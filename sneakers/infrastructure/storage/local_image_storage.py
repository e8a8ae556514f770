"""
Image artifacts on the local file system.

Blocking file I/O runs in the default thread-pool executor so it doesn't
stall the asyncio event loop.
"""
import asyncio
import os
import uuid
from functools import partial
from pathlib import Path

import structlog

from sneakers.application.interfaces.image_storage import ImageStorage
from sneakers.config import settings
from sneakers.domain.exceptions import (
    ArtifactCleanupError,
    InvalidImageError,
    TransientFailureError,
)

logger = structlog.get_logger(__name__)

MIME_TYPE_EXTENSIONS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
}


def _blocking_write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


class LocalImageStorage(ImageStorage):
    """Stores uploads as <upload_dir>/<uuid>.<ext>."""

    def __init__(self, upload_dir: str = settings.upload_dir) -> None:
        self._upload_dir = Path(upload_dir)

    async def store(self, filename: str, content_type: str, data: bytes) -> str:
        extension = MIME_TYPE_EXTENSIONS.get(content_type)
        if extension is None:
            logger.info("image_rejected", filename=filename, content_type=content_type)
            raise InvalidImageError()

        path = self._upload_dir / f"{uuid.uuid4()}.{extension}"
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, partial(_blocking_write, path, data))
        except OSError as exc:
            logger.exception("image_store_failed", path=str(path), original_filename=filename)
            raise TransientFailureError("Storing image failed, please try again.") from exc

        logger.info("image_stored", path=str(path), original_filename=filename, size=len(data))
        return str(path)

    async def delete(self, path: str) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, partial(os.remove, path))
        except (OSError, ValueError) as exc:
            raise ArtifactCleanupError(f"Could not delete image {path}: {exc}") from exc
