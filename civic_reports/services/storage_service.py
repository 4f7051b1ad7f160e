"""
Photo storage on the local filesystem, served under /uploads
"""
import logging
import re
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import UploadFile

from civic_reports.config import get_settings

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"
_CHUNK_SIZE = 64 * 1024


class PhotoRejected(ValueError):
    """Uploaded file is not an acceptable photo"""


class PhotoStorage:
    """Stores report photos and hands out their public URLs"""

    def __init__(self, root: Optional[str] = None, max_bytes: Optional[int] = None):
        settings = get_settings()
        self.root = Path(root or settings.uploads_path)
        self.max_bytes = max_bytes or settings.max_photo_bytes

    def _target_for(self, filename: str) -> Path:
        safe_filename = re.sub(r'[^\w\-_\.]', '_', Path(filename or "photo.jpg").name)
        return self.root / f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_filename}"

    def public_url(self, path: Path) -> str:
        return f"{PUBLIC_PREFIX}/{path.name}"

    async def save(self, upload: UploadFile) -> Path:
        """Write an uploaded image to disk and return its path"""
        if not (upload.content_type or "").startswith("image/"):
            raise PhotoRejected(f"Unsupported content type: {upload.content_type}")

        self.root.mkdir(parents=True, exist_ok=True)
        target = self._target_for(upload.filename)
        written = 0
        try:
            with open(target, "wb") as f:
                while True:
                    chunk = await upload.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise PhotoRejected(f"Photo larger than {self.max_bytes} bytes")
                    f.write(chunk)
        except BaseException:
            target.unlink(missing_ok=True)
            raise

        if written == 0:
            target.unlink(missing_ok=True)
            raise PhotoRejected("Empty photo")

        logger.info("Stored photo %s (%d bytes)", target.name, written)
        return target

    def remove(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
            logger.info("Removed photo %s", path.name)
        except OSError as e:
            logger.error("Failed to remove photo %s: %s", path, str(e))

    @asynccontextmanager
    async def staged_upload(self, upload: Optional[UploadFile]) -> AsyncIterator[Optional[str]]:
        """Store a photo for the duration of a block.

        Yields the public URL (or None when there is no photo). If the block
        raises, the stored file is removed again before the error propagates.
        """
        if upload is None or not upload.filename:
            yield None
            return

        try:
            path = await self.save(upload)
            try:
                yield self.public_url(path)
            except BaseException:
                self.remove(path)
                raise
        finally:
            await upload.close()
