"""Image upload storage on the local filesystem.

Uploaded files are written as ``<epoch-millis>-<short uuid>-<original name>``
under the configured upload directory (or a named subdirectory of it) and
referenced by URL path (``/uploads/...``). There is no deduplication or
content-type checking; empty parts are skipped.

Provides get_image_store() / set_image_store() so tests can point uploads at
a temporary directory.
"""

import time
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile

from shared.logging import get_logger
from shared.settings import get_settings

logger = get_logger(__name__)


class ImageStore:
    """Writes uploaded images to disk and hands back their public URL path."""

    def __init__(self, upload_dir: str | Path, url_prefix: str = "/uploads") -> None:
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    @staticmethod
    def _safe_name(filename: str | None) -> str:
        name = Path(filename or "upload").name
        return name.replace(" ", "_") or "upload"

    async def save(self, upload: UploadFile | None, subdir: str | None = None) -> str | None:
        """Persist one upload. Returns ``None`` for missing or empty parts."""
        if upload is None:
            return None

        content = await upload.read()
        if not content:
            return None

        target_dir = self.upload_dir / subdir if subdir else self.upload_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{int(time.time() * 1000)}-{uuid4().hex[:8]}-{self._safe_name(upload.filename)}"
        (target_dir / filename).write_bytes(content)

        url = f"{self.url_prefix}/{subdir}/{filename}" if subdir else f"{self.url_prefix}/{filename}"
        logger.debug("image_stored", url=url, size=len(content))
        return url

    async def save_all(self, uploads: list[UploadFile] | None, subdir: str | None = None) -> list[str]:
        urls = []
        for upload in uploads or []:
            url = await self.save(upload, subdir)
            if url:
                urls.append(url)
        return urls


_current_store: ImageStore | None = None


def get_image_store() -> ImageStore:
    """Return the active image store. Defaults to the configured upload directory."""
    global _current_store
    if _current_store is None:
        settings = get_settings()
        _current_store = ImageStore(settings.upload_dir, settings.upload_url_prefix)
    return _current_store


def set_image_store(store: ImageStore) -> None:
    """Override the active image store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_image_store() -> None:
    """Reset to the default image store."""
    global _current_store
    _current_store = None
