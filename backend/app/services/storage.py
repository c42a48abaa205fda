"""Filesystem-backed object storage with public URLs per bucket."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from app.config import get_settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ObjectStorage:
    """Buckets are directories under ``root``; objects are addressed by relative path."""

    def __init__(self, root: str | Path, public_url: str) -> None:
        self.root = Path(root)
        self.public_url = public_url.rstrip("/")

    def upload(self, bucket: str, object_path: str, content: bytes, *, upsert: bool = False) -> str:
        target = self._resolve(bucket, object_path)
        if target.exists() and not upsert:
            raise StorageError("The resource already exists")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            logger.warning("storage.upload_failed bucket=%s path=%s error=%s", bucket, object_path, exc)
            raise StorageError(f"Upload failed: {exc.strerror or exc}") from exc
        logger.info("storage.upload bucket=%s path=%s bytes=%d", bucket, object_path, len(content))
        return object_path

    def get_public_url(self, bucket: str, object_path: str) -> str:
        return f"{self.public_url}/{bucket}/{PurePosixPath(object_path).as_posix()}"

    def _resolve(self, bucket: str, object_path: str) -> Path:
        relative = PurePosixPath(object_path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise StorageError(f"Invalid object path: {object_path}")
        return self.root / bucket / Path(*relative.parts)


def get_storage() -> ObjectStorage:
    settings = get_settings()
    return ObjectStorage(settings.storage_root, settings.public_storage_url)
