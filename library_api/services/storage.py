"""
File Storage Service

Uploaded files (book request cover photos) go through a small storage
interface so the rest of the code never knows where bytes end up:

    storage.save(content, mimetype, filename) -> StoredFile(id, url)
    storage.delete(file_id)

LocalFileStorage writes to a directory on disk and is what the app uses
by default. Another backend (object storage, cloud drive) only has to
implement FileStorage and be returned from get_file_storage(); tests
override that dependency with an in-memory fake.
"""

import logging
import mimetypes
import secrets
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from library_api.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """Where a saved file can be found again."""

    id: str
    url: str


class FileStorage(Protocol):
    """Anything that can durably keep a blob and hand back its location."""

    def save(self, content: bytes, mimetype: str, filename: str) -> StoredFile:
        ...

    def delete(self, file_id: str) -> None:
        ...


class LocalFileStorage:
    """
    Stores files under a directory, served from base_url.

    File names are random so uploads never overwrite each other; the
    extension is derived from the mimetype, not from the client's name.
    """

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def save(self, content: bytes, mimetype: str, filename: str) -> StoredFile:
        extension = mimetypes.guess_extension(mimetype) or Path(filename).suffix
        file_id = f"{secrets.token_hex(16)}{extension}"

        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / file_id).write_bytes(content)

        logger.info(f"Stored upload {filename!r} as {file_id} ({len(content)} bytes)")
        return StoredFile(id=file_id, url=f"{self.base_url}/{file_id}")

    def delete(self, file_id: str) -> None:
        (self.root / file_id).unlink(missing_ok=True)
        logger.info(f"Removed upload {file_id}")


@lru_cache
def get_file_storage() -> FileStorage:
    """
    File storage dependency.

    Built once per process from settings and injected with
    Depends(get_file_storage).
    """
    settings = get_settings()
    return LocalFileStorage(settings.upload_dir, settings.upload_base_url)
