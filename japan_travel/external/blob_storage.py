from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

from japan_travel.core.config import Settings
from japan_travel.core.errors import NotFoundError, UpstreamError
from japan_travel.domain.models import BlobEntry
from japan_travel.external.supabase_client import create_supabase_client

logger = logging.getLogger(__name__)

MEMORY_SCHEME = "memory://"
LIST_PAGE_SIZE = 100


class BlobBackend(ABC):
    @abstractmethod
    async def list(self, prefix: str) -> List[BlobEntry]:
        raise NotImplementedError

    @abstractmethod
    async def fetch(self, url: str) -> bytes:
        raise NotImplementedError

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> BlobEntry:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key_or_url: str) -> None:
        raise NotImplementedError


class InMemoryBlobBackend(BlobBackend):
    def __init__(self):
        self._store: Dict[str, Tuple[bytes, str]] = {}

    async def list(self, prefix: str) -> List[BlobEntry]:
        return [BlobEntry(key=key, url=f"{MEMORY_SCHEME}{key}") for key in sorted(self._store) if key.startswith(prefix)]

    async def fetch(self, url: str) -> bytes:
        key = url.removeprefix(MEMORY_SCHEME)
        if key not in self._store:
            raise NotFoundError(f"Blob not found: {key}")
        return self._store[key][0]

    async def put(self, key: str, data: bytes, content_type: str) -> BlobEntry:
        self._store[key] = (data, content_type)
        return BlobEntry(key=key, url=f"{MEMORY_SCHEME}{key}")

    async def delete(self, key_or_url: str) -> None:
        self._store.pop(key_or_url.removeprefix(MEMORY_SCHEME), None)

    def content_type(self, key: str) -> str | None:
        entry = self._store.get(key)
        return entry[1] if entry else None


class SupabaseBlobBackend(BlobBackend):
    """
    Supabase Storage bucket used as a flat blob namespace.
    The storage SDK is synchronous, so every call runs in a worker thread. Content is
    downloaded through the API rather than the public URL, which the CDN may serve stale.
    """

    def __init__(self, client, bucket: str):
        if client is None:
            raise ValueError("Supabase client is required for SupabaseBlobBackend")
        self.client = client
        self.bucket = bucket

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    async def list(self, prefix: str) -> List[BlobEntry]:
        folder, _, name_prefix = prefix.rpartition("/")
        entries: List[BlobEntry] = []
        offset = 0
        while True:
            try:
                page: List[Dict[str, Any]] = await asyncio.to_thread(
                    lambda: self._bucket().list(folder, {"limit": LIST_PAGE_SIZE, "offset": offset})
                )
            except Exception as exc:
                logger.warning("Supabase list failed for prefix %s: %s", prefix, exc)
                raise UpstreamError(str(exc) or None) from exc
            for item in page:
                name = item.get("name")
                # folders come back without an id
                if not name or item.get("id") is None or not name.startswith(name_prefix):
                    continue
                key = f"{folder}/{name}" if folder else name
                entries.append(BlobEntry(key=key, url=self._bucket().get_public_url(key)))
            if len(page) < LIST_PAGE_SIZE:
                return entries
            offset += LIST_PAGE_SIZE

    async def fetch(self, url: str) -> bytes:
        key = self._key_from(url)
        try:
            return await asyncio.to_thread(lambda: self._bucket().download(key))
        except Exception as exc:
            if _is_not_found(exc):
                raise NotFoundError(f"Blob not found: {key}") from exc
            logger.warning("Supabase download failed for %s: %s", key, exc)
            raise UpstreamError(str(exc) or None) from exc

    async def put(self, key: str, data: bytes, content_type: str) -> BlobEntry:
        try:
            await asyncio.to_thread(
                lambda: self._bucket().upload(
                    key, data, file_options={"content-type": content_type, "upsert": "true"}
                )
            )
        except Exception as exc:
            logger.warning("Supabase upload failed for %s: %s", key, exc)
            raise UpstreamError(str(exc) or None) from exc
        return BlobEntry(key=key, url=self._bucket().get_public_url(key))

    async def delete(self, key_or_url: str) -> None:
        key = self._key_from(key_or_url)
        try:
            await asyncio.to_thread(lambda: self._bucket().remove([key]))
        except Exception as exc:
            logger.warning("Supabase remove failed for %s: %s", key, exc)
            raise UpstreamError(str(exc) or None) from exc

    def _key_from(self, key_or_url: str) -> str:
        marker = f"/object/public/{self.bucket}/"
        if marker in key_or_url:
            return key_or_url.split(marker, 1)[1].split("?", 1)[0]
        return key_or_url


def build_blob_backend(settings: Settings) -> BlobBackend:
    if settings.blob_backend == "supabase":
        client = create_supabase_client(settings)
        if client is not None:
            return SupabaseBlobBackend(client, settings.supabase_bucket)
    return InMemoryBlobBackend()


def _is_not_found(exc: Exception) -> bool:
    status = getattr(exc, "status", None) or getattr(exc, "status_code", None)
    if str(status) == "404":
        return True
    message = str(exc).lower()
    return "not found" in message or "not_found" in message
