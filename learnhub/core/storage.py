"""Key-value storage backends.

All persistent state lives behind a string-keyed store with synchronous
get/set/remove semantics and no transactions across keys. Backends:
- MemoryStorage: process-local dict (tests, ephemeral runs)
- FileStorage: one JSON document on disk
- RedisStorage: Redis strings
ScopedStorage narrows any backend to a key prefix (one namespace per client).
"""

import json
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import redis

from learnhub.core.logging import get_logger


if TYPE_CHECKING:
    from learnhub.config.settings import Settings


logger = get_logger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):
    """Synchronous string key-value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage backed by a dict."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def __repr__(self) -> str:
        return f"<MemoryStorage keys={len(self._data)}>"


class FileStorage:
    """Storage persisted as a single JSON object on disk.

    Every write rewrites the whole file through a temporary file and an
    atomic rename, so readers never see a half-written document.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("storage_file_corrupted", path=str(self.path))
            return {}

        if not isinstance(data, dict):
            logger.warning("storage_file_corrupted", path=str(self.path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)

    def __repr__(self) -> str:
        return f"<FileStorage path={self.path}>"


class RedisStorage:
    """Storage backed by Redis string values."""

    def __init__(self, client: redis.Redis, prefix: str = ""):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RedisStorage":
        """Create a client from settings and verify the connection."""
        client = redis.Redis.from_url(
            settings.redis_url,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_connect_timeout,
            retry_on_timeout=settings.redis_retry_on_timeout,
            decode_responses=True,
        )

        try:
            client.ping()
            logger.info("redis_connected", url=settings.redis_url)
        except redis.ConnectionError as e:
            logger.warning("redis_connection_failed", error=str(e))
            raise

        return cls(client, prefix=settings.storage_key_prefix)

    def get(self, key: str) -> str | None:
        value = self.client.get(self.prefix + key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self.client.set(self.prefix + key, value)

    def remove(self, key: str) -> None:
        self.client.delete(self.prefix + key)

    def close(self) -> None:
        self.client.close()
        logger.info("redis_disconnected")

    def __repr__(self) -> str:
        return f"<RedisStorage prefix={self.prefix!r}>"


class ScopedStorage:
    """View of another storage restricted to keys under a prefix."""

    def __init__(self, backend: KeyValueStorage, scope: str):
        self.backend = backend
        self.scope = scope

    def _key(self, key: str) -> str:
        return f"{self.scope}:{key}"

    def get(self, key: str) -> str | None:
        return self.backend.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self.backend.set(self._key(key), value)

    def remove(self, key: str) -> None:
        self.backend.remove(self._key(key))

    def __repr__(self) -> str:
        return f"<ScopedStorage scope={self.scope!r} backend={self.backend!r}>"


def create_storage(settings: "Settings") -> KeyValueStorage:
    """Build the storage backend selected in settings."""
    if settings.storage_backend == "redis":
        return RedisStorage.from_settings(settings)
    if settings.storage_backend == "file":
        logger.info("file_storage_selected", path=settings.storage_file_path)
        return FileStorage(settings.storage_file_path)
    return MemoryStorage()
