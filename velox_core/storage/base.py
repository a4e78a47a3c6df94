"""Persistence backend contract and the per-model storage binding.

Backends are plain key/value stores. A model never talks to a backend
directly; it holds a ``KeyedStorage`` that pins the key and the fallback
value so ``restore`` can never fail on a missing entry.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from velox_core.core.config import Settings


@runtime_checkable
class StorageBackend(Protocol):
    """Minimal contract for storing and fetching named values."""

    def store(self, key: str, value: Any) -> None: ...

    def load(self, key: str, default: Any) -> Any: ...


@runtime_checkable
class PersistenceStrategy(Protocol):
    def store(self, value: Any) -> None: ...

    def load(self) -> Any: ...


class MemoryStorage:
    """Dict-backed backend, mostly for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._items: dict[str, Any] = dict(initial or {})

    def store(self, key: str, value: Any) -> None:
        self._items[key] = value

    def load(self, key: str, default: Any) -> Any:
        return self._items.get(key, default)

    def keys(self) -> list[str]:
        return sorted(self._items)


class KeyedStorage:
    """Binds a backend to one model name."""

    def __init__(self, backend: StorageBackend, key: str, default: Any) -> None:
        self.backend = backend
        self.key = key
        self.default = default

    def store(self, value: Any) -> None:
        self.backend.store(self.key, value)

    def load(self) -> Any:
        return self.backend.load(self.key, self.default)


class IdentityStorage:
    """Strategy used by models that are not persisted."""

    def __init__(self, default: Any) -> None:
        self.default = default

    def store(self, value: Any) -> None:
        return None

    def load(self) -> Any:
        return self.default


def get_storage(name: str | None = None, settings: Settings | None = None) -> StorageBackend:
    cfg = settings or Settings.from_env()
    backend_name = (name or cfg.storage_backend).lower()
    if backend_name == "memory":
        return MemoryStorage()
    if backend_name == "json":
        from velox_core.storage.local_store import JsonFileStorage

        return JsonFileStorage(cfg.store_path)
    if backend_name == "sqlite":
        from velox_core.storage.sqlite_store import SQLiteStorage

        return SQLiteStorage(cfg.db_path)

    raise ValueError(f"Unsupported storage backend: {backend_name}")
