"""Durable client-side key/value storage for the session token.

Plays the role browser local storage plays for a web client: a handful of
JSON values under well-known keys that survive restarts. Two backends share
one interface:
  - FileStorage: one JSON document on disk (default)
  - MemoryStorage: a dict (tests, throwaway sessions)

Storage never raises on read problems. An unreadable or corrupt file is
logged and treated as empty, the same way a broken local-storage entry reads
as absent.

Environment detection:
  - JOBBOARD_STORAGE=memory → MemoryStorage
  - Otherwise → FileStorage at the configured storage path

Usage:
    from jobboard_shared.storage import get_storage

    storage = get_storage()
    storage.set(TOKEN_KEY, token)
    token = storage.get(TOKEN_KEY)
"""

from __future__ import annotations

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from jobboard_shared.config import load_config

logger = logging.getLogger(__name__)


class ClientStorage(ABC):
    """One JSON-serializable value per key; writing replaces, remove deletes."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing a missing key is a no-op."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every key."""


class MemoryStorage(ClientStorage):
    """Dict-backed storage. Values round-trip through JSON like the file backend."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            raw = self._items.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        encoded = json.dumps(value)
        with self._lock:
            self._items[key] = encoded

    def remove(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class FileStorage(ClientStorage):
    """Storage persisted as a single JSON object in a file.

    Each write rewrites the whole document through a temp file and an atomic
    replace, under a re-entrant lock. Concurrent writers therefore serialize
    and the last writer wins, which is the ordering the session layer expects.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def _read(self) -> dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Could not read storage file {self.path}: {e}")
            return {}
        try:
            document = json.loads(text)
        except json.JSONDecodeError:
            logger.warning(f"Storage file {self.path} is not valid JSON — treating as empty")
            return {}
        if not isinstance(document, dict):
            logger.warning(f"Storage file {self.path} does not hold an object — treating as empty")
            return {}
        return document

    def _write(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(f"{self.path.name}.tmp")
        tmp.write_text(json.dumps(document), encoding="utf-8")
        os.replace(tmp, self.path)

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            document = self._read()
            document[key] = value
            self._write(document)

    def remove(self, key: str) -> None:
        with self._lock:
            document = self._read()
            if key not in document:
                return
            del document[key]
            self._write(document)

    def clear(self) -> None:
        with self._lock:
            if self.path.exists():
                self._write({})


# ============================================================================
# Singleton management
# ============================================================================

_storage: ClientStorage | None = None


def get_storage() -> ClientStorage:
    """Return a lazily-initialized storage singleton.

    Environment detection:
      - JOBBOARD_STORAGE=memory → MemoryStorage
      - Otherwise → FileStorage at ClientConfig.storage_path
    """
    global _storage
    if _storage is not None:
        return _storage

    if os.environ.get("JOBBOARD_STORAGE", "").lower() == "memory":
        _storage = MemoryStorage()
    else:
        _storage = FileStorage(load_config().storage_path)

    return _storage


def reset_storage() -> None:
    """Reset the storage singleton — used in tests to inject mocks."""
    global _storage
    _storage = None


def set_storage(storage: ClientStorage) -> None:
    """Inject a storage backend — used in tests and by embedding applications."""
    global _storage
    _storage = storage
