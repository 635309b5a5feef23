from __future__ import annotations

from contextlib import contextmanager
import json
import logging
import os
from typing import Iterator, Protocol

from msal_extensions import (
    CrossPlatLock,
    FilePersistence,
    FilePersistenceWithDataProtection,
)
from msal_extensions.persistence import PersistenceNotFound

logger = logging.getLogger(__name__)

TOKEN_KEY = "jToken"
USER_KEY = "user"


class StorageError(RuntimeError):
    pass


class KeyValueStorage(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._items.get(key)

    def write(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class FileStorage:
    """Key/value entries kept together as one JSON object on disk."""

    def __init__(self, path: str):
        self._path = path
        self._persistence = self._build_persistence(path)
        self._lock_path = f"{path}.lockfile"

    @staticmethod
    def _build_persistence(path: str):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        try:
            return FilePersistenceWithDataProtection(path)
        except Exception:
            return FilePersistence(path)

    @property
    def path(self) -> str:
        return self._path

    @contextmanager
    def _locked(self) -> Iterator[None]:
        # Lock and persistence failures are reported as StorageError.
        try:
            with CrossPlatLock(self._lock_path):
                yield
        except Exception as exc:
            raise StorageError(f"Storage file {self._path} is not accessible: {exc}") from exc

    def read(self, key: str) -> str | None:
        with self._locked():
            return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        with self._locked():
            items = self._load()
            items[key] = value
            self._persistence.save(json.dumps(items))

    def remove(self, key: str) -> None:
        with self._locked():
            items = self._load()
            if key not in items:
                return
            del items[key]
            self._persistence.save(json.dumps(items))

    def _load(self) -> dict[str, str]:
        try:
            content = self._persistence.load()
        except PersistenceNotFound:
            return {}

        if not content:
            return {}

        try:
            parsed = json.loads(content)
        except ValueError:
            logger.warning("Ignoring unreadable storage file %s", self._path)
            return {}

        if not isinstance(parsed, dict):
            return {}
        return {str(key): value for key, value in parsed.items() if isinstance(value, str)}
