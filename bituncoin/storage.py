"""A small key-value store that keeps one file per key in a data directory."""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any

_SUFFIX = ".dat"


class StorageError(Exception):
    """Raised when a key is invalid or missing."""


class FileStore:
    """Key-value store cached in memory and persisted as ``<key>.dat`` files."""

    def __init__(self, data_dir: str | os.PathLike[str]) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._cache: dict[str, bytes] = {}
        self._lock = threading.RLock()
        self._load_from_disk()

    def __enter__(self) -> FileStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _path_for(self, key: str) -> Path:
        return self.data_dir / (key + _SUFFIX)

    def _save_to_disk(self, key: str, value: bytes) -> None:
        self._path_for(key).write_bytes(value)

    def _load_from_disk(self) -> None:
        for entry in self.data_dir.iterdir():
            if entry.is_dir() or not entry.name.endswith(_SUFFIX):
                continue
            try:
                value = entry.read_bytes()
            except OSError:
                continue
            self._cache[entry.name[: -len(_SUFFIX)]] = value

    def put(self, key: str, value: bytes) -> None:
        """Store a value under a key and write it to disk."""
        with self._lock:
            if not key:
                raise StorageError("key cannot be empty")
            value = bytes(value)
            self._cache[key] = value
            self._save_to_disk(key, value)

    def get(self, key: str) -> bytes:
        """Return the value stored under a key."""
        with self._lock:
            try:
                return self._cache[key]
            except KeyError:
                raise StorageError("key not found") from None

    def delete(self, key: str) -> None:
        """Remove a key and its file."""
        with self._lock:
            if key not in self._cache:
                raise StorageError("key not found")
            del self._cache[key]
            self._path_for(key).unlink()

    def has(self, key: str) -> bool:
        """Return whether a key is stored."""
        with self._lock:
            return key in self._cache

    def keys(self) -> list[str]:
        """Return every stored key."""
        with self._lock:
            return list(self._cache)

    def put_json(self, key: str, value: Any) -> None:
        """Store a value encoded as JSON."""
        self.put(key, json.dumps(value, separators=(",", ":")).encode())

    def get_json(self, key: str) -> Any:
        """Return the JSON value stored under a key, decoded."""
        return json.loads(self.get(key))

    def close(self) -> None:
        """Write every cached value to disk and empty the cache."""
        with self._lock:
            for key, value in self._cache.items():
                self._save_to_disk(key, value)
            self._cache = {}

    def size(self) -> int:
        """Return the number of stored keys."""
        with self._lock:
            return len(self._cache)