"""Durable local key-value storage.

Values are opaque strings keyed by name, the way browser local storage
works. The task persistence adapter is the only writer.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Protocol


logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """String key-value storage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage:
    """Thread-safe in-memory storage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Initialize in-memory storage."""
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            logger.debug("Stored key: %s (%d chars)", key, len(value))

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class JsonFileStorage:
    """Storage backed by a single JSON object file.

    The file maps keys to string values. Writes replace the file atomically
    through a temporary sibling file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        data = json.loads(self._path.read_text("utf-8"))
        if not isinstance(data, dict):
            msg = f"Storage file {self._path} does not contain a JSON object"
            raise ValueError(msg)
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp_path, self._path)

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except ValueError:
                logger.warning("Storage file %s is unreadable; starting a new one", self._path)
                data = {}
            data[key] = value
            self._write_all(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)
