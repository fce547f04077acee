"""Key-value storage providers holding opaque string blobs keyed by string."""
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, Optional


class StorageError(Exception):
    """Raised when the storage backend cannot be read or written."""


class StorageUnreadable(StorageError):
    """Raised when the backing store exists but its content cannot be parsed."""


class KeyValueStorage(ABC):
    """Interface of a device-local key-value store.

    Values are opaque strings; callers own their encoding.  ``set_item`` must
    replace the whole value atomically.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None``."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete *key*; a missing key is not an error."""
        pass

    def replace_item(self, key: str, value: str) -> None:
        """Store *value* under *key* even if the store cannot currently be read."""
        self.set_item(key, value)


class MemoryStorage(KeyValueStorage):
    """Process-local storage, used for tests and throw-away sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """Keeps every key in a single JSON object on disk.

    Schema::

        {"<key>": "<blob>", ...}

    Each write re-reads the file, replaces one key and writes the result with
    a write-then-rename strategy so the file is never left partially written.
    A file that is not a JSON object raises :class:`StorageUnreadable` rather
    than being overwritten; only :meth:`replace_item` discards it.
    """

    def __init__(self, file_path: str = '.cocktails_storage.json') -> None:
        self._path = file_path
        self._log = logging.getLogger(f'cocktails.repository.{type(self).__name__}')

    @property
    def path(self) -> str:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value for {key!r} in {self._path} is not a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def replace_item(self, key: str, value: str) -> None:
        try:
            items = self._read()
        except StorageUnreadable:
            self._log.warning("Discarding unreadable %s", self._path)
            items = {}
        items[key] = value
        self._write(items)

    def _read(self) -> Dict[str, object]:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except OSError as exc:
            self._log.error("Could not read %s: %s", self._path, exc)
            raise StorageError(f"Could not read {self._path}: {exc}") from exc
        except ValueError as exc:
            self._log.error("%s is not valid JSON: %s", self._path, exc)
            raise StorageUnreadable(f"Could not read {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            self._log.error("%s does not hold a JSON object", self._path)
            raise StorageUnreadable(f"{self._path} does not hold a JSON object")
        return data

    def _write(self, items: Dict[str, object]) -> None:
        """Atomically write *items* as JSON to *self._path*."""
        dir_name = os.path.dirname(os.path.abspath(self._path))
        try:
            os.makedirs(dir_name, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
        except OSError as exc:
            raise StorageError(f"Could not write {self._path}: {exc}") from exc
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(items, fh, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            self._log.error("Could not write %s: %s", self._path, exc)
            raise StorageError(f"Could not write {self._path}: {exc}") from exc
