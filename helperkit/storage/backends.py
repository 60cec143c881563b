"""Key-value storage backends.

Two backends implement the same small string-to-string interface:

- **MemoryBackend**: session-scoped, lives as long as the process
- **FileBackend**: durable, a single JSON document on disk

Backends know nothing about key prefixes or value encoding; the
``KeyValueStore`` facade handles both. Backends raise ``StorageError`` when
the underlying medium fails and leave recovery to the facade.
"""

import os
import tempfile
from pathlib import Path
from typing import Protocol

import orjson
from loguru import logger

from helperkit.core.exceptions import StorageError


class StorageBackend(Protocol):
    """Interface shared by every storage backend."""

    def get_item(self, key: str) -> str | None:
        """Return the raw value for a key, or None when absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a raw string value."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete a key; missing keys are ignored."""
        ...

    def clear(self) -> None:
        """Delete every key."""
        ...

    def key(self, index: int) -> str | None:
        """Return the key at a position, or None when out of range."""
        ...

    def length(self) -> int:
        """Return the number of stored keys."""
        ...


class MemoryBackend:
    """Session-scoped backend held in process memory.

    Keys keep insertion order, so ``key(index)`` is stable until the key set
    changes.
    """

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def key(self, index: int) -> str | None:
        if 0 <= index < len(self._items):
            return list(self._items)[index]
        return None

    def length(self) -> int:
        return len(self._items)


class FileBackend:
    """Durable backend persisted as one JSON object in a file.

    Every operation reads the file, so several processes pointed at the same
    path see each other's writes. Writes go to a temporary file first and
    then replace the target, so readers never observe a half-written file.

    Args:
        path: Location of the JSON document. Created on first write.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        logger.debug("Initialized file storage backend at {}", path)

    def _load(self) -> dict[str, str]:
        """Read the whole document.

        Raises:
            StorageError: If the file cannot be read or is not a JSON object.
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            msg = f"Could not read storage file {self.path}"
            raise StorageError(msg, context={"path": str(self.path)}, cause=e) from e

        if not raw.strip():
            return {}

        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            msg = f"Storage file {self.path} is not valid JSON"
            raise StorageError(msg, context={"path": str(self.path)}, cause=e) from e

        if not isinstance(data, dict):
            msg = f"Storage file {self.path} does not hold a JSON object"
            raise StorageError(msg, context={"path": str(self.path)})

        return {str(k): str(v) for k, v in data.items()}

    def _save(self, items: dict[str, str]) -> None:
        """Atomically replace the document.

        Raises:
            StorageError: If the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(orjson.dumps(items))
                Path(tmp_name).replace(self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            msg = f"Could not write storage file {self.path}"
            raise StorageError(msg, context={"path": str(self.path)}, cause=e) from e

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)

    def clear(self) -> None:
        self._save({})

    def key(self, index: int) -> str | None:
        keys = list(self._load())
        if 0 <= index < len(keys):
            return keys[index]
        return None

    def length(self) -> int:
        return len(self._load())
