"""Namespaced key-value store facade.

The store hides two backends behind one interface, the durable ``local``
namespace and the ``session`` namespace, and adds the conventions every
caller relies on:

- keys are stored with a fixed prefix; callers only ever see unprefixed keys
- strings are stored verbatim, anything else as JSON text
- reads decode JSON when possible and fall back to the raw string

Backend failures are logged and absorbed: reads return None, writes become
no-ops and ``count`` returns -1. Asking for a namespace that does not exist
is a caller bug and raises ``ValidationError`` immediately.
"""

from enum import Enum
from typing import Any

import orjson
from loguru import logger

from helperkit.core.config import StorageConfig
from helperkit.core.exceptions import StorageError, ValidationError
from helperkit.storage.backends import FileBackend, MemoryBackend, StorageBackend
from helperkit.transforms.parsing import Parsed, parse_json


class StorageNamespace(Enum):
    """Storage scopes."""

    LOCAL = "local"
    """Durable storage that survives restarts."""

    SESSION = "session"
    """Storage scoped to the current process."""

    @classmethod
    def parse(cls, value: "StorageNamespace | str") -> "StorageNamespace":
        """Resolve a namespace from an enum member or its string value.

        Raises:
            ValidationError: If the value names no namespace.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            msg = f"Invalid storage type provided: {value}. Use 'local' or 'session'."
            raise ValidationError(msg, context={"namespace": value}, cause=e) from e


type NamespaceLike = StorageNamespace | str


class KeyValueStore:
    """Key-value store over a durable and a session-scoped backend.

    Args:
        durable: Backend for the ``local`` namespace.
        session: Backend for the ``session`` namespace.
        prefix: Prefix added to every key in both backends.
    """

    def __init__(
        self,
        durable: StorageBackend,
        session: StorageBackend,
        prefix: str = "my_app_",
    ) -> None:
        self.prefix = prefix
        self._backends: dict[StorageNamespace, StorageBackend] = {
            StorageNamespace.LOCAL: durable,
            StorageNamespace.SESSION: session,
        }

    def _resolve(
        self, namespace: NamespaceLike
    ) -> tuple[StorageNamespace, StorageBackend]:
        """Return a namespace and the backend serving it.

        Raises:
            ValidationError: If the namespace is unknown.
        """
        scope = StorageNamespace.parse(namespace)
        return scope, self._backends[scope]

    def get(self, namespace: NamespaceLike, key: str) -> Any:  # noqa: ANN401 - any stored JSON value
        """Read a value.

        Args:
            namespace: Which storage scope to read from.
            key: Unprefixed key.

        Returns:
            Any: The JSON-decoded value, the raw string when it is not JSON,
            or None when the key is absent or the backend failed.
        """
        scope, backend = self._resolve(namespace)
        try:
            raw = backend.get_item(self.prefix + key)
        except StorageError as e:
            logger.error(
                "Error getting item '{}' from {} storage",
                key,
                scope.value,
                error_code=e.error_code,
                error_message=e.message,
            )
            return None

        if raw is None:
            return None

        result = parse_json(raw)
        return result.value if isinstance(result, Parsed) else raw

    def set(self, namespace: NamespaceLike, key: str, value: Any) -> None:  # noqa: ANN401 - any JSON-serializable value
        """Store a value; non-string values are encoded as JSON text."""
        scope, backend = self._resolve(namespace)
        try:
            text = value if isinstance(value, str) else orjson.dumps(value).decode()
            backend.set_item(self.prefix + key, text)
        except orjson.JSONEncodeError as e:
            logger.error(
                "Error setting item '{}' in {} storage: value is not serializable",
                key,
                scope.value,
                error_message=str(e),
            )
        except StorageError as e:
            logger.error(
                "Error setting item '{}' in {} storage",
                key,
                scope.value,
                error_code=e.error_code,
                error_message=e.message,
            )
        else:
            logger.debug("Stored item '{}' in {} storage", key, scope.value)

    def remove(self, namespace: NamespaceLike, key: str) -> None:
        """Delete a key; absent keys are ignored."""
        scope, backend = self._resolve(namespace)
        try:
            backend.remove_item(self.prefix + key)
        except StorageError as e:
            logger.error(
                "Error removing item '{}' from {} storage",
                key,
                scope.value,
                error_code=e.error_code,
                error_message=e.message,
            )

    def clear(self, namespace: NamespaceLike) -> None:
        """Delete every entry of a namespace, prefixed or not."""
        scope, backend = self._resolve(namespace)
        try:
            backend.clear()
        except StorageError as e:
            logger.error(
                "Error clearing {} storage",
                scope.value,
                error_code=e.error_code,
                error_message=e.message,
            )

    def key_at(self, namespace: NamespaceLike, index: int) -> str | None:
        """Return the key at a position, without its prefix.

        Keys written by someone else (without the prefix) are returned
        unchanged. Key order is backend-defined.

        Returns:
            str | None: The key, or None when out of range or on failure.
        """
        scope, backend = self._resolve(namespace)
        try:
            stored_key = backend.key(index)
        except StorageError as e:
            logger.error(
                "Error getting key at index {} from {} storage",
                index,
                scope.value,
                error_code=e.error_code,
                error_message=e.message,
            )
            return None

        if stored_key is not None and self.prefix and stored_key.startswith(self.prefix):
            return stored_key[len(self.prefix) :]
        return stored_key

    def count(self, namespace: NamespaceLike) -> int:
        """Return the number of entries, prefixed or not.

        Returns:
            int: Entry count, or -1 when the backend failed.
        """
        scope, backend = self._resolve(namespace)
        try:
            return backend.length()
        except StorageError as e:
            logger.error(
                "Error getting length of {} storage",
                scope.value,
                error_code=e.error_code,
                error_message=e.message,
            )
            return -1


def create_store(storage_config: StorageConfig) -> KeyValueStore:
    """Build the store described by the storage settings.

    Args:
        storage_config: Storage section of the settings.

    Returns:
        KeyValueStore: Store with a file-backed durable namespace and an
        in-memory session namespace.
    """
    return KeyValueStore(
        durable=FileBackend(storage_config.durable_path),
        session=MemoryBackend(),
        prefix=storage_config.key_prefix,
    )
