"""Namespaced key-value storage.

This package provides a small persisted key-value store with two scopes:

- **local**: durable, backed by a JSON file (``FileBackend``)
- **session**: process-scoped, held in memory (``MemoryBackend``)

``KeyValueStore`` adds key prefixing, JSON value encoding and failure
absorption on top of either backend. The request pipeline reads the bearer
credential from the ``local`` namespace.
"""

from helperkit.storage.backends import FileBackend, MemoryBackend, StorageBackend
from helperkit.storage.store import (
    KeyValueStore,
    NamespaceLike,
    StorageNamespace,
    create_store,
)

__all__ = [
    "FileBackend",
    "KeyValueStore",
    "MemoryBackend",
    "NamespaceLike",
    "StorageBackend",
    "StorageNamespace",
    "create_store",
]
