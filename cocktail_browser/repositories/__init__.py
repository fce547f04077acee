"""Repository package: expose storage providers and repositories from one import."""
from .storage import (
    KeyValueStorage, MemoryStorage, JsonFileStorage, StorageError, StorageUnreadable,
)
from .favorites_repository import FavoritesRepository, StorageCorrupt, FAVORITES_KEY

__all__ = [
    'KeyValueStorage',
    'MemoryStorage',
    'JsonFileStorage',
    'StorageError',
    'StorageUnreadable',
    'FavoritesRepository',
    'StorageCorrupt',
    'FAVORITES_KEY',
]
