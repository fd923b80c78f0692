"""
Storage backends for the tutoring state.
"""

from .interfaces import StateStorage, StorageError
from .json_storage import JsonFileStorage
from .memory_storage import InMemoryStorage

__all__ = [
    "StateStorage",
    "StorageError",
    "JsonFileStorage",
    "InMemoryStorage",
]
