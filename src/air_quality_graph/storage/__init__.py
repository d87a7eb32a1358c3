"""
Persistence layer for per-device state.

Provides the store interface and the JSON file and in-memory stores.
"""

from .base import StateStore, TreeStore
from .json_store import JSONFileStore
from .memory import InMemoryStore

__all__ = [
    "StateStore",
    "TreeStore",
    "JSONFileStore",
    "InMemoryStore",
]
