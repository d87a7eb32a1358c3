"""In-memory state store, used for tests and dry runs."""

import copy
from typing import Any, Dict, Optional

from .base import TreeStore


class InMemoryStore(TreeStore):
    """State store holding the whole tree in process memory."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        super().__init__()
        self._tree: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def _load(self) -> Dict[str, Any]:
        return self._tree

    def _save(self, tree: Dict[str, Any]) -> None:
        self._tree = tree

    def snapshot(self) -> Dict[str, Any]:
        """Return a copy of the full tree."""
        with self._lock:
            return copy.deepcopy(self._tree)
