"""
State store interface.

Per-device state lives in a tree addressed by slash-separated paths such as
'SN000-072/latest', 'SN000-072/graph' and 'SN000-072/data/<timestamp>'.
"""

import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List


def split_path(path: str) -> List[str]:
    """
    Split a store path into its non-empty segments.

    Raises:
        ValueError: If the path has no segments
    """
    parts = [part for part in path.split("/") if part]
    if not parts:
        raise ValueError(f"Invalid store path: {path!r}")
    return parts


class StateStore(ABC):
    """Key-value tree store with read, write and update operations."""

    @abstractmethod
    def read(self, path: str) -> Any:
        """Return the value at path, or None if nothing is stored there."""

    @abstractmethod
    def write(self, path: str, value: Any) -> None:
        """Replace the value at path. Writing None removes it."""

    @abstractmethod
    def update(self, path: str, partial: Dict[str, Any]) -> None:
        """Set each child of path named in partial, leaving other children."""


class TreeStore(StateStore):
    """
    Store operating on an in-memory nested dict.

    Subclasses decide where the tree comes from and where it goes after a
    change by overriding _load and _save.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @abstractmethod
    def _load(self) -> Dict[str, Any]:
        """Return the current tree."""

    @abstractmethod
    def _save(self, tree: Dict[str, Any]) -> None:
        """Persist the tree after a change."""

    def read(self, path: str) -> Any:
        parts = split_path(path)
        with self._lock:
            node: Any = self._load()
            for part in parts:
                if not isinstance(node, dict) or part not in node:
                    return None
                node = node[part]
            return copy.deepcopy(node)

    def write(self, path: str, value: Any) -> None:
        parts = split_path(path)
        with self._lock:
            tree = self._load()
            self._set(tree, parts, copy.deepcopy(value))
            self._save(tree)

    def update(self, path: str, partial: Dict[str, Any]) -> None:
        parts = split_path(path)
        with self._lock:
            tree = self._load()
            for key, value in partial.items():
                self._set(tree, parts + split_path(key), copy.deepcopy(value))
            self._save(tree)

    @staticmethod
    def _set(tree: Dict[str, Any], parts: List[str], value: Any) -> None:
        node = tree
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                if value is None:
                    return
                child = {}
                node[part] = child
            node = child
        if value is None:
            node.pop(parts[-1], None)
        else:
            node[parts[-1]] = value
