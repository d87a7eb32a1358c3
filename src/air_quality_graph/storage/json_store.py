"""
JSON file state store.

Keeps the whole state tree in a single JSON file.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.exceptions import PersistenceError
from .base import TreeStore


class JSONFileStore(TreeStore):
    """State store backed by one JSON file."""

    def __init__(self, file_path: str, logger: Optional[logging.Logger] = None):
        """
        Initialize JSON file store.

        Args:
            file_path: Path of the JSON file; created on first write
            logger: Logger instance
        """
        super().__init__()
        self.file_path = Path(file_path)
        self.logger = logger or logging.getLogger(__name__)

    def _load(self) -> Dict[str, Any]:
        """Read the tree from the JSON file."""
        if not self.file_path.exists():
            return {}

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                tree = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Error reading {self.file_path}: {e}")
            raise PersistenceError(f"Could not read {self.file_path}: {e}") from e

        if not isinstance(tree, dict):
            raise PersistenceError(f"Unexpected content in {self.file_path}")
        return tree

    def _save(self, tree: Dict[str, Any]) -> None:
        """Write the tree to the JSON file via a temporary file."""
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.file_path.parent), prefix=".state-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(tree, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.file_path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Error writing {self.file_path}: {e}")
            raise PersistenceError(f"Could not write {self.file_path}: {e}") from e

        self.logger.debug(f"Saved state to {self.file_path}")
