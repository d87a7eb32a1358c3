"""
State writer module for persisting device views.

Handles writing the latest and graph nodes and archiving raw device data.
"""

import logging
from typing import Any, Dict, List, Optional

from .core.exceptions import PersistenceError
from .processing import trim_geo
from .storage import StateStore


class StateWriter:
    """Write device state to the state store."""

    def __init__(self, store: StateStore, logger: Optional[logging.Logger] = None):
        """
        Initialize state writer.

        Args:
            store: State store instance
            logger: Logger instance
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    def read_latest(self, sn: str) -> Optional[Dict[str, Any]]:
        """Read the latest node of a device."""
        return self.store.read(f"{sn}/latest")

    def read_graph(self, sn: str) -> Any:
        """Read the graph node of a device (None or any stored value)."""
        return self.store.read(f"{sn}/graph")

    def write_latest(self, sn: str, data_point: Dict[str, Any]) -> None:
        """
        Write the latest node of a device.

        Raises:
            PersistenceError: If the write fails
        """
        self._write(sn, "latest", data_point)
        self.logger.info(f"{sn}: Done updating latest node ({data_point.get('timestamp')})")

    def write_graph(self, sn: str, graph: List[Dict[str, Any]]) -> None:
        """
        Write the graph node of a device.

        Raises:
            PersistenceError: If the write fails
        """
        self._write(sn, "graph", graph)
        self.logger.info(f"{sn}: Done updating graph node ({len(graph)} points)")

    def archive_data_points(self, sn: str, data_points: List[Dict[str, Any]]) -> int:
        """
        Store fetched data points under {sn}/data/{timestamp}.

        Args:
            sn: Device serial number
            data_points: Data points as returned by the device API

        Returns:
            Number of archived data points

        Raises:
            PersistenceError: If the write fails
        """
        archive = {
            data_point["timestamp"]: trim_geo(data_point)
            for data_point in data_points
            if data_point.get("timestamp")
        }
        if not archive:
            return 0

        try:
            self.store.update(f"{sn}/data", archive)
        except PersistenceError:
            self.logger.error(f"{sn}: Failed to archive {len(archive)} data points")
            raise

        self.logger.debug(f"{sn}: Archived {len(archive)} data points")
        return len(archive)

    def _write(self, sn: str, node: str, value: Any) -> None:
        try:
            self.store.write(f"{sn}/{node}", value)
        except PersistenceError:
            self.logger.error(f"{sn}: Failed to write {node} node")
            raise

    def log_run_summary(self, status: Dict[str, bool], mode: str) -> None:
        """
        Log summary of a run over several devices.

        Args:
            status: Success status for each device
            mode: Run mode that was executed
        """
        total = len(status)
        successful = sum(1 for s in status.values() if s)
        failed = total - successful

        self.logger.info("=" * 60)
        self.logger.info(f"Run Summary ({mode})")
        self.logger.info("=" * 60)
        self.logger.info(f"Total devices: {total}")
        self.logger.info(f"Successful: {successful}")
        self.logger.info(f"Failed: {failed}")

        if failed > 0:
            self.logger.warning("Failed devices:")
            for sn, success in status.items():
                if not success:
                    self.logger.warning(f"  - {sn}")

        self.logger.info("=" * 60)
