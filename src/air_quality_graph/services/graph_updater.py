"""
Graph node updating.

Composes window building and backfilling against a device's stored state.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core import constants
from ..processing import remove_unused_data
from ..writer import StateWriter
from .gap_backfiller import GapBackfiller
from .graph_builder import build_new_graph
from .raw_backfiller import RawDataBackfiller


class GraphNodeUpdater:
    """Update the graph node of a device from its latest node."""

    def __init__(
        self,
        writer: StateWriter,
        gap_backfiller: GapBackfiller,
        raw_backfiller: RawDataBackfiller,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize graph node updater.

        Args:
            writer: State writer for reading and writing device nodes
            gap_backfiller: Backfiller for gaps behind the graph head
            raw_backfiller: Backfiller for missing raw data
            logger: Logger instance
        """
        self.writer = writer
        self.gap_backfiller = gap_backfiller
        self.raw_backfiller = raw_backfiller
        self.logger = logger or logging.getLogger(__name__)

    def update_graph_node(self, token: str, sn: str) -> Optional[List[Dict[str, Any]]]:
        """
        Try to update the graph node if the latest node exists.

        If backfilling fails for any reason the windowed graph is written
        without it.

        Args:
            token: Authorization header value
            sn: Device serial number

        Returns:
            The graph that was written, or None if there is no latest node

        Raises:
            InvalidTimestamp: If stored timestamps cannot be parsed
            PersistenceError: If reading or writing state fails
        """
        latest_from_db = self.writer.read_latest(sn)
        if not latest_from_db:
            self.logger.info(f"{sn}: Latest node doesn't exist, nothing to add to graph")
            return None

        latest_data_point = remove_unused_data(latest_from_db, constants.GRAPH_NODE_KEYS)

        graph_from_db = self.writer.read_graph(sn)
        if not isinstance(graph_from_db, list) or not graph_from_db:
            self.logger.info(f"{sn}: Creating graph node")
            new_graph = [latest_data_point]
            self.writer.write_graph(sn, new_graph)
            return new_graph

        updated_graph = build_new_graph(graph_from_db, latest_data_point)
        if updated_graph is graph_from_db:
            self.logger.info(
                f"{sn}: A data point within {constants.GRAPH_ADMISSION_MINUTES} minutes "
                f"of the latest timestamp already exists"
            )

        try:
            graph_to_write = self.gap_backfiller.backfill(token, sn, updated_graph)
            graph_to_write = self.raw_backfiller.backfill(token, sn, graph_to_write)
        except Exception as e:
            self.logger.error(
                f"{sn}: Backfilling graph failed, writing graph without it: {e}",
                exc_info=True
            )
            graph_to_write = updated_graph

        self.writer.write_graph(sn, graph_to_write)
        return graph_to_write
