"""
Raw data backfilling for device graphs.

Graph points built from final data lack the high-resolution particle bins.
The backfiller walks the graph newest to oldest while holding one raw data
page at a time, fetching older pages only when a graph point falls below
the current page.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.date_utils import DateUtils
from ..core.exceptions import BudgetExhausted
from ..processing import join_raw_into_final, needs_raw_data
from .paginator import PageCursor, PaginatedFetcher


class RawDataBackfiller:
    """Add matching raw data to graph points that are missing it."""

    def __init__(
        self,
        fetcher: PaginatedFetcher,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize raw data backfiller.

        Args:
            fetcher: Paginated fetcher for raw data
            logger: Logger instance
        """
        self.fetcher = fetcher
        self.logger = logger or logging.getLogger(__name__)

    def backfill(
        self,
        token: str,
        sn: str,
        graph: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """
        Try to find matching raw data for graph points that are missing it.

        Args:
            token: Authorization header value
            sn: Device serial number
            graph: Graph, newest first

        Returns:
            New graph with each point replaced by its backfilled version

        Raises:
            UpstreamFetchError: If a page request fails
            InvalidTimestamp: If a timestamp cannot be parsed
        """
        self.logger.info(f"{sn}: Trying to add raw data to graph if needed")

        cursor = self.fetcher.cursor(token, sn, raw=True)
        new_graph = []
        matched = 0

        for data_point in graph:
            if needs_raw_data(data_point):
                backfilled = self._backfill_data_point(cursor, sn, data_point)
                if backfilled is not data_point:
                    matched += 1
                data_point = backfilled
            new_graph.append(data_point)

        self.logger.info(
            f"{sn}: Added raw data to {matched} graph points "
            f"({cursor.requests_made} requests)"
        )
        return new_graph

    def _backfill_data_point(
        self,
        cursor: PageCursor,
        sn: str,
        data_point: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Find the raw sample with the same timestamp as data_point.

        Returns:
            The joined data point, or data_point itself if no match was found
        """
        timestamp = data_point.get("timestamp")
        date = DateUtils.parse_timestamp(timestamp)
        page = cursor.page or cursor.first()

        while True:
            if page.is_empty:
                return data_point

            if date > DateUtils.parse_timestamp(page.head_timestamp):
                # Raw data for this point hasn't been published yet
                return data_point

            if date < DateUtils.parse_timestamp(page.tail_timestamp):
                try:
                    page = cursor.advance()
                except BudgetExhausted as e:
                    self.logger.debug(f"{sn}: No raw data for {timestamp}: {e}")
                    return data_point
                continue

            for raw_data_point in page.data:
                if raw_data_point.get("timestamp") == timestamp:
                    return join_raw_into_final(data_point, raw_data_point)

            # In range but never reported
            return data_point
