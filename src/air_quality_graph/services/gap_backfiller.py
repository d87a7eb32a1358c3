"""
Gap backfilling for device graphs.

The final data feed can lag, so a newly admitted latest point may be far
newer than the next point in the graph. The backfiller pages through final
data and chains intermediate samples back toward the older point.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from ..core import constants
from ..core.date_utils import DateUtils, enough_time_passed
from ..core.exceptions import BudgetExhausted
from ..processing import normalize_graph_point
from .paginator import PaginatedFetcher


def _is_newer(timestamp: Optional[str], reference: str) -> bool:
    """True if timestamp is strictly after reference."""
    return DateUtils.time_between(reference, timestamp) > timedelta(0)


class GapBackfiller:
    """Fill the gap between the head of a graph and the point after it."""

    def __init__(
        self,
        fetcher: PaginatedFetcher,
        gap_minutes: float = constants.GAP_MINUTES,
        next_point_minutes: float = constants.GAP_NEXT_POINT_MINUTES,
        prev_point_minutes: float = constants.GAP_PREV_POINT_MINUTES,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize gap backfiller.

        Args:
            fetcher: Paginated fetcher for final data
            gap_minutes: Minimum spacing that counts as a gap
            next_point_minutes: Minimum age of a sample relative to the point chained from
            prev_point_minutes: Minimum age of the point before the gap relative to a sample
            logger: Logger instance
        """
        self.fetcher = fetcher
        self.gap_minutes = gap_minutes
        self.next_point_minutes = next_point_minutes
        self.prev_point_minutes = prev_point_minutes
        self.logger = logger or logging.getLogger(__name__)

    def has_gap(self, prev_point: Dict[str, Any], next_point: Dict[str, Any]) -> bool:
        """Check if the two points are at least gap_minutes apart."""
        return enough_time_passed(
            prev_point.get("timestamp"),
            next_point.get("timestamp"),
            self.gap_minutes
        )

    def backfill(
        self,
        token: str,
        sn: str,
        graph: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """
        Insert fetched final data points between the graph head and the next point.

        Args:
            token: Authorization header value
            sn: Device serial number
            graph: Graph, newest first

        Returns:
            [head, *inserted points, *rest of graph]; the input graph if there
            is no gap

        Raises:
            UpstreamFetchError: If a page request fails
            InvalidTimestamp: If a timestamp cannot be parsed
        """
        if len(graph) < 2:
            return graph

        head = graph[0]
        remainder = graph[1:]
        prev_point = remainder[0]
        prev_timestamp = prev_point.get("timestamp")

        if not self.has_gap(prev_point, head):
            return graph

        self.logger.info(
            f"{sn}: Gap between {prev_timestamp} and {head.get('timestamp')}, trying to backfill"
        )

        cursor = self.fetcher.cursor(token, sn, raw=False)
        page = cursor.first()
        inserted: List[Dict[str, Any]] = []
        next_point = head
        gap_closed = False

        while not gap_closed:
            if page.is_empty or not _is_newer(page.head_timestamp, prev_timestamp):
                # Nothing upstream is newer than the point before the gap
                break

            for sample in page.data:
                sample_timestamp = sample.get("timestamp")
                if not _is_newer(sample_timestamp, prev_timestamp):
                    break
                if (
                    enough_time_passed(
                        sample_timestamp, next_point.get("timestamp"), self.next_point_minutes
                    )
                    and enough_time_passed(prev_timestamp, sample_timestamp, self.prev_point_minutes)
                ):
                    next_point = normalize_graph_point(sample)
                    inserted.append(next_point)
                    if not self.has_gap(prev_point, next_point):
                        gap_closed = True
                        break

            if gap_closed or not _is_newer(page.tail_timestamp, prev_timestamp):
                break

            try:
                page = cursor.advance()
            except BudgetExhausted as e:
                self.logger.debug(f"{sn}: Stopped gap backfill: {e}")
                break

        self.logger.info(
            f"{sn}: Inserted {len(inserted)} data points into gap "
            f"({cursor.requests_made} requests)"
        )
        return [head] + inserted + remainder
