"""
Latest node updating.

Fetches the newest final and raw data points of a device and stores the
restructured point as the device's latest node.
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..core import constants
from ..core.date_utils import enough_time_passed
from ..processing import restructure_data
from ..writer import StateWriter

if TYPE_CHECKING:
    from ..api import QuantAQAPI


def new_data_is_available(head: Dict[str, Any], latest: Dict[str, Any]) -> bool:
    """Check if the latest data point is at least one minute newer than head."""
    return enough_time_passed(
        head.get("timestamp"),
        latest.get("timestamp"),
        constants.NEW_DATA_MINUTES
    )


class LatestNodeUpdater:
    """Keep the latest node of a device in sync with the device API."""

    def __init__(
        self,
        api_client: "QuantAQAPI",
        writer: StateWriter,
        archive_data: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize latest node updater.

        Args:
            api_client: API client instance
            writer: State writer
            archive_data: Also store fetched final data points under {sn}/data
            logger: Logger instance
        """
        self.api_client = api_client
        self.writer = writer
        self.archive_data = archive_data
        self.logger = logger or logging.getLogger(__name__)

    def update_latest_node(self, token: str, sn: str) -> Optional[Dict[str, Any]]:
        """
        Write the newest data point of a device if it is new.

        Args:
            token: Authorization header value
            sn: Device serial number

        Returns:
            The data point that was written, or None if nothing changed

        Raises:
            UpstreamFetchError: If a request fails
            PersistenceError: If reading or writing state fails
        """
        latest_from_db = self.writer.read_latest(sn)

        page = self.api_client.get_data_page(token, sn)
        if page.is_empty:
            self.logger.warning(f"{sn}: No final data returned")
            return None
        final_data_point = page.data[0]

        if latest_from_db and not new_data_is_available(latest_from_db, final_data_point):
            self.logger.info(f"{sn}: No new data available")
            return None

        raw_data_point = self.api_client.get_latest_data_point(token, sn, raw=True)
        data_point = restructure_data(final_data_point, raw_data_point)
        self.writer.write_latest(sn, data_point)

        if self.archive_data:
            self.writer.archive_data_points(sn, page.data)

        return data_point
