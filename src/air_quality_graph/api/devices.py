"""
Device data operations for the QuantAQ device API.

Handles retrieval of final and raw data pages for a device.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..core import constants
from ..models.page import RemotePage


class DeviceDataAPI:
    """Device data-related API operations."""

    # Type hints for attributes provided by APIClient base class
    logger: logging.Logger
    base_url: str
    default_limit: int = constants.DEFAULT_LIMIT
    get_url: Callable[[str, str], Any]

    def get_endpoint(
        self,
        sn: str,
        raw: bool = False,
        page: int = 1,
        per_page: int = constants.DEFAULT_PER_PAGE,
        limit: Optional[int] = None,
        sort_desc: bool = False
    ) -> str:
        """
        Build the data endpoint URL for a device.

        Args:
            sn: Device serial number
            raw: Use the raw (high-resolution) endpoint
            page: Page number, 1 being the most recent data
            per_page: Number of data points per page
            limit: Maximum number of data points over all pages
            sort_desc: Request data sorted newest first

        Returns:
            Absolute endpoint URL
        """
        if limit is None:
            limit = self.default_limit
        path = "data/raw" if raw else "data"
        url = f"{self.base_url}/{sn}/{path}/?page={page}&per_page={per_page}&limit={limit}"
        if sort_desc:
            url += "&sort=timestamp,desc"
        return url

    def get_page(self, token: str, url: str) -> RemotePage:
        """
        Fetch one page of device data.

        Args:
            token: Authorization header value
            url: Page URL (from get_endpoint or a next_url cursor)

        Returns:
            RemotePage
        """
        payload = self.get_url(url, token)
        page = RemotePage.from_json(payload)
        self.logger.debug(f"Fetched {len(page.data)} data points from {url}")
        return page

    def get_data_page(
        self,
        token: str,
        sn: str,
        raw: bool = False,
        page: int = 1,
        per_page: int = constants.DEFAULT_PER_PAGE,
        limit: Optional[int] = None,
        sort_desc: bool = False
    ) -> RemotePage:
        """
        Fetch a page of final or raw data for a device.

        Args:
            token: Authorization header value
            sn: Device serial number
            raw: Use the raw endpoint
            page: Page number
            per_page: Number of data points per page
            limit: Maximum number of data points over all pages
            sort_desc: Request data sorted newest first

        Returns:
            RemotePage
        """
        url = self.get_endpoint(sn, raw, page, per_page, limit, sort_desc)
        return self.get_page(token, url)

    def get_latest_data_point(
        self,
        token: str,
        sn: str,
        raw: bool = False
    ) -> Optional[Dict[str, Any]]:
        """
        Fetch the most recent final or raw data point of a device.

        Args:
            token: Authorization header value
            sn: Device serial number
            raw: Use the raw endpoint

        Returns:
            Newest data point, or None if the device reported nothing
        """
        page = self.get_data_page(token, sn, raw=raw)
        if page.is_empty:
            self.logger.warning(f"{sn}: No {'raw' if raw else 'final'} data returned")
            return None
        return page.data[0]
