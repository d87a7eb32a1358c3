"""
Paginated fetching of device data.

A PageCursor holds exactly one fetched page at a time and is advanced
explicitly by its caller, within a fixed request budget.
"""

import logging
from typing import Optional, TYPE_CHECKING

from ..core import constants
from ..core.exceptions import BudgetExhausted
from ..models.page import RemotePage

if TYPE_CHECKING:
    from ..api import QuantAQAPI


class PageCursor:
    """Cursor over the newest-first pages of a device data endpoint."""

    def __init__(
        self,
        api_client: "QuantAQAPI",
        token: str,
        sn: str,
        raw: bool = False,
        per_page: int = constants.BACKFILL_PER_PAGE,
        limit: int = constants.BACKFILL_LIMIT,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize page cursor. No request is made until first().

        Args:
            api_client: API client instance
            token: Authorization header value
            sn: Device serial number
            raw: Page through raw data instead of final data
            per_page: Number of data points per page
            limit: Maximum number of data points; limit // per_page is the request budget
            logger: Logger instance
        """
        self.api_client = api_client
        self.token = token
        self.sn = sn
        self.raw = raw
        self.per_page = per_page
        self.limit = limit
        self.max_requests = max(1, limit // per_page)
        self.logger = logger or logging.getLogger(__name__)

        self.page: Optional[RemotePage] = None
        self.requests_made = 0

    @property
    def kind(self) -> str:
        return "raw" if self.raw else "final"

    @property
    def has_next(self) -> bool:
        """True if the current page links to an older page."""
        return self.page is not None and bool(self.page.next_url)

    @property
    def can_advance(self) -> bool:
        """True if another page exists and the request budget allows fetching it."""
        return self.has_next and self.requests_made < self.max_requests

    def first(self) -> RemotePage:
        """
        Fetch the newest page.

        Returns:
            The newest page

        Raises:
            UpstreamFetchError: If the request fails
        """
        if self.page is not None:
            return self.page

        url = self.api_client.get_endpoint(
            self.sn,
            raw=self.raw,
            page=1,
            per_page=self.per_page,
            limit=self.limit,
            sort_desc=True
        )
        return self._fetch(url)

    def advance(self) -> RemotePage:
        """
        Fetch the next older page.

        Returns:
            The next page, which becomes the current page

        Raises:
            BudgetExhausted: If there is no next page or the budget is used up
            UpstreamFetchError: If the request fails
        """
        if self.page is None:
            return self.first()

        if not self.can_advance:
            raise BudgetExhausted(self.requests_made, self.max_requests, self.has_next)

        return self._fetch(self.page.next_url)

    def _fetch(self, url: str) -> RemotePage:
        self.requests_made += 1
        self.logger.debug(
            f"{self.sn}: {self.kind} data request {self.requests_made}/{self.max_requests}"
        )
        self.page = self.api_client.get_page(self.token, url)
        return self.page


class PaginatedFetcher:
    """Create page cursors against the device API."""

    def __init__(
        self,
        api_client: "QuantAQAPI",
        per_page: int = constants.BACKFILL_PER_PAGE,
        limit: int = constants.BACKFILL_LIMIT,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize paginated fetcher.

        Args:
            api_client: API client instance
            per_page: Number of data points per page
            limit: Maximum number of data points per cursor
            logger: Logger instance
        """
        self.api_client = api_client
        self.per_page = per_page
        self.limit = limit
        self.logger = logger or logging.getLogger(__name__)

    def cursor(self, token: str, sn: str, raw: bool = False) -> PageCursor:
        """
        Open a cursor over final or raw data pages.

        Args:
            token: Authorization header value
            sn: Device serial number
            raw: Page through raw data

        Returns:
            New PageCursor with no page fetched yet
        """
        return PageCursor(
            self.api_client,
            token,
            sn,
            raw=raw,
            per_page=self.per_page,
            limit=self.limit,
            logger=self.logger
        )
