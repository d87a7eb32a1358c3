"""
API layer for the QuantAQ device API.

Provides the HTTP client, credential handling, and device data operations.
"""

import logging
from typing import Optional

from .client import APIClient
from .auth import CredentialProvider
from .devices import DeviceDataAPI
from ..core import constants


class QuantAQAPI(APIClient, DeviceDataAPI):
    """
    Unified API client for the QuantAQ device API.

    Combines the HTTP session with device data operations.
    """

    def __init__(
        self,
        base_url: str = constants.DEFAULT_BASE_URL,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        limit: int = constants.DEFAULT_LIMIT,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            base_url: Base URL for the device endpoints
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            limit: Default 'limit' query parameter
            logger: Logger instance
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )
        self.default_limit = limit


__all__ = [
    "APIClient",
    "CredentialProvider",
    "DeviceDataAPI",
    "QuantAQAPI",
]
