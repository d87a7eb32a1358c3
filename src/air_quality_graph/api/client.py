"""
Base API client for the QuantAQ device API.

Handles HTTP requests, session management, and error handling.
"""

import logging
import threading
from typing import Dict, Any, List, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core.exceptions import UpstreamFetchError


class APIClient:
    """
    Base client for interacting with the QuantAQ device API.

    Devices are processed on a thread pool, so every thread gets its own
    requests.Session; close() closes all of them.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: Base URL for the device endpoints
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.logger = logger or logging.getLogger(__name__)
        self.verify_ssl = verify_ssl

        # Disable SSL warnings when verify_ssl is False
        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """Session of the calling thread, created on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._create_session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def _create_session(self) -> requests.Session:
        """Create a session with retry strategy and JSON headers."""
        session = requests.Session()
        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json"
        })
        return session

    def _make_request(
        self,
        method: str,
        url: str,
        token: str,
        **kwargs
    ) -> requests.Response:
        """
        Make an authenticated HTTP request.

        The token is sent with this request only; the session never stores it.

        Args:
            method: HTTP method
            url: Absolute URL
            token: Authorization header value (e.g. 'Basic ...')
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            UpstreamFetchError: On request failure
        """
        kwargs.setdefault("verify", self.verify_ssl)
        headers = dict(kwargs.pop("headers", None) or {})
        headers["Authorization"] = token

        self.logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
                headers=headers,
                **kwargs
            )
            response.raise_for_status()
            return response

        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise UpstreamFetchError(f"{method} {url} failed: {e}") from e

    def _decode_json(self, response: requests.Response) -> Any:
        """Decode a JSON response body."""
        try:
            return response.json()
        except ValueError as e:
            self.logger.error(f"Malformed JSON from {response.url}: {e}")
            raise UpstreamFetchError(f"Malformed JSON from {response.url}") from e

    def get(
        self,
        endpoint: str,
        token: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make GET request.

        Args:
            endpoint: API endpoint relative to the base URL
            token: Authorization header value
            params: Query parameters

        Returns:
            Decoded JSON response
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        response = self._make_request("GET", url, token, params=params)
        return self._decode_json(response)

    def get_url(self, url: str, token: str) -> Any:
        """
        Make GET request to an absolute URL (e.g. a pagination cursor).

        Args:
            url: Absolute URL
            token: Authorization header value

        Returns:
            Decoded JSON response
        """
        response = self._make_request("GET", url, token)
        return self._decode_json(response)

    def close(self) -> None:
        """Close the sessions of all threads."""
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
