"""
Pytest configuration and shared fixtures for all tests.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add src to sys.path so the package imports without installation
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from air_quality_graph.api.devices import DeviceDataAPI  # noqa: E402
from air_quality_graph.core.exceptions import UpstreamFetchError  # noqa: E402
from air_quality_graph.storage import InMemoryStore  # noqa: E402

BASE_URL = "https://quant-aq.test/device-api/v1/devices"
TOKEN = "Basic dGVzdF9rZXk6"
SN = "SN000-TEST"


class FakeDeviceAPI(DeviceDataAPI):
    """
    Device API serving canned pages.

    Pages are registered per endpoint kind ('final' or 'raw') as lists of
    data point lists, newest page first. Every page links to the next one
    through a next_url, the last page has none.
    """

    def __init__(self, sn: str = SN):
        self.base_url = BASE_URL
        self.default_limit = 20
        self.logger = logging.getLogger("tests.fake_api")
        self.sn = sn
        self.responses: Dict[str, Any] = {}
        self.requested_urls: List[str] = []
        self.fail_on: Optional[str] = None

    def add_pages(self, pages: List[List[Dict[str, Any]]], raw: bool = False,
                  per_page: int = 100, limit: int = 1400) -> None:
        kind = "raw" if raw else "final"
        first_url = self.get_endpoint(
            self.sn, raw=raw, page=1, per_page=per_page, limit=limit, sort_desc=True
        )
        urls = [first_url] + [
            f"{BASE_URL}/{self.sn}/{kind}-cursor/{i}" for i in range(2, len(pages) + 1)
        ]
        for i, data in enumerate(pages):
            next_url = urls[i + 1] if i + 1 < len(urls) else None
            self.responses[urls[i]] = {
                "data": data,
                "meta": {"next_url": next_url, "per_page": per_page},
            }

    def add_response(self, url: str, payload: Any) -> None:
        self.responses[url] = payload

    def get_url(self, url: str, token: str) -> Any:
        assert token == TOKEN
        self.requested_urls.append(url)
        if self.fail_on is not None and self.fail_on in url:
            raise UpstreamFetchError(f"GET {url} failed")
        if url not in self.responses:
            raise UpstreamFetchError(f"GET {url} failed: 404")
        return self.responses[url]

    def requests_to(self, kind: str) -> int:
        marker = "/data/raw/" if kind == "raw" else "/data/?"
        cursor = f"/{kind}-cursor/"
        return sum(1 for url in self.requested_urls if marker in url or cursor in url)


@pytest.fixture
def fake_api():
    """Device API serving canned pages."""
    return FakeDeviceAPI()


@pytest.fixture
def store():
    """Empty in-memory state store."""
    return InMemoryStore()


@pytest.fixture
def token():
    return TOKEN


@pytest.fixture
def sn():
    return SN


@pytest.fixture
def base_url():
    return BASE_URL


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring API access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
