"""
Device API page model.

Contains the DTO for one page of the paginated device data endpoints.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.exceptions import UpstreamFetchError


@dataclass
class RemotePage:
    """One page of device data, newest first when requested sorted."""

    data: List[Dict[str, Any]] = field(default_factory=list)
    next_url: Optional[str] = None
    per_page: Optional[int] = None

    @classmethod
    def from_json(cls, payload: Any) -> "RemotePage":
        """
        Build a page from the API response envelope.

        Args:
            payload: Decoded JSON of the form {"data": [...], "meta": {...}}

        Returns:
            RemotePage instance

        Raises:
            UpstreamFetchError: If the envelope is malformed
        """
        if not isinstance(payload, dict):
            raise UpstreamFetchError(f"Unexpected response format: {type(payload).__name__}")

        data = payload.get("data")
        if not isinstance(data, list):
            raise UpstreamFetchError("Response is missing the 'data' list")

        meta = payload.get("meta") or {}
        per_page = meta.get("per_page")
        try:
            per_page = int(per_page) if per_page is not None else None
        except (TypeError, ValueError):
            per_page = None

        return cls(data=data, next_url=meta.get("next_url") or None, per_page=per_page)

    @property
    def is_empty(self) -> bool:
        """True if the page holds no data points."""
        return not self.data

    @property
    def head_timestamp(self) -> Optional[str]:
        """Timestamp of the first (newest) data point."""
        return self.data[0].get("timestamp") if self.data else None

    @property
    def tail_timestamp(self) -> Optional[str]:
        """Timestamp of the last (oldest) data point."""
        return self.data[-1].get("timestamp") if self.data else None
