"""Exception types shared across the air quality graph service."""

__all__ = [
    "InvalidTimestamp",
    "UpstreamFetchError",
    "PersistenceError",
    "BudgetExhausted",
]


class InvalidTimestamp(ValueError):
    """Raised when a timestamp string cannot be parsed."""
    pass


class UpstreamFetchError(RuntimeError):
    """Raised when the device API request fails or returns malformed data."""
    pass


class PersistenceError(RuntimeError):
    """Raised when reading from or writing to the state store fails."""
    pass


class BudgetExhausted(Exception):
    """
    Raised when a page cursor may not fetch any further pages.

    Either the API reported no next page or the request budget is used up.
    Backfillers treat this as a normal stop condition.
    """

    def __init__(self, requests_made: int, max_requests: int, has_next: bool):
        self.requests_made = requests_made
        self.max_requests = max_requests
        self.has_next = has_next
        reason = "request budget exhausted" if has_next else "no further pages"
        super().__init__(f"{reason} after {requests_made}/{max_requests} requests")
