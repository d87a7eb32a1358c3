"""
Date and timezone utilities.

Centralizes timestamp parsing and comparison so naive and timezone-aware
device timestamps compare consistently.
"""

from datetime import datetime, timedelta

import pytz

from .exceptions import InvalidTimestamp


class DateUtils:
    """Static helpers for device timestamp handling."""

    @staticmethod
    def to_utc(dt: datetime) -> datetime:
        """
        Convert datetime to UTC.

        Args:
            dt: Datetime object (can be naive or aware)

        Returns:
            Datetime in UTC (timezone-aware)
        """
        if dt.tzinfo is None:
            # Assume UTC if no timezone
            return pytz.UTC.localize(dt)
        return dt.astimezone(pytz.UTC)

    @staticmethod
    def parse_timestamp(timestamp: str) -> datetime:
        """
        Parse an ISO-8601 device timestamp into an aware UTC datetime.

        Args:
            timestamp: Timestamp string, e.g. '2020-04-02T22:54:48' or
                       '2020-04-02T22:54:48Z'

        Returns:
            Timezone-aware datetime in UTC

        Raises:
            InvalidTimestamp: If the value is not a parseable ISO-8601 string
        """
        if not isinstance(timestamp, str) or not timestamp:
            raise InvalidTimestamp(f"Invalid timestamp: {timestamp!r}")

        value = timestamp
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"

        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise InvalidTimestamp(f"Invalid timestamp: {timestamp!r}") from e

        return DateUtils.to_utc(parsed)

    @staticmethod
    def time_between(head_timestamp: str, latest_timestamp: str) -> timedelta:
        """
        Get the signed time difference latest - head.

        Args:
            head_timestamp: Earlier timestamp (ISO-8601)
            latest_timestamp: Later timestamp (ISO-8601)

        Returns:
            Difference as timedelta (negative if latest is older than head)
        """
        head = DateUtils.parse_timestamp(head_timestamp)
        latest = DateUtils.parse_timestamp(latest_timestamp)
        return latest - head


def enough_time_passed(
    head_timestamp: str,
    latest_timestamp: str,
    threshold_minutes: float
) -> bool:
    """
    Return True if latest_timestamp is at least threshold_minutes after head_timestamp.

    Args:
        head_timestamp: Timestamp in ISO date-time format
        latest_timestamp: Timestamp in ISO date-time format
        threshold_minutes: Minimum difference in minutes

    Returns:
        True if latest - head >= threshold

    Raises:
        InvalidTimestamp: If either timestamp cannot be parsed
    """
    difference = DateUtils.time_between(head_timestamp, latest_timestamp)
    return difference >= timedelta(minutes=threshold_minutes)
