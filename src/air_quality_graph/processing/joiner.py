"""
Raw/final data joining.

Final data points carry aggregated pollutant values; raw data points carry
the high-resolution particle bins on a denser cadence.
"""

from typing import Any, Dict, Optional, Sequence

from ..core import constants


def needs_raw_data(
    data_point: Dict[str, Any],
    raw_keys: Sequence[str] = constants.RAW_KEYS
) -> bool:
    """
    Check if any raw data field is missing from the data point.

    Args:
        data_point: The data point to check
        raw_keys: Raw field names

    Returns:
        True if at least one raw field is missing
    """
    return any(key not in data_point for key in raw_keys)


def join_raw_into_final(
    final_data_point: Dict[str, Any],
    raw_data_point: Optional[Dict[str, Any]],
    raw_keys: Sequence[str] = constants.RAW_KEYS
) -> Dict[str, Any]:
    """
    Add raw data to a final data point.

    If both points share a timestamp the raw fields are copied onto the final
    point. Otherwise the raw fields are stored under 'lastRaw' together with
    the raw point's timestamps, so the newest raw sample is kept even though
    it doesn't line up with this final sample.

    Args:
        final_data_point: Final data point
        raw_data_point: Raw data point (None if no raw data is available)
        raw_keys: Raw field names

    Returns:
        New data point with raw data added
    """
    joined = dict(final_data_point)
    if raw_data_point is None:
        return joined

    raw_fields = {key: raw_data_point[key] for key in raw_keys if key in raw_data_point}

    if final_data_point.get("timestamp") == raw_data_point.get("timestamp"):
        joined.update(raw_fields)
    else:
        last_raw = dict(raw_fields)
        last_raw["timestamp"] = raw_data_point.get("timestamp")
        last_raw["timestamp_local"] = raw_data_point.get("timestamp_local")
        joined[constants.LAST_RAW_KEY] = last_raw

    return joined
