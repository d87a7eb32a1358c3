"""
Data point normalization.

Restricts data points to the fields a view needs, clamps negative
pollutant concentrations and reduces geo precision. None of these
functions mutate their input.
"""

from decimal import Decimal, ROUND_HALF_UP
from numbers import Number
from typing import Any, Dict, Optional, Sequence

from ..core import constants
from .joiner import join_raw_into_final


def remove_unused_data(
    data_point: Dict[str, Any],
    keys_to_keep: Sequence[str]
) -> Dict[str, Any]:
    """
    Return a new data point without unused fields.

    Args:
        data_point: The data point to clean
        keys_to_keep: Field names to keep; missing ones are skipped

    Returns:
        New data point holding only the kept fields
    """
    return {key: data_point[key] for key in keys_to_keep if key in data_point}


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def fix_negative_concentrations(
    data_point: Dict[str, Any],
    keys_to_fix: Sequence[str] = constants.POLLUTANT_KEYS
) -> Dict[str, Any]:
    """
    Round negative pollutant concentrations up to 0.

    Args:
        data_point: The data point to fix
        keys_to_fix: Fields to clamp; absent or non-numeric values pass through

    Returns:
        New data point with non-negative concentrations
    """
    fixed = dict(data_point)
    for key in keys_to_fix:
        value = fixed.get(key)
        if _is_number(value) and value < 0:
            fixed[key] = 0
    return fixed


def _round_half_up(value: Any, decimals: int) -> float:
    """Round the exact binary value of a coordinate, ties away from zero."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def trim_geo(
    data_point: Dict[str, Any],
    decimals: int = constants.GEO_DECIMALS
) -> Dict[str, Any]:
    """
    Reduce lat/lon precision to 3 decimal places.

    Args:
        data_point: The data point to fix
        decimals: Number of decimal places to keep

    Returns:
        New data point; unchanged copy if there is no geo field
    """
    trimmed = dict(data_point)
    geo = trimmed.get("geo")
    if not isinstance(geo, dict):
        return trimmed

    geo = dict(geo)
    for key in ("lat", "lon"):
        if geo.get(key) is not None:
            geo[key] = _round_half_up(geo[key], decimals)
    trimmed["geo"] = geo
    return trimmed


def restructure_data(
    final_data_point: Dict[str, Any],
    raw_data_point: Optional[Dict[str, Any]],
    keys_to_keep: Sequence[str] = constants.LATEST_NODE_KEYS
) -> Dict[str, Any]:
    """
    Build a stored data point from a final and a raw data point.

    Adds raw data, removes unused data, fixes negative values, and trims
    geo data, in that order.

    Args:
        final_data_point: Final data point
        raw_data_point: Raw data point or None
        keys_to_keep: Allow-list of the target view

    Returns:
        Normalized data point
    """
    data_point = join_raw_into_final(final_data_point, raw_data_point)
    data_point = remove_unused_data(data_point, keys_to_keep)
    data_point = fix_negative_concentrations(data_point)
    return trim_geo(data_point)


def normalize_graph_point(data_point: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a fetched final data point for the graph view."""
    data_point = remove_unused_data(data_point, constants.GRAPH_NODE_KEYS)
    data_point = fix_negative_concentrations(data_point)
    return trim_geo(data_point)
