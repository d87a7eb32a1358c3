"""
Graph window building.

Admits a new latest data point at the head of a device's graph and evicts
points that fall out of the 24 hour window.
"""

from datetime import timedelta
from typing import Any, Dict, List

from ..core import constants
from ..core.date_utils import DateUtils, enough_time_passed


def build_new_graph(
    current_graph: List[Dict[str, Any]],
    latest_data_point: Dict[str, Any],
    admission_minutes: float = constants.GRAPH_ADMISSION_MINUTES,
    window_hours: float = constants.GRAPH_WINDOW_HOURS
) -> List[Dict[str, Any]]:
    """
    Build a new graph headed by the latest data point.

    The graph is only rebuilt if the latest data point is at least 15 minutes
    newer than the newest point in the graph; otherwise current_graph itself
    is returned. Points more than 24 hours older than the latest data point
    are dropped; the rest keep their order.

    Args:
        current_graph: Existing graph, newest first (non-empty)
        latest_data_point: Data point for the latest timestamp
        admission_minutes: Minimum age difference to admit the latest point
        window_hours: Maximum age of points relative to the latest point

    Returns:
        New graph, or current_graph if nothing changed

    Raises:
        InvalidTimestamp: If a timestamp cannot be parsed
    """
    if not enough_time_passed(
        current_graph[0].get("timestamp"),
        latest_data_point.get("timestamp"),
        admission_minutes
    ):
        return current_graph

    latest_date = DateUtils.parse_timestamp(latest_data_point.get("timestamp"))
    threshold = timedelta(hours=window_hours)

    new_graph = [latest_data_point]
    for data_point in current_graph:
        date = DateUtils.parse_timestamp(data_point.get("timestamp"))
        if latest_date - date <= threshold:
            new_graph.append(data_point)
    return new_graph
