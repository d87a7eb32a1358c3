"""
Business logic services for the air quality graph service.

Services orchestrate API operations and maintain the per-device views.
"""

from .paginator import PageCursor, PaginatedFetcher
from .graph_builder import build_new_graph
from .gap_backfiller import GapBackfiller
from .raw_backfiller import RawDataBackfiller
from .graph_updater import GraphNodeUpdater
from .latest_updater import LatestNodeUpdater, new_data_is_available

__all__ = [
    "PageCursor",
    "PaginatedFetcher",
    "build_new_graph",
    "GapBackfiller",
    "RawDataBackfiller",
    "GraphNodeUpdater",
    "LatestNodeUpdater",
    "new_data_is_available",
]
