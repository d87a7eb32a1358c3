"""
Data processing module for the air quality graph service.

Provides normalization of device data points and joining of raw data
into final data.
"""

from .joiner import join_raw_into_final, needs_raw_data
from .normalizer import (
    remove_unused_data,
    fix_negative_concentrations,
    trim_geo,
    restructure_data,
    normalize_graph_point,
)

__all__ = [
    "join_raw_into_final",
    "needs_raw_data",
    "remove_unused_data",
    "fix_negative_concentrations",
    "trim_geo",
    "restructure_data",
    "normalize_graph_point",
]
