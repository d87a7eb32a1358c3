"""
Air Quality Graph Service

This package keeps per-device "latest" and 24 hour "graph" views of
QuantAQ air-quality telemetry up to date, backfilling gaps and raw
particle data from the device API.
"""

__version__ = "0.1.0"
__author__ = "Air Partners"
__description__ = "Latest and graph views of air-quality telemetry"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "AirQualityGraphApp":
        from .main import AirQualityGraphApp
        return AirQualityGraphApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AirQualityGraphApp",
]
