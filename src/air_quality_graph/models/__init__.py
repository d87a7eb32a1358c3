"""
Data models for the air quality graph service.

Contains DTOs for device API responses. Data points themselves are kept as
plain dictionaries, exactly as the device API returns them.
"""

from .page import RemotePage

__all__ = [
    "RemotePage",
]
