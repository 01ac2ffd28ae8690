"""
Data models and schemas.
"""

from .crs import BoundingBox, CoordinateOrder, ReferenceSystem, bounding_box_contains

__all__ = [
    "BoundingBox",
    "CoordinateOrder",
    "ReferenceSystem",
    "bounding_box_contains",
]
