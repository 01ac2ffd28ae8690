"""
Coordinate Reference System (CRS) management module.

This module provides:
- A registry of reference systems keyed by nickname
- Conversion between decimal degrees and degrees/minutes/seconds
- UTM zone selection
- Parsing of coordinates typed as free text
"""

from geopoint.core.crs.dms import degrees_to_dm, degrees_to_dms, dms_to_degrees
from geopoint.core.crs.engine import GeodeticEngine
from geopoint.core.crs.parser import bbox_from_string, point_from_string, ring_from_string
from geopoint.core.crs.registry import (
    ProjectionLike,
    ProjectionRegistry,
    get_default_registry,
    set_default_registry,
)
from geopoint.core.crs.utm import (
    best_utm_projection,
    parse_utm_zone,
    utm_letter,
    zone_for,
    zone_for_longlat,
)

__all__ = [
    # DMS
    "degrees_to_dm",
    "degrees_to_dms",
    "dms_to_degrees",
    # Engine
    "GeodeticEngine",
    # Parser
    "bbox_from_string",
    "point_from_string",
    "ring_from_string",
    # Registry
    "ProjectionLike",
    "ProjectionRegistry",
    "get_default_registry",
    "set_default_registry",
    # UTM utilities
    "best_utm_projection",
    "parse_utm_zone",
    "utm_letter",
    "zone_for",
    "zone_for_longlat",
]
