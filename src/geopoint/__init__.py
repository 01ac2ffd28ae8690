"""
GeoPoint - projection-aware points, lines and surfaces.

This package provides a projection registry, tolerant coordinate string
parsing and reprojection of simple geometries on top of pyproj and shapely.
"""

__version__ = "0.1.0"
