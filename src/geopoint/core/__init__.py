"""
Core functionality: configuration, logging, errors, projections and geometries.
"""
