"""
Cache package for access control.

Provides the in-process cache that keeps one compiled ResolvedMaps per
(role, context) pair for the life of the process or until cleared.
"""

from .maps_cache import MapsCache

__all__ = ["MapsCache"]
