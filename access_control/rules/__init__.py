"""
Declaration model for access control maps.

Modules of interest:
- models: RoleName, ResolvedMaps and their serializable responses.
- navigation: ProjectModule and Menu trees whose nodes grant paths.
- mapper: The builder handed to every role declaration.
"""

from .models import RoleName, ResolvedMaps, MapsResponse, NavigationNodeResponse
from .navigation import NavigationNode, ProjectModule, Menu
from .mapper import Mapper

__all__ = [
    "RoleName",
    "ResolvedMaps",
    "MapsResponse",
    "NavigationNodeResponse",
    "NavigationNode",
    "ProjectModule",
    "Menu",
    "Mapper",
]
