"""
Access control maps for role-based path permissions.

Roles are declared once with allow/deny rules and a navigation tree of
project modules and menus. The registry compiles every declaration that
applies to a role into a ResolvedMaps, cached per (role, context).

- access_control.registry: Declaration entry point and resolution.
- access_control.rules: Mapper, navigation nodes and result models.
- access_control.cache: In-process cache of resolved maps.
"""

from .registry import AccessControlRegistry
from .rules import Mapper, Menu, NavigationNode, ProjectModule, ResolvedMaps, RoleName

__all__ = [
    "AccessControlRegistry",
    "Mapper",
    "Menu",
    "NavigationNode",
    "ProjectModule",
    "ResolvedMaps",
    "RoleName",
]
