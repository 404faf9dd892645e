"""
Rule set builder for one role declaration.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .models import RoleName
from .navigation import ProjectModule


class Mapper:
    """Allow/deny rules and project modules declared for a set of roles.

    The declaration body runs once, inside the constructor, and receives
    the mapper plus the context it was built for (``None`` when the maps
    are resolved without one).
    """

    def __init__(self, roles: Iterable[RoleName], body: Callable[["Mapper", Any], Any],
                 context: Any = None):
        self.roles: Tuple[RoleName, ...] = tuple(roles)
        self.project_modules: List[ProjectModule] = []
        self._allowed: List[str] = []
        self._denied: List[str] = []
        body(self, context)

    def project_module(self, name: Any, path: Optional[str] = None,
                       options: Optional[Dict[str, Any]] = None,
                       body: Optional[Callable[[ProjectModule], Any]] = None) -> ProjectModule:
        """Create a new project module."""
        module = ProjectModule(name, path, options, body)
        self.project_modules.append(module)
        return module

    def allow(self, path: str) -> None:
        """Allow a path for the declared roles."""
        if path not in self._allowed:
            self._allowed.append(path)

    def deny(self, path: str) -> None:
        """Deny a path for the declared roles."""
        if path not in self._denied:
            self._denied.append(path)

    def is_applicable(self, role: Any) -> bool:
        """Return True if role is one of the declared roles."""
        return RoleName.normalize(role) in self.roles

    @property
    def denied(self) -> List[str]:
        return list(self._denied)

    def allowed(self) -> List[str]:
        """Return explicit allows plus every path in the project modules."""
        paths = list(self._allowed)
        seen = set(paths)
        for module in self.project_modules:
            for path in module.allowed():
                if path not in seen:
                    seen.add(path)
                    paths.append(path)
        return paths
