"""
Navigation tree nodes for access control maps.

Project modules are the roots of the navigation tree, menus are the
inner nodes and may nest to any depth. Every node that declares a path
grants it, so a node's allowed paths are its own path plus everything
granted below it.
"""

import re
from typing import Any, Callable, Dict, List, Optional

from .models import NavigationNodeResponse


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


class NavigationNode:
    """A named node with an optional path and ordered children."""

    def __init__(self, name: Any, path: Optional[str] = None,
                 options: Optional[Dict[str, Any]] = None,
                 body: Optional[Callable[["NavigationNode"], Any]] = None):
        self.name = name
        self.path = path
        self.options: Dict[str, Any] = dict(options or {})
        self.children: List["Menu"] = []
        if body is not None:
            body(self)

    def _add_child(self, name: Any, path: Optional[str] = None,
                   options: Optional[Dict[str, Any]] = None,
                   body: Optional[Callable[["Menu"], Any]] = None) -> "Menu":
        child = Menu(name, path, options, body)
        self.children.append(child)
        return child

    def allowed(self) -> List[str]:
        """Return own path and every descendant path, de-duplicated."""
        paths: List[str] = []
        seen = set()
        # explicit stack keeps deep declarations off the interpreter stack
        stack = [self]
        while stack:
            node = stack.pop()
            if node.path is not None and node.path not in seen:
                seen.add(node.path)
                paths.append(node.path)
            stack.extend(reversed(node.children))
        return paths

    def uid(self) -> str:
        """Return a stable identifier derived from the name."""
        return _NON_ALNUM.sub("", str(self.name).lower()).strip("-")

    def to_response(self) -> NavigationNodeResponse:
        return NavigationNodeResponse(
            name=str(self.name),
            uid=self.uid(),
            path=self.path,
            options=dict(self.options),
            children=[child.to_response() for child in self.children]
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, path={self.path!r}, children={len(self.children)})"


class ProjectModule(NavigationNode):
    """Root of a navigation tree."""

    def menu(self, name: Any, path: Optional[str] = None,
             options: Optional[Dict[str, Any]] = None,
             body: Optional[Callable[["Menu"], Any]] = None) -> "Menu":
        """Add a menu; its path (and its submenus' paths) become allowed."""
        return self._add_child(name, path, options, body)

    @property
    def menus(self) -> List["Menu"]:
        return self.children


class Menu(NavigationNode):
    """Menu or submenu entry."""

    def add(self, name: Any, path: Optional[str] = None,
            options: Optional[Dict[str, Any]] = None,
            body: Optional[Callable[["Menu"], Any]] = None) -> "Menu":
        """Add a submenu."""
        return self._add_child(name, path, options, body)

    @property
    def items(self) -> List["Menu"]:
        return self.children
