"""
Data models for access control maps.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, Field

from shared.errors import InvalidRoleError

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from .navigation import NavigationNode


ROLE_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class RoleName:
    """Case-insensitive role identity."""
    value: str

    def __post_init__(self):
        object.__setattr__(self, "value", self.value.lower())

    @classmethod
    def parse(cls, raw: Any) -> "RoleName":
        """Validate a declared role, raising InvalidRoleError on bad input."""
        if isinstance(raw, RoleName):
            return raw
        if isinstance(raw, Enum):
            raw = raw.value
        if not isinstance(raw, str) or not ROLE_PATTERN.fullmatch(raw):
            raise InvalidRoleError(raw)
        return cls(raw)

    @classmethod
    def normalize(cls, raw: Any) -> "RoleName":
        """Lenient conversion for query time; never raises."""
        if isinstance(raw, RoleName):
            return raw
        if isinstance(raw, Enum):
            raw = raw.value
        return cls(str(raw))

    def __str__(self) -> str:
        return self.value


class NavigationNodeResponse(BaseModel):
    """Serialized navigation node."""
    name: str = Field(..., description="Declared node name")
    uid: str = Field(..., description="Normalized node identifier")
    path: Optional[str] = Field(None, description="Path opened by this node")
    options: Dict[str, Any] = Field(default_factory=dict, description="Display options")
    children: List["NavigationNodeResponse"] = Field(default_factory=list, description="Child nodes")


class MapsResponse(BaseModel):
    """Serialized resolved maps for one role."""
    role: str = Field(..., description="Resolved role")
    allowed: List[str] = Field(default_factory=list, description="Allowed paths")
    denied: List[str] = Field(default_factory=list, description="Denied paths")
    project_modules: List[NavigationNodeResponse] = Field(default_factory=list, description="Navigation trees")


NavigationNodeResponse.model_rebuild()


@dataclass(frozen=True)
class ResolvedMaps:
    """Compiled allow/deny sets and navigation for one (role, context)."""
    role: str
    allowed: FrozenSet[str] = frozenset()
    denied: FrozenSet[str] = frozenset()
    project_modules: Tuple["NavigationNode", ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not (self.allowed or self.denied or self.project_modules)

    def is_denied(self, path: str) -> bool:
        return path in self.denied

    def is_allowed(self, path: str) -> bool:
        return path in self.allowed and path not in self.denied

    def authorize(self, path: str, default: bool = False) -> bool:
        """Deny wins, then allow, otherwise the caller's default."""
        if path in self.denied:
            return False
        if path in self.allowed:
            return True
        return default

    def to_response(self) -> MapsResponse:
        """Convert to a serializable response."""
        return MapsResponse(
            role=self.role,
            allowed=sorted(self.allowed),
            denied=sorted(self.denied),
            project_modules=[node.to_response() for node in self.project_modules]
        )
