"""
Shared error handling for the access control layer.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class AccessLayerException(Exception):
    """Base exception for access control components."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class AccessControlError(AccessLayerException):
    """Access control declaration errors."""

    def __init__(self, message: str = "Access control error", details: Optional[Dict[str, Any]] = None,
                 code: str = "ACCESS_CONTROL_ERROR"):
        super().__init__(code, message, details)


class InvalidRoleError(AccessControlError):
    """Raised when a declared role is not a valid role identifier."""

    def __init__(self, role: Any, details: Optional[Dict[str, Any]] = None):
        self.role = role
        merged = {"role": repr(role)}
        merged.update(details or {})
        super().__init__(f"Role {role!r} must be an identifier-like string", merged, code="INVALID_ROLE")


class DeclarationError(AccessControlError):
    """Raised when a declaration body cannot be registered."""

    def __init__(self, message: str = "Invalid declaration", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, code="INVALID_DECLARATION")
