"""
Shared utilities for the access control layer.

This package aggregates the ambient building blocks used by the
access_control package:

- config: Configuration via pydantic-settings
- logging: Structured logging via structlog
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from access_control into shared/.
"""
