"""
Tests for shared errors, configuration and metrics.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from prometheus_client import CollectorRegistry

from shared.config import AccessControlConfig, get_config
from shared.errors import (
    AccessControlError, AccessLayerException, DeclarationError, ErrorResponse, InvalidRoleError
)
from shared.metrics import MetricsCollector


class TestErrors:
    """Test cases for error types."""

    def test_invalid_role_hierarchy(self):
        """Test InvalidRoleError is an access control error."""
        error = InvalidRoleError("bad role")

        assert isinstance(error, AccessControlError)
        assert isinstance(error, AccessLayerException)
        assert error.code == "INVALID_ROLE"
        assert error.details == {"role": "'bad role'"}

    def test_to_response(self):
        """Test conversion to ErrorResponse."""
        response = DeclarationError("Declaration body must be callable", {"roles": ["admin"]}).to_response()

        assert isinstance(response, ErrorResponse)
        assert response.code == "INVALID_DECLARATION"
        assert response.message == "Declaration body must be callable"
        assert response.details == {"roles": ["admin"]}

    def test_default_access_control_error(self):
        """Test default code and message."""
        error = AccessControlError()

        assert error.code == "ACCESS_CONTROL_ERROR"
        assert str(error) == "Access control error"


class TestConfig:
    """Test cases for configuration."""

    def test_defaults(self, monkeypatch):
        """Test default settings."""
        for name in ("ENV", "LOG_LEVEL", "ENABLE_METRICS", "SERVICE_NAME", "JSON_LOGS"):
            monkeypatch.delenv(f"ACCESS_CONTROL_{name}", raising=False)

        config = AccessControlConfig()

        assert config.env == "local"
        assert config.log_level == "info"
        assert config.json_logs is True
        assert config.enable_metrics is False

    def test_environment_overrides(self, monkeypatch):
        """Test environment variables are read with the prefix."""
        monkeypatch.setenv("ACCESS_CONTROL_LOG_LEVEL", "debug")
        monkeypatch.setenv("ACCESS_CONTROL_ENABLE_METRICS", "true")

        config = get_config()

        assert config.log_level == "debug"
        assert config.enable_metrics is True

    def test_explicit_overrides(self):
        """Test keyword overrides."""
        config = get_config(service_name="admin_panel")

        assert config.service_name == "admin_panel"


class TestMetricsCollector:
    """Test cases for MetricsCollector."""

    @pytest.fixture
    def collector(self):
        """Create an isolated collector."""
        return MetricsCollector("access_control", CollectorRegistry())

    def test_increment_counter(self, collector):
        """Test labelled counters."""
        collector.increment_counter("cache_hits_total", role="admin")
        collector.increment_counter("cache_hits_total", role="admin")

        assert collector.registry.get_sample_value(
            "access_control_cache_hits_total", {"role": "admin"}
        ) == 2.0

    def test_unknown_metric_is_ignored(self, collector):
        """Test unknown metric names are a no-op."""
        collector.increment_counter("missing_total")
        collector.observe_histogram("missing_seconds", 1.0)

        assert collector.get_metric("missing_total") is None

    def test_time_operation(self, collector):
        """Test timing an operation observes the histogram."""
        with collector.time_operation("compile_duration_seconds"):
            pass

        assert collector.registry.get_sample_value(
            "access_control_compile_duration_seconds_count"
        ) == 1.0

    def test_service_info(self, collector):
        """Test service info is exported."""
        assert collector.registry.get_sample_value(
            "access_control_service_info", {"service": "access_control", "version": "1.0.0"}
        ) == 1.0
