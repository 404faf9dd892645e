"""
Unit tests for the Mapper rule set builder.
"""

import pytest
from unittest.mock import MagicMock

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from access_control.rules.mapper import Mapper
from access_control.rules.models import RoleName
from access_control.rules.navigation import ProjectModule


def build_mapper(body, *roles, context=None):
    """Create a Mapper for the given roles."""
    parsed = [RoleName.parse(role) for role in (roles or ("admin",))]
    return Mapper(parsed, body, context)


class TestMapper:
    """Test cases for Mapper."""

    def test_body_receives_mapper_and_context(self):
        """Test the declaration body is invoked once with mapper and context."""
        body = MagicMock()
        context = object()

        mapper = build_mapper(body, context=context)

        body.assert_called_once_with(mapper, context)

    def test_allow_is_idempotent(self):
        """Test allowing a path twice keeps one entry."""
        def body(role, _):
            role.allow("/admin/base")
            role.allow("/admin/base")

        mapper = build_mapper(body)

        assert mapper.allowed() == ["/admin/base"]

    def test_deny_is_idempotent(self):
        """Test denying a path twice keeps one entry."""
        def body(role, _):
            role.deny("/admin/accounts/details")
            role.deny("/admin/accounts/details")

        mapper = build_mapper(body)

        assert mapper.denied == ["/admin/accounts/details"]

    def test_deny_is_independent_of_allow(self):
        """Test a path can be both allowed and denied."""
        def body(role, _):
            role.allow("/admin/accounts")
            role.deny("/admin/accounts")

        mapper = build_mapper(body)

        assert mapper.allowed() == ["/admin/accounts"]
        assert mapper.denied == ["/admin/accounts"]

    def test_allowed_includes_project_module_paths(self):
        """Test explicit allows are merged with navigation paths."""
        def body(role, _):
            role.allow("/c")
            project = role.project_module("module")
            project.menu("a", "/a")
            project.menu("b", "/b")

        mapper = build_mapper(body)

        assert set(mapper.allowed()) == {"/a", "/b", "/c"}

    def test_allowed_does_not_grow_on_repeated_calls(self):
        """Test computing allowed paths leaves explicit allows untouched."""
        def body(role, _):
            role.allow("/c")
            role.project_module("module", "/m").menu("a", "/a")

        mapper = build_mapper(body)
        mapper.allowed()
        mapper.allowed()

        assert mapper.allowed() == ["/c", "/m", "/a"]

    def test_allowed_deduplicates_across_sources(self):
        """Test a path allowed explicitly and via a menu appears once."""
        def body(role, _):
            role.allow("/admin/settings")
            role.project_module("administration").menu("settings", "/admin/settings")

        mapper = build_mapper(body)

        assert mapper.allowed() == ["/admin/settings"]

    def test_project_module_with_body(self):
        """Test project modules accept a body."""
        def body(role, _):
            role.project_module("administration", body=lambda project: project.menu("settings", "/admin/settings"))

        mapper = build_mapper(body)

        assert len(mapper.project_modules) == 1
        assert isinstance(mapper.project_modules[0], ProjectModule)
        assert mapper.allowed() == ["/admin/settings"]

    @pytest.mark.parametrize("role,expected", [
        ("admin", True),
        ("ADMIN", True),
        (RoleName("admin"), True),
        ("editor", False),
        ("", False),
        (None, False),
    ])
    def test_is_applicable(self, role, expected):
        """Test role applicability is case-insensitive."""
        mapper = build_mapper(lambda role, _: None, "admin")

        assert mapper.is_applicable(role) is expected

    def test_is_applicable_multiple_roles(self):
        """Test a mapper declared for several roles applies to each."""
        mapper = build_mapper(lambda role, _: None, "admin", "Editor")

        assert mapper.is_applicable("admin")
        assert mapper.is_applicable("editor")
        assert not mapper.is_applicable("viewer")

    def test_denied_returns_copy(self):
        """Test callers cannot mutate the deny list."""
        mapper = build_mapper(lambda role, _: role.deny("/x"))

        mapper.denied.append("/y")

        assert mapper.denied == ["/x"]
