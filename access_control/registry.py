"""
Role declaration registry and maps resolution.

Examples:

    registry = AccessControlRegistry()

    @registry.roles_for("administrator")
    def administrator(role, account):
        role.allow("/admin/base")
        role.deny("/admin/accounts/details")

        project = role.project_module("administration")
        settings = project.menu("general_settings", "/admin/settings")
        accounts = settings.add("accounts", "/admin/accounts")
        accounts.add("sub_accounts", "/admin/accounts/subaccounts")

        if account is not None:
            categories = role.project_module("categories")
            for category in account.categories:
                categories.menu(category.name, f"/admin/categories/{category.id}")

    maps = registry.maps_for("administrator", current_account)
    maps.authorize("/admin/settings")  # True

A user with role administrator can then access "/admin/base" and every
path in the administration module, but never "/admin/accounts/details".
"""

import copy
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from shared.config import AccessControlConfig, get_config
from shared.errors import DeclarationError, InvalidRoleError
from shared.logging import configure_logging, get_logger, set_role_context
from shared.metrics import MetricsCollector, get_metrics_collector

from .cache.maps_cache import MapsCache
from .rules.mapper import Mapper
from .rules.models import ResolvedMaps, RoleName


DeclarationBody = Callable[[Mapper, Any], Any]
MapperFactory = Callable[[Any], Mapper]


class AccessControlRegistry:
    """Append-only store of role declarations with a per-(role, context) cache."""

    def __init__(self, config: Optional[AccessControlConfig] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.config = config or get_config()
        self.logger = get_logger("access_control.registry")
        if metrics is None and self.config.enable_metrics:
            metrics = get_metrics_collector(self.config.service_name)
        self.metrics = metrics
        self.cache = MapsCache()
        self._mappers: List[MapperFactory] = []
        self._roles: List[RoleName] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[AccessControlConfig] = None,
                    metrics: Optional[MetricsCollector] = None) -> "AccessControlRegistry":
        """Build a registry and configure logging from config."""
        config = config or get_config()
        configure_logging(config.service_name, config.log_level, config.json_logs)
        return cls(config=config, metrics=metrics)

    def roles_for(self, *roles: Any, body: Optional[DeclarationBody] = None):
        """Map project modules and paths for the given roles.

        Used directly with ``body=`` or as a decorator. Every role is
        validated before anything is registered.
        """
        if not roles:
            raise InvalidRoleError(None, {"reason": "at least one role is required"})
        try:
            parsed = [RoleName.parse(role) for role in roles]
        except InvalidRoleError as e:
            self.logger.warning("Rejected role declaration", role=e.details.get("role"))
            raise

        def register(declaration: DeclarationBody) -> DeclarationBody:
            if not callable(declaration):
                raise DeclarationError(
                    "Declaration body must be callable",
                    {"roles": [str(role) for role in parsed], "body": repr(declaration)}
                )

            def factory(context: Any) -> Mapper:
                snapshot = copy.copy(context) if context is not None else None
                return Mapper(parsed, declaration, snapshot)

            with self._lock:
                self._mappers.append(factory)
                for role in parsed:
                    if role not in self._roles:
                        self._roles.append(role)

            if self.metrics:
                self.metrics.increment_counter("declarations_total")
            self.logger.info(
                "Roles declared",
                roles=[str(role) for role in parsed],
                declaration=getattr(declaration, "__name__", repr(declaration))
            )
            return declaration

        if body is None:
            return register
        return register(body)

    def roles(self) -> List[str]:
        """Return all declared roles."""
        with self._lock:
            return [str(role) for role in self._roles]

    @property
    def mapper_count(self) -> int:
        with self._lock:
            return len(self._mappers)

    @property
    def cache_size(self) -> int:
        return len(self.cache)

    def maps_for(self, role: Any, context: Any = None) -> ResolvedMaps:
        """Return allowed and denied paths plus project modules for role.

        A custom object such as an account can be passed as context; it
        reaches every declaration body as a shallow copy.
        """
        name = str(RoleName.normalize(role))
        set_role_context(name)
        try:
            maps, hit = self.cache.get_or_compute(name, context, lambda: self._compile(name, context))
        finally:
            set_role_context(None)

        if self.metrics:
            metric = "cache_hits_total" if hit else "cache_misses_total"
            self.metrics.increment_counter(metric, role=name)
        return maps

    def _compile(self, role: str, context: Any) -> ResolvedMaps:
        start_time = time.time()

        with self._lock:
            factories = list(self._mappers)

        mappers = [factory(context) for factory in factories]
        mappers = [mapper for mapper in mappers if mapper.is_applicable(role)]

        allowed = set()
        denied = set()
        project_modules = []
        for mapper in mappers:
            allowed.update(mapper.allowed())
            denied.update(mapper.denied)
            project_modules.extend(mapper.project_modules)

        maps = ResolvedMaps(
            role=role,
            allowed=frozenset(allowed),
            denied=frozenset(denied),
            project_modules=tuple(project_modules)
        )

        duration = time.time() - start_time
        if self.metrics:
            self.metrics.observe_histogram("compile_duration_seconds", duration)
        self.logger.debug(
            "Maps compiled",
            role=role,
            rule_sets=len(mappers),
            allowed=len(maps.allowed),
            denied=len(maps.denied),
            duration_ms=duration * 1000
        )
        return maps

    def clear_cache(self) -> None:
        """Drop every compiled maps entry."""
        self.cache.clear()

    def get_registry_stats(self) -> Dict[str, Any]:
        """Get registry statistics."""
        cache_stats = self.cache.get_cache_stats()
        return {
            "declarations": self.mapper_count,
            "roles": self.roles(),
            "cached_entries": cache_stats["entries"],
            "cache_hits": cache_stats["hits"],
            "cache_misses": cache_stats["misses"],
        }
