"""
Composition root — the process's single set of capability providers.

The CLI (or any embedding application) builds one Registries object at
startup and passes it to every consumer. Providers are built eagerly in
the constructor, so their probe lists are final before any resolution.
"""

from __future__ import annotations

import logging

from hostcap.adapters.base import Connection
from hostcap.core.models.settings import Settings
from hostcap.core.plumbing import Provider
from hostcap.initsystem import ServiceManager
from hostcap.initsystem import default_provider as default_init_provider
from hostcap.packagemanager import PackageManager
from hostcap.packagemanager import default_provider as default_package_provider

logger = logging.getLogger(__name__)


class Registries:
    """One provider per capability kind, plus the timeouts to use with them."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        disabled = self.settings.disabled
        self.init_systems: Provider[Connection, ServiceManager] = default_init_provider(
            exclude=disabled.init_systems
        )
        self.package_managers: Provider[Connection, PackageManager] = default_package_provider(
            exclude=disabled.package_managers
        )
        logger.debug(
            "Built registries: init systems %s, package managers %s",
            self.init_systems.probe_names(),
            self.package_managers.probe_names(),
        )

    @property
    def operation_timeout(self) -> float | None:
        return self.settings.timeouts.operation

    @property
    def probe_timeout(self) -> float | None:
        return self.settings.timeouts.probe

    def service_manager(self, conn: Connection) -> ServiceManager:
        return self.init_systems.get(conn)

    def package_manager(self, conn: Connection) -> PackageManager:
        return self.package_managers.get(conn)
