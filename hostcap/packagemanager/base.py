"""
Package manager contracts — the package-manager capability kind.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hostcap.adapters.base import Connection
from hostcap.core.errors import NoMatchError
from hostcap.core.plumbing import Extension, Facility, Provider


class NoPackageManagerError(NoMatchError):
    """No supported package manager was detected on the target."""

    message = "no supported package manager found"


class PackageManager(Facility, ABC):
    """Base contract for a system package manager."""

    @abstractmethod
    def install(self, conn: Connection, *packages: str, timeout: float | None = None) -> None:
        """Install one or more packages."""

    @abstractmethod
    def uninstall(self, conn: Connection, *packages: str, timeout: float | None = None) -> None:
        """Remove one or more packages."""

    @abstractmethod
    def update(self, conn: Connection, timeout: float | None = None) -> None:
        """Refresh the package index."""


class PackageVersionQuery(Extension, ABC):
    """Package manager that can report an installed package's version."""

    extension_name = "version"

    @abstractmethod
    def installed_version(
        self, conn: Connection, package: str, timeout: float | None = None
    ) -> str | None:
        """Installed version of ``package``, or None when not installed."""


def new_provider() -> Provider[Connection, PackageManager]:
    """Return an empty package-manager provider."""
    return Provider("package manager", NoPackageManagerError)
