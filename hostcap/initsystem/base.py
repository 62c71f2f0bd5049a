"""
Service manager contracts — the init-system capability kind.

ServiceManager is the base contract every init system provides. The
extension contracts below are optional; check for them with
``hostcap.core.plumbing.query`` before use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hostcap.adapters.base import Connection
from hostcap.core.errors import NoMatchError
from hostcap.core.plumbing import Extension, Facility, Provider


class NoInitSystemError(NoMatchError):
    """No supported init system was detected on the target."""

    message = "no supported init system found"


class ServiceManager(Facility, ABC):
    """Base contract for interacting with an init system."""

    @abstractmethod
    def start_service(self, conn: Connection, service: str, timeout: float | None = None) -> None:
        """Start a service."""

    @abstractmethod
    def stop_service(self, conn: Connection, service: str, timeout: float | None = None) -> None:
        """Stop a service."""

    @abstractmethod
    def enable_service(self, conn: Connection, service: str, timeout: float | None = None) -> None:
        """Enable a service to start at boot."""

    @abstractmethod
    def disable_service(self, conn: Connection, service: str, timeout: float | None = None) -> None:
        """Disable a service from starting at boot."""

    @abstractmethod
    def service_is_running(
        self, conn: Connection, service: str, timeout: float | None = None
    ) -> bool:
        """Whether the service is currently running.

        A failing status check means "not running". Transport faults
        still propagate.
        """

    @abstractmethod
    def service_script_path(
        self, conn: Connection, service: str, timeout: float | None = None
    ) -> str:
        """Path of the service's unit / script / plist on the target."""


class ServiceLogReader(Extension, ABC):
    """Service manager that can read service logs."""

    extension_name = "logs"

    @abstractmethod
    def service_logs(
        self, conn: Connection, service: str, lines: int, timeout: float | None = None
    ) -> list[str]:
        """Return up to ``lines`` most recent log lines for a service.

        A non-positive ``lines`` yields an empty list.
        """


class ServiceRestarter(Extension, ABC):
    """Service manager that supports a direct restart (instead of stop+start)."""

    extension_name = "restart"

    @abstractmethod
    def restart_service(
        self, conn: Connection, service: str, timeout: float | None = None
    ) -> None:
        """Restart a service."""


class ServiceReloader(Extension, ABC):
    """Service manager that needs a reload after unit changes (systemd daemon-reload)."""

    extension_name = "reload"

    @abstractmethod
    def daemon_reload(self, conn: Connection, timeout: float | None = None) -> None:
        """Reload the init system's configuration."""


class ServiceEnvironmentManager(Extension, ABC):
    """Service manager that supports per-service environment files."""

    extension_name = "environment"

    @abstractmethod
    def service_environment_path(
        self, conn: Connection, service: str, timeout: float | None = None
    ) -> str:
        """Path of the service's environment file on the target."""

    @abstractmethod
    def service_environment_content(self, env: dict[str, str]) -> str:
        """Render an environment mapping in this init system's file format."""


def new_provider() -> Provider[Connection, ServiceManager]:
    """Return an empty init-system provider."""
    return Provider("init system", NoInitSystemError)
