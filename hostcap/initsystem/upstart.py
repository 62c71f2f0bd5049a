"""Upstart — legacy Ubuntu / RHEL 6 init system."""

from __future__ import annotations

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.initsystem.base import ServiceManager, ServiceRestarter


class Upstart(ServiceManager, ServiceRestarter):
    """Service manager backed by initctl and job override files."""

    name = "upstart"

    def start_service(self, conn, service, timeout=None):
        self._exec(conn, "start service", "initctl start {}", service, timeout=timeout)

    def stop_service(self, conn, service, timeout=None):
        self._exec(conn, "stop service", "initctl stop {}", service, timeout=timeout)

    def restart_service(self, conn, service, timeout=None):
        self._exec(conn, "restart service", "initctl restart {}", service, timeout=timeout)

    def enable_service(self, conn, service, timeout=None):
        self._exec(
            conn, "enable service", "rm -f {}", self._override_path(service), timeout=timeout
        )

    def disable_service(self, conn, service, timeout=None):
        self._exec(
            conn,
            "disable service",
            "echo manual > {}",
            self._override_path(service),
            timeout=timeout,
        )

    def service_is_running(self, conn, service, timeout=None):
        return self._check(
            conn,
            "check service status",
            "initctl status {} | grep -q start/running",
            service,
            timeout=timeout,
        )

    def service_script_path(self, conn, service, timeout=None):
        return f"/etc/init/{service}.conf"

    @staticmethod
    def _override_path(service: str) -> str:
        return f"/etc/init/{service}.override"


def register_upstart(provider: Provider[Connection, ServiceManager]) -> None:
    """Register the Upstart probe."""

    def probe(conn: Connection) -> Upstart | None:
        if conn.is_windows():
            return None
        if not conn.succeeds("command -v initctl > /dev/null 2>&1"):
            return None
        if not conn.succeeds("test -d /usr/share/upstart"):
            return None
        return Upstart()

    provider.register(probe, name="upstart")
