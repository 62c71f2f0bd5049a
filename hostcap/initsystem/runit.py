"""runit — Void Linux and container-style supervision."""

from __future__ import annotations

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.initsystem.base import ServiceManager, ServiceRestarter

SERVICE_DIR = "/etc/sv"
ACTIVE_DIR = "/var/service"


class Runit(ServiceManager, ServiceRestarter):
    """Service manager backed by sv and service directory symlinks."""

    name = "runit"

    def start_service(self, conn, service, timeout=None):
        self._exec(conn, "start service", "sv start {}", service, timeout=timeout)

    def stop_service(self, conn, service, timeout=None):
        self._exec(conn, "stop service", "sv stop {}", service, timeout=timeout)

    def restart_service(self, conn, service, timeout=None):
        self._exec(conn, "restart service", "sv restart {}", service, timeout=timeout)

    def enable_service(self, conn, service, timeout=None):
        self._exec(
            conn,
            "enable service",
            "ln -sf {} {}",
            f"{SERVICE_DIR}/{service}",
            f"{ACTIVE_DIR}/",
            timeout=timeout,
        )

    def disable_service(self, conn, service, timeout=None):
        self._exec(
            conn, "disable service", "rm -f {}", f"{ACTIVE_DIR}/{service}", timeout=timeout
        )

    def service_is_running(self, conn, service, timeout=None):
        return self._check(
            conn, "check service status", "sv status {} | grep -q ^run:", service, timeout=timeout
        )

    def service_script_path(self, conn, service, timeout=None):
        return f"{SERVICE_DIR}/{service}/run"


def register_runit(provider: Provider[Connection, ServiceManager]) -> None:
    """Register the runit probe."""

    def probe(conn: Connection) -> Runit | None:
        if conn.is_windows():
            return None
        if not conn.succeeds("command -v runsvdir > /dev/null 2>&1"):
            return None
        return Runit()

    provider.register(probe, name="runit")
