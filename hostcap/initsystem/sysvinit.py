"""SysVinit — /etc/init.d scripts with update-rc.d or chkconfig."""

from __future__ import annotations

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.initsystem.base import ServiceManager, ServiceRestarter

INIT_DIR = "/etc/init.d"


class SysVinit(ServiceManager, ServiceRestarter):
    """Service manager that calls init scripts directly."""

    name = "sysvinit"

    def start_service(self, conn, service, timeout=None):
        self._exec(conn, "start service", "{} start", self._script(service), timeout=timeout)

    def stop_service(self, conn, service, timeout=None):
        self._exec(conn, "stop service", "{} stop", self._script(service), timeout=timeout)

    def restart_service(self, conn, service, timeout=None):
        self._exec(conn, "restart service", "{} restart", self._script(service), timeout=timeout)

    def enable_service(self, conn, service, timeout=None):
        self._exec(
            conn,
            "enable service",
            "if command -v update-rc.d > /dev/null 2>&1; then update-rc.d {} defaults;"
            " else chkconfig --add {}; fi",
            service,
            service,
            timeout=timeout,
        )

    def disable_service(self, conn, service, timeout=None):
        self._exec(
            conn,
            "disable service",
            "if command -v update-rc.d > /dev/null 2>&1; then update-rc.d -f {} remove;"
            " else chkconfig --del {}; fi",
            service,
            service,
            timeout=timeout,
        )

    def service_is_running(self, conn, service, timeout=None):
        return self._check(
            conn, "check service status", "{} status", self._script(service), timeout=timeout
        )

    def service_script_path(self, conn, service, timeout=None):
        return self._script(service)

    @staticmethod
    def _script(service: str) -> str:
        return f"{INIT_DIR}/{service}"


def register_sysvinit(provider: Provider[Connection, ServiceManager]) -> None:
    """Register the SysVinit probe."""

    def probe(conn: Connection) -> SysVinit | None:
        if conn.is_windows():
            return None
        if not conn.succeeds("test -d {}", INIT_DIR):
            return None
        if not conn.succeeds(
            "command -v update-rc.d > /dev/null 2>&1 || command -v chkconfig > /dev/null 2>&1"
        ):
            return None
        return SysVinit()

    provider.register(probe, name="sysvinit")
