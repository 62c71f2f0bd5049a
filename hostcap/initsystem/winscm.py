"""Windows Service Control Manager, driven through sc.exe."""

from __future__ import annotations

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.initsystem.base import ServiceManager


class WinSCM(ServiceManager):
    """Service manager for Windows targets.

    sc.exe has no restart verb; callers fall back to stop+start.
    """

    name = "winscm"

    def start_service(self, conn, service, timeout=None):
        self._exec(conn, "start service", "sc.exe start {}", service, timeout=timeout)

    def stop_service(self, conn, service, timeout=None):
        self._exec(conn, "stop service", "sc.exe stop {}", service, timeout=timeout)

    def enable_service(self, conn, service, timeout=None):
        self._exec(
            conn, "enable service", "sc.exe config {} start= auto", service, timeout=timeout
        )

    def disable_service(self, conn, service, timeout=None):
        self._exec(
            conn, "disable service", "sc.exe config {} start= disabled", service, timeout=timeout
        )

    def service_is_running(self, conn, service, timeout=None):
        return self._check(
            conn,
            "check service status",
            'sc.exe query {} | findstr /C:"RUNNING"',
            service,
            timeout=timeout,
        )

    def service_script_path(self, conn, service, timeout=None):
        out = self._exec(conn, "get service script path", "sc.exe qc {}", service, timeout=timeout)
        for line in out.splitlines():
            key, sep, value = line.partition(":")
            if sep and key.strip() == "BINARY_PATH_NAME":
                return value.strip()
        return ""


def register_winscm(provider: Provider[Connection, ServiceManager]) -> None:
    """Register the Windows SCM probe (any Windows target)."""

    def probe(conn: Connection) -> WinSCM | None:
        if not conn.is_windows():
            return None
        return WinSCM()

    provider.register(probe, name="winscm")
