"""
launchd — the init system of macOS.

Basic system-domain support only; user agents are not handled.
"""

from __future__ import annotations

import posixpath

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.initsystem.base import ServiceLogReader, ServiceManager

DARWIN_MARKER = "/System/Library/CoreServices/SystemVersion.plist"
DAEMON_DIR = "/Library/LaunchDaemons"


class Launchd(ServiceManager, ServiceLogReader):
    """Service manager backed by launchctl and the unified log."""

    name = "launchd"

    def start_service(self, conn, service, timeout=None):
        self._exec(conn, "start service", "launchctl kickstart {}", service, timeout=timeout)

    def stop_service(self, conn, service, timeout=None):
        self._exec(conn, "stop service", "launchctl kill {}", service, timeout=timeout)

    def enable_service(self, conn, service, timeout=None):
        self._exec(conn, "enable service", "launchctl enable {}", service, timeout=timeout)

    def disable_service(self, conn, service, timeout=None):
        self._exec(conn, "disable service", "launchctl disable {}", service, timeout=timeout)

    def service_is_running(self, conn, service, timeout=None):
        return self._check(
            conn, "check service status", "launchctl list | grep -q {}", service, timeout=timeout
        )

    def service_script_path(self, conn, service, timeout=None):
        return posixpath.join(DAEMON_DIR, f"{service}.plist")

    def service_logs(self, conn, service, lines, timeout=None):
        if lines <= 0:
            return []
        predicate = f'subsystem contains "{_escape(service)}"'
        out = self._exec(
            conn,
            "get service logs",
            "log show --predicate {} --debug --info --last 10m --style syslog",
            predicate,
            timeout=timeout,
        )
        return out.splitlines()[-lines:]


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def register_launchd(provider: Provider[Connection, ServiceManager]) -> None:
    """Register the launchd probe (Darwin marker file)."""

    def probe(conn: Connection) -> Launchd | None:
        if conn.is_windows():
            return None
        if not conn.succeeds("test -f {}", DARWIN_MARKER):
            return None
        return Launchd()

    provider.register(probe, name="launchd")
