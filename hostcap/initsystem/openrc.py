"""OpenRC — Alpine, Gentoo and friends."""

from __future__ import annotations

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.initsystem.base import (
    ServiceEnvironmentManager,
    ServiceManager,
    ServiceRestarter,
)


class OpenRC(ServiceManager, ServiceRestarter, ServiceEnvironmentManager):
    """Service manager backed by rc-service and rc-update."""

    name = "openrc"

    def start_service(self, conn, service, timeout=None):
        self._exec(conn, "start service", "rc-service {} start", service, timeout=timeout)

    def stop_service(self, conn, service, timeout=None):
        self._exec(conn, "stop service", "rc-service {} stop", service, timeout=timeout)

    def restart_service(self, conn, service, timeout=None):
        self._exec(conn, "restart service", "rc-service {} restart", service, timeout=timeout)

    def enable_service(self, conn, service, timeout=None):
        self._exec(conn, "enable service", "rc-update add {}", service, timeout=timeout)

    def disable_service(self, conn, service, timeout=None):
        self._exec(conn, "disable service", "rc-update del {}", service, timeout=timeout)

    def service_is_running(self, conn, service, timeout=None):
        return self._check(
            conn, "check service status", "rc-service {} status", service, timeout=timeout
        )

    def service_script_path(self, conn, service, timeout=None):
        return self._exec(
            conn, "get service script path", "rc-service -r {}", service, timeout=timeout
        )

    def service_environment_path(self, conn, service, timeout=None):
        return f"/etc/conf.d/{service}"

    def service_environment_content(self, env):
        return "".join(f"export {key}={_quote(env[key])}\n" for key in sorted(env))


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$") + '"'


def register_openrc(provider: Provider[Connection, ServiceManager]) -> None:
    """Register the OpenRC probe.

    Matches when openrc-init exists or /etc/inittab launches openrc.
    """

    def probe(conn: Connection) -> OpenRC | None:
        if conn.is_windows():
            return None
        if conn.succeeds("command -v openrc-init > /dev/null 2>&1"):
            return OpenRC()
        if conn.succeeds("grep ::sysinit: /etc/inittab 2> /dev/null | grep -q openrc"):
            return OpenRC()
        return None

    provider.register(probe, name="openrc")
