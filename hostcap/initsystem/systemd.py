"""
systemd — the init system of most current Linux distributions.

Supports every extension: logs via journalctl, direct restart,
daemon-reload, and drop-in environment files.
"""

from __future__ import annotations

import posixpath

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.initsystem.base import (
    ServiceEnvironmentManager,
    ServiceLogReader,
    ServiceManager,
    ServiceReloader,
    ServiceRestarter,
)


class Systemd(
    ServiceManager,
    ServiceLogReader,
    ServiceRestarter,
    ServiceReloader,
    ServiceEnvironmentManager,
):
    """Service manager backed by systemctl."""

    name = "systemd"

    def start_service(self, conn, service, timeout=None):
        self._exec(conn, "start service", "systemctl start {}", service, timeout=timeout)

    def stop_service(self, conn, service, timeout=None):
        self._exec(conn, "stop service", "systemctl stop {}", service, timeout=timeout)

    def restart_service(self, conn, service, timeout=None):
        self._exec(conn, "restart service", "systemctl restart {}", service, timeout=timeout)

    def enable_service(self, conn, service, timeout=None):
        self._exec(conn, "enable service", "systemctl enable {}", service, timeout=timeout)

    def disable_service(self, conn, service, timeout=None):
        self._exec(conn, "disable service", "systemctl disable {}", service, timeout=timeout)

    def service_is_running(self, conn, service, timeout=None):
        return self._check(
            conn,
            "check service status",
            "systemctl is-active -q {} 2> /dev/null",
            service,
            timeout=timeout,
        )

    def daemon_reload(self, conn, timeout=None):
        self._exec(conn, "daemon reload", "systemctl daemon-reload", timeout=timeout)

    def service_script_path(self, conn, service, timeout=None):
        out = self._exec(
            conn,
            "get service script path",
            "systemctl show -p FragmentPath {} 2> /dev/null",
            service,
            timeout=timeout,
        )
        # FragmentPath=/lib/systemd/system/sshd.service
        _, _, path = out.partition("=")
        return path.strip()

    def service_environment_path(self, conn, service, timeout=None):
        script = self.service_script_path(conn, service, timeout=timeout)
        unit = posixpath.basename(script) or f"{service}.service"
        return posixpath.join("/etc/systemd/system", f"{unit}.d", "env.conf")

    def service_environment_content(self, env):
        lines = ["[Service]"]
        for key in sorted(env):
            lines.append(f'Environment="{key}={_escape_value(env[key])}"')
        return "\n".join(lines) + "\n"

    def service_logs(self, conn, service, lines, timeout=None):
        if lines <= 0:
            return []
        out = self._exec(
            conn,
            "get service logs",
            "journalctl -n {} -u {} --no-pager",
            lines,
            service,
            timeout=timeout,
        )
        return out.splitlines()


def _escape_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def register_systemd(provider: Provider[Connection, ServiceManager]) -> None:
    """Register the systemd probe."""

    def probe(conn: Connection) -> Systemd | None:
        if conn.is_windows():
            return None
        if not conn.succeeds("stat /run/systemd/system > /dev/null 2>&1"):
            return None
        return Systemd()

    provider.register(probe, name="systemd")
