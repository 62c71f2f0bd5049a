"""
Service use case — run service operations on whatever init system is present.

Base operations go straight to the resolved ServiceManager. Extension
operations check for their contract first:

    restart  ServiceRestarter if present, else stop + start (degraded)
    reload   ServiceReloader if present, else skipped (nothing to reload)
    logs     ServiceLogReader, else reported as unsupported
    env      ServiceEnvironmentManager, else reported as unsupported
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field

from hostcap.adapters.base import Connection, ExecutionError
from hostcap.core.composition import Registries
from hostcap.core.errors import CapabilityError, NoMatchError, OperationError
from hostcap.core.plumbing import query
from hostcap.initsystem import (
    ServiceEnvironmentManager,
    ServiceLogReader,
    ServiceManager,
    ServiceReloader,
    ServiceRestarter,
)

logger = logging.getLogger(__name__)

SERVICE_ACTIONS = (
    "start",
    "stop",
    "restart",
    "enable",
    "disable",
    "status",
    "path",
    "reload",
    "logs",
    "env",
)


@dataclass
class ServiceActionResult:
    """Result of one service action."""

    action: str
    service: str = ""
    init_system: str | None = None
    ok: bool = False
    output: str = ""
    running: bool | None = None
    lines: list[str] = field(default_factory=list)
    degraded: bool = False
    supported: bool = True
    unsupported_target: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {
            "action": self.action,
            "service": self.service,
            "init_system": self.init_system,
            "ok": self.ok,
        }
        if self.error:
            result["error"] = self.error
        if not self.supported:
            result["supported"] = False
        if self.unsupported_target:
            result["unsupported_target"] = True
        if self.degraded:
            result["degraded"] = True
        if self.running is not None:
            result["running"] = self.running
        if self.output:
            result["output"] = self.output
        if self.lines:
            result["lines"] = self.lines
        return result


def restart_service(
    conn: Connection,
    manager: ServiceManager,
    service: str,
    timeout: float | None = None,
) -> bool:
    """Restart a service, falling back to stop + start.

    Returns:
        True when the stop + start fallback was used.
    """
    restarter = query(manager, ServiceRestarter)
    if restarter is not None:
        restarter.restart_service(conn, service, timeout=timeout)
        return False

    logger.debug("%s has no direct restart, using stop + start", manager.name)
    manager.stop_service(conn, service, timeout=timeout)
    manager.start_service(conn, service, timeout=timeout)
    return True


def reload_if_needed(
    conn: Connection,
    manager: ServiceManager,
    timeout: float | None = None,
) -> bool:
    """Run the init system's daemon reload when it has one.

    Returns:
        True if a reload was issued.
    """
    reloader = query(manager, ServiceReloader)
    if reloader is None:
        return False
    reloader.daemon_reload(conn, timeout=timeout)
    return True


def write_service_environment(
    conn: Connection,
    manager: ServiceManager,
    service: str,
    env: dict[str, str],
    timeout: float | None = None,
) -> str | None:
    """Write a service's environment file and reload the init system.

    Returns:
        The path written, or None when the init system has no
        environment-file support.
    """
    env_manager = query(manager, ServiceEnvironmentManager)
    if env_manager is None:
        return None

    path = env_manager.service_environment_path(conn, service, timeout=timeout)
    content = env_manager.service_environment_content(env)
    try:
        conn.execute(
            "mkdir -p {} && printf '%s' {} > {}",
            posixpath.dirname(path),
            content,
            path,
            timeout=timeout,
        )
    except ExecutionError as e:
        raise OperationError("write service environment", manager.name, conn.identity, e) from e

    reload_if_needed(conn, manager, timeout=timeout)
    return path


def run_service_action(
    conn: Connection,
    registries: Registries,
    action: str,
    service: str = "",
    lines: int = 50,
    env: dict[str, str] | None = None,
) -> ServiceActionResult:
    """Resolve the target's init system and run one service action.

    Args:
        conn: Connection to the target.
        registries: The application's providers.
        action: One of SERVICE_ACTIONS.
        service: Service name (unused for "reload").
        lines: Log lines to return for "logs".
        env: Variables to write for "env".

    Returns:
        ServiceActionResult (never raises for capability errors).
    """
    result = ServiceActionResult(action=action, service=service)
    if action not in SERVICE_ACTIONS:
        result.error = f"Unknown service action: {action}"
        return result
    if action != "reload" and not service:
        result.error = f"Service name required for '{action}'"
        return result

    try:
        manager = registries.service_manager(conn)
    except NoMatchError as e:
        result.error = str(e)
        result.unsupported_target = True
        return result
    except CapabilityError as e:
        result.error = str(e)
        return result

    result.init_system = manager.name
    timeout = registries.operation_timeout

    try:
        _dispatch(conn, manager, result, lines, env or {}, timeout)
    except CapabilityError as e:
        result.error = str(e)
        return result

    if result.error is None:
        result.ok = True
    return result


def _dispatch(
    conn: Connection,
    manager: ServiceManager,
    result: ServiceActionResult,
    lines: int,
    env: dict[str, str],
    timeout: float | None,
) -> None:
    action, service = result.action, result.service

    if action == "start":
        manager.start_service(conn, service, timeout=timeout)
    elif action == "stop":
        manager.stop_service(conn, service, timeout=timeout)
    elif action == "enable":
        manager.enable_service(conn, service, timeout=timeout)
    elif action == "disable":
        manager.disable_service(conn, service, timeout=timeout)
    elif action == "status":
        result.running = manager.service_is_running(conn, service, timeout=timeout)
    elif action == "path":
        result.output = manager.service_script_path(conn, service, timeout=timeout)
    elif action == "restart":
        result.degraded = restart_service(conn, manager, service, timeout=timeout)
    elif action == "reload":
        if not reload_if_needed(conn, manager, timeout=timeout):
            result.supported = False
            result.output = f"{manager.name} needs no daemon reload"
    elif action == "logs":
        reader = query(manager, ServiceLogReader)
        if reader is None:
            result.supported = False
            result.error = f"{manager.name} does not support log retrieval"
            return
        result.lines = reader.service_logs(conn, service, lines, timeout=timeout)
    elif action == "env":
        path = write_service_environment(conn, manager, service, env, timeout=timeout)
        if path is None:
            result.supported = False
            result.error = f"{manager.name} does not support environment files"
            return
        result.output = path
