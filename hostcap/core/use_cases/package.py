"""
Package use case — install, remove and inspect packages on any target.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hostcap.adapters.base import Connection
from hostcap.core.composition import Registries
from hostcap.core.errors import CapabilityError, NoMatchError
from hostcap.core.plumbing import query
from hostcap.packagemanager import PackageVersionQuery

logger = logging.getLogger(__name__)

PACKAGE_ACTIONS = ("install", "uninstall", "update", "version")


@dataclass
class PackageActionResult:
    """Result of one package action."""

    action: str
    packages: list[str] = field(default_factory=list)
    package_manager: str | None = None
    ok: bool = False
    versions: dict[str, str | None] = field(default_factory=dict)
    supported: bool = True
    unsupported_target: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {
            "action": self.action,
            "packages": self.packages,
            "package_manager": self.package_manager,
            "ok": self.ok,
        }
        if self.error:
            result["error"] = self.error
        if not self.supported:
            result["supported"] = False
        if self.unsupported_target:
            result["unsupported_target"] = True
        if self.versions:
            result["versions"] = self.versions
        return result


def run_package_action(
    conn: Connection,
    registries: Registries,
    action: str,
    packages: list[str] | tuple[str, ...] = (),
) -> PackageActionResult:
    """Resolve the target's package manager and run one action.

    Args:
        conn: Connection to the target.
        registries: The application's providers.
        action: One of PACKAGE_ACTIONS.
        packages: Package names (ignored for "update").

    Returns:
        PackageActionResult (never raises for capability errors).
    """
    result = PackageActionResult(action=action, packages=list(packages))
    if action not in PACKAGE_ACTIONS:
        result.error = f"Unknown package action: {action}"
        return result
    if action != "update" and not packages:
        result.error = f"At least one package required for '{action}'"
        return result

    try:
        manager = registries.package_manager(conn)
    except NoMatchError as e:
        result.error = str(e)
        result.unsupported_target = True
        return result
    except CapabilityError as e:
        result.error = str(e)
        return result

    result.package_manager = manager.name
    timeout = registries.operation_timeout

    try:
        if action == "install":
            manager.install(conn, *packages, timeout=timeout)
        elif action == "uninstall":
            manager.uninstall(conn, *packages, timeout=timeout)
        elif action == "update":
            manager.update(conn, timeout=timeout)
        else:
            versioner = query(manager, PackageVersionQuery)
            if versioner is None:
                result.supported = False
                result.error = f"{manager.name} does not support version queries"
                return result
            for pkg in packages:
                result.versions[pkg] = versioner.installed_version(conn, pkg, timeout=timeout)
    except CapabilityError as e:
        result.error = str(e)
        return result

    logger.info("%s %s via %s on %r", action, " ".join(packages), manager.name, conn.identity)
    result.ok = True
    return result
