"""
Init systems — the service manager capability kind.

The default registry probes, in order (most specific first):

    systemd → openrc → upstart → sysvinit → winscm → runit → launchd

    from hostcap.initsystem import default_provider

    manager = default_provider().get(conn)
    manager.start_service(conn, "sshd")
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.initsystem.base import (
    NoInitSystemError,
    ServiceEnvironmentManager,
    ServiceLogReader,
    ServiceManager,
    ServiceReloader,
    ServiceRestarter,
    new_provider,
)
from hostcap.initsystem.launchd import Launchd, register_launchd
from hostcap.initsystem.openrc import OpenRC, register_openrc
from hostcap.initsystem.runit import Runit, register_runit
from hostcap.initsystem.systemd import Systemd, register_systemd
from hostcap.initsystem.sysvinit import SysVinit, register_sysvinit
from hostcap.initsystem.upstart import Upstart, register_upstart
from hostcap.initsystem.winscm import WinSCM, register_winscm

# (facility name, registration function) in probe order
REGISTRATIONS: list[tuple[str, Callable[[Provider], None]]] = [
    ("systemd", register_systemd),
    ("openrc", register_openrc),
    ("upstart", register_upstart),
    ("sysvinit", register_sysvinit),
    ("winscm", register_winscm),
    ("runit", register_runit),
    ("launchd", register_launchd),
]

FACILITIES = [name for name, _ in REGISTRATIONS]


def default_provider(exclude: Iterable[str] = ()) -> Provider[Connection, ServiceManager]:
    """Build an init-system provider with every known probe registered.

    Args:
        exclude: Facility names to leave out. The rest keep their order.
    """
    skip = set(exclude)
    provider = new_provider()
    for name, register in REGISTRATIONS:
        if name not in skip:
            register(provider)
    return provider


__all__ = [
    "FACILITIES",
    "Launchd",
    "NoInitSystemError",
    "OpenRC",
    "Runit",
    "ServiceEnvironmentManager",
    "ServiceLogReader",
    "ServiceManager",
    "ServiceReloader",
    "ServiceRestarter",
    "SysVinit",
    "Systemd",
    "Upstart",
    "WinSCM",
    "default_provider",
    "new_provider",
]
