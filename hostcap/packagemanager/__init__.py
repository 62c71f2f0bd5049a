"""
Package managers — the package-manager capability kind.

The default registry probes, in order:

    apk → apt → dnf → yum → zypper → pacman → homebrew → macports
        → chocolatey → winget

dnf is probed before yum because dnf hosts usually ship a yum shim.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.packagemanager.base import (
    NoPackageManagerError,
    PackageManager,
    PackageVersionQuery,
    new_provider,
)
from hostcap.packagemanager.darwin import register_homebrew, register_macports
from hostcap.packagemanager.linux import (
    register_apk,
    register_apt,
    register_dnf,
    register_pacman,
    register_yum,
    register_zypper,
)
from hostcap.packagemanager.universal import UniversalPackageManager, VersionedPackageManager
from hostcap.packagemanager.windows import register_chocolatey, register_winget

REGISTRATIONS: list[tuple[str, Callable[[Provider], None]]] = [
    ("apk", register_apk),
    ("apt", register_apt),
    ("dnf", register_dnf),
    ("yum", register_yum),
    ("zypper", register_zypper),
    ("pacman", register_pacman),
    ("homebrew", register_homebrew),
    ("macports", register_macports),
    ("chocolatey", register_chocolatey),
    ("winget", register_winget),
]

FACILITIES = [name for name, _ in REGISTRATIONS]


def default_provider(exclude: Iterable[str] = ()) -> Provider[Connection, PackageManager]:
    """Build a package-manager provider with every known probe registered.

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
    "NoPackageManagerError",
    "PackageManager",
    "PackageVersionQuery",
    "UniversalPackageManager",
    "VersionedPackageManager",
    "default_provider",
    "new_provider",
]
