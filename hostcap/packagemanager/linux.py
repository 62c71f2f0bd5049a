"""Linux distribution package managers."""

from __future__ import annotations

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.packagemanager.base import PackageManager
from hostcap.packagemanager.universal import (
    UniversalPackageManager,
    VersionedPackageManager,
    second_field,
    tool_probe,
)

# rpm prints the bare version; braces are doubled for str.format
_RPM_VERSION = "rpm -q --qf '%{{VERSION}}' {}"


def new_apk() -> PackageManager:
    return UniversalPackageManager("apk", "apk", "add", "del", "update")


def new_apt() -> PackageManager:
    return VersionedPackageManager(
        "apt",
        "apt-get",
        "install -y",
        "remove -y",
        "update",
        version_template="dpkg-query -W -f='${{Version}}' {}",
    )


def new_dnf() -> PackageManager:
    return VersionedPackageManager(
        "dnf", "dnf", "install -y", "remove -y", "makecache", version_template=_RPM_VERSION
    )


def new_yum() -> PackageManager:
    return VersionedPackageManager(
        "yum", "yum", "install -y", "remove -y", "makecache", version_template=_RPM_VERSION
    )


def new_zypper() -> PackageManager:
    return VersionedPackageManager(
        "zypper",
        "zypper",
        "--non-interactive install",
        "--non-interactive remove",
        "refresh",
        version_template=_RPM_VERSION,
    )


def new_pacman() -> PackageManager:
    return VersionedPackageManager(
        "pacman",
        "pacman",
        "-S --noconfirm",
        "-R --noconfirm",
        "-Sy",
        version_template="pacman -Q {}",
        parse_version=second_field,
    )


def register_apk(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_apk, "apk"), name="apk")


def register_apt(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_apt, "apt-get"), name="apt")


def register_dnf(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_dnf, "dnf"), name="dnf")


def register_yum(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_yum, "yum"), name="yum")


def register_zypper(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_zypper, "zypper"), name="zypper")


def register_pacman(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_pacman, "pacman"), name="pacman")
