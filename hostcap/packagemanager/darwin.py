"""macOS package managers."""

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


def new_homebrew() -> PackageManager:
    # brew ls --versions prints "name 1.2.3" and exits 1 when not installed
    return VersionedPackageManager(
        "homebrew",
        "brew",
        "install",
        "uninstall",
        "update",
        version_template="brew ls --versions {}",
        parse_version=second_field,
    )


def new_macports() -> PackageManager:
    return UniversalPackageManager("macports", "port", "install", "uninstall", "selfupdate")


def register_homebrew(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_homebrew, "brew"), name="homebrew")


def register_macports(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_macports, "port"), name="macports")
