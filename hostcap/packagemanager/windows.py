"""Windows package managers."""

from __future__ import annotations

from hostcap.adapters.base import Connection
from hostcap.core.plumbing import Provider
from hostcap.packagemanager.base import PackageManager
from hostcap.packagemanager.universal import UniversalPackageManager, tool_probe


def new_chocolatey() -> PackageManager:
    return UniversalPackageManager("chocolatey", "choco", "install -y", "uninstall -y", "outdated")


def new_winget() -> PackageManager:
    return UniversalPackageManager(
        "winget",
        "winget",
        "install --silent --accept-package-agreements --accept-source-agreements",
        "uninstall --silent",
        "source update",
    )


def register_chocolatey(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_chocolatey, "choco.exe", windows=True), name="chocolatey")


def register_winget(provider: Provider[Connection, PackageManager]) -> None:
    provider.register(tool_probe(new_winget, "winget.exe", windows=True), name="winget")
