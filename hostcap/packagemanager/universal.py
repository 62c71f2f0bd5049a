"""
Universal package manager — one class for every "tool verb packages..." CLI.

Most package managers differ only in the binary and the verbs:

    apt-get install -y curl
    brew install curl
    choco install -y curl

so a single parameterized implementation covers them all. Managers
that can report installed versions use VersionedPackageManager.
"""

from __future__ import annotations

from collections.abc import Callable

from hostcap.adapters.base import CommandError, Connection, ExecutionError
from hostcap.core.errors import OperationError
from hostcap.packagemanager.base import PackageManager, PackageVersionQuery


def _first_line(output: str) -> str | None:
    lines = output.strip().splitlines()
    return (lines[0].strip() or None) if lines else None


def second_field(output: str) -> str | None:
    """Parse ``name version`` output (pacman -Q, brew ls --versions)."""
    line = _first_line(output)
    if not line:
        return None
    parts = line.split()
    return parts[1] if len(parts) > 1 else None


class UniversalPackageManager(PackageManager):
    """Package manager driven by a single command and three verbs.

    Args:
        name: Facility name (e.g. "apt").
        command: Binary to invoke (e.g. "apt-get").
        install_verb: Arguments before the package list on install.
        uninstall_verb: Arguments before the package list on removal.
        update_verb: Arguments that refresh the package index.
    """

    def __init__(
        self,
        name: str,
        command: str,
        install_verb: str,
        uninstall_verb: str,
        update_verb: str,
    ):
        self.name = name
        self.command = command
        self.install_verb = install_verb
        self.uninstall_verb = uninstall_verb
        self.update_verb = update_verb

    def install(self, conn, *packages, timeout=None):
        self._packages("install", self.install_verb, conn, packages, timeout)

    def uninstall(self, conn, *packages, timeout=None):
        self._packages("uninstall", self.uninstall_verb, conn, packages, timeout)

    def update(self, conn, timeout=None):
        self._exec(conn, "update", f"{self.command} {self.update_verb}", timeout=timeout)

    def _packages(
        self,
        operation: str,
        verb: str,
        conn: Connection,
        packages: tuple[str, ...],
        timeout: float | None,
    ) -> None:
        if not packages:
            raise ValueError(f"{self.name}: {operation} needs at least one package")
        placeholders = " ".join("{}" for _ in packages)
        self._exec(
            conn,
            f"{operation} {' '.join(packages)}",
            f"{self.command} {verb} {placeholders}",
            *packages,
            timeout=timeout,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UniversalPackageManager):
            return NotImplemented
        return (self.name, self.command) == (other.name, other.command)

    def __hash__(self) -> int:
        return hash((self.name, self.command))


class VersionedPackageManager(UniversalPackageManager, PackageVersionQuery):
    """Universal package manager that can also query installed versions.

    Args:
        version_template: Command template with one ``{}`` for the package.
            A non-zero exit means "not installed".
        parse_version: Turns the command's output into a version string.
    """

    def __init__(
        self,
        name: str,
        command: str,
        install_verb: str,
        uninstall_verb: str,
        update_verb: str,
        version_template: str,
        parse_version: Callable[[str], str | None] = _first_line,
    ):
        super().__init__(name, command, install_verb, uninstall_verb, update_verb)
        self.version_template = version_template
        self.parse_version = parse_version

    def installed_version(self, conn, package, timeout=None):
        try:
            out = conn.execute_output(self.version_template, package, timeout=timeout)
        except CommandError:
            return None
        except ExecutionError as e:
            raise OperationError("query version", self.name, conn.identity, e) from e
        return self.parse_version(out)


def tool_probe(
    factory: Callable[[], PackageManager],
    tool: str,
    windows: bool = False,
) -> Callable[[Connection], PackageManager | None]:
    """Build a probe matching targets of the right OS family that have ``tool`` on PATH."""

    def probe(conn: Connection) -> PackageManager | None:
        if conn.is_windows() != windows:
            return None
        check = "where.exe {}" if windows else "command -v {} > /dev/null 2>&1"
        if not conn.succeeds(check, tool):
            return None
        return factory()

    probe.__name__ = f"{tool}_probe"
    return probe
