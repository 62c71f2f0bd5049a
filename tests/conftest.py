"""
Shared test fixtures and configuration.

Each ``*_host`` fixture is a MockConnection scripted to look like one
kind of target. Unscripted commands exit 1, so every probe that is not
explicitly satisfied declines.
"""

import pytest

from hostcap.adapters.mock import MockConnection
from hostcap.core.composition import Registries

DARWIN_MARKER = "test -f /System/Library/CoreServices/SystemVersion.plist"


@pytest.fixture
def darwin_host() -> MockConnection:
    """macOS target: launchd + Homebrew."""
    conn = MockConnection("darwin-host", default_exit_code=1)
    conn.set_response(DARWIN_MARKER)
    conn.set_response("command -v brew")
    conn.set_response("launchctl ")
    conn.set_response("log show ")
    conn.set_response("brew ")
    return conn


@pytest.fixture
def systemd_host() -> MockConnection:
    """Debian-like target: systemd + apt."""
    conn = MockConnection("debian-host", default_exit_code=1)
    conn.set_response("stat /run/systemd/system")
    conn.set_response("command -v apt-get")
    conn.set_response("systemctl ")
    conn.set_response("journalctl ")
    conn.set_response("apt-get ")
    conn.set_response("mkdir -p ")
    return conn


@pytest.fixture
def windows_host() -> MockConnection:
    """Windows target: SCM + winget."""
    conn = MockConnection("windows-host", windows=True, default_exit_code=1)
    conn.set_response('where.exe ^"winget.exe^"')
    conn.set_response("sc.exe ")
    conn.set_response("winget ")
    return conn


@pytest.fixture
def bare_host() -> MockConnection:
    """Target on which every probe declines."""
    return MockConnection("bare-host", default_exit_code=1)


@pytest.fixture
def registries() -> Registries:
    return Registries()
