"""Adapters — connections to target hosts.

Public re-exports for convenient access.
"""

from hostcap.adapters.base import (
    CommandError,
    Connection,
    ExecutionError,
    TransportError,
    UnsafeArgumentError,
    render_command,
)
from hostcap.adapters.mock import MockConnection
from hostcap.adapters.shell.command import LocalConnection

__all__ = [
    "CommandError",
    "Connection",
    "ExecutionError",
    "LocalConnection",
    "MockConnection",
    "TransportError",
    "UnsafeArgumentError",
    "render_command",
]
