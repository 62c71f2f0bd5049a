"""
Mock connection — scripted test double for any target host.

Used in tests to simulate targets without touching a real shell.
Configurable per command with output, exit code, or a transport
failure. Every rendered command is recorded in the call log.
"""

from __future__ import annotations

from dataclasses import dataclass

from hostcap.adapters.base import Connection, TransportError


@dataclass
class _Response:
    output: str = ""
    exit_code: int = 0
    transport_error: str | None = None


class MockConnection(Connection):
    """Scripted connection for testing.

    Commands are matched exactly first, then by the longest configured
    prefix. Unmatched commands return ``default_exit_code`` with
    ``default_output``.
    """

    def __init__(
        self,
        name: str = "mock",
        windows: bool = False,
        default_exit_code: int = 0,
        default_output: str = "",
        timeout: float | None = None,
    ):
        super().__init__(timeout=timeout)
        self._name = name
        self._windows = windows
        self._default = _Response(output=default_output, exit_code=default_exit_code)
        self._responses: dict[str, _Response] = {}
        self._call_log: list[str] = []
        self._timeouts: list[float | None] = []

    @property
    def identity(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[str]:
        """All rendered commands this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def timeouts(self) -> list[float | None]:
        """Effective timeout of each call, parallel to ``call_log``."""
        return self._timeouts

    def is_windows(self) -> bool:
        return self._windows

    def set_response(self, command: str, output: str = "", exit_code: int = 0) -> None:
        """Set the result for a command (exact text or prefix)."""
        self._responses[command] = _Response(output=output, exit_code=exit_code)

    def set_failure(self, command: str, exit_code: int = 1, output: str = "") -> None:
        """Configure a command to exit non-zero."""
        self._responses[command] = _Response(output=output, exit_code=exit_code)

    def set_transport_failure(self, command: str, error: str = "connection lost") -> None:
        """Configure a command to fail before it reaches the target."""
        self._responses[command] = _Response(transport_error=error)

    def commands_matching(self, prefix: str) -> list[str]:
        return [c for c in self._call_log if c.startswith(prefix)]

    def reset(self) -> None:
        """Clear call log and scripted responses."""
        self._call_log.clear()
        self._timeouts.clear()
        self._responses.clear()

    def _lookup(self, command: str) -> _Response:
        if command in self._responses:
            return self._responses[command]
        prefixes = [p for p in self._responses if command.startswith(p)]
        if prefixes:
            return self._responses[max(prefixes, key=len)]
        return self._default

    def _run(self, command: str, timeout: float | None) -> tuple[int, str]:
        self._call_log.append(command)
        self._timeouts.append(timeout)
        response = self._lookup(command)
        if response.transport_error is not None:
            raise TransportError(command, response.transport_error)
        return response.exit_code, response.output
