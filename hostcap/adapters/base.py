"""
Connection base — the contract between capability code and a target host.

Everything hostcap knows about a target machine comes through this
interface. Probes and service/package managers never spawn processes
themselves; they hand a command template to the connection.

Templates use ``{}`` placeholders. Arguments are quoted for the target
shell before substitution, so callers pass raw values:

    conn.execute("launchctl kickstart {}", service)
"""

from __future__ import annotations

import shlex
from abc import ABC, abstractmethod
from collections.abc import Hashable


class ExecutionError(Exception):
    """Base class for anything that goes wrong while running a command."""


class CommandError(ExecutionError):
    """The command ran on the target but exited non-zero."""

    def __init__(self, command: str, exit_code: int, output: str = ""):
        self.command = command
        self.exit_code = exit_code
        self.output = output
        detail = f": {output}" if output else ""
        super().__init__(f"command {command!r} exited with code {exit_code}{detail}")


class TransportError(ExecutionError):
    """The command could not be run at all (connection lost, timeout, ...)."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"command {command!r} failed to run: {reason}")


class UnsafeArgumentError(ExecutionError, ValueError):
    """A value cannot be quoted safely for the target shell."""

    def __init__(self, value: str, char: str):
        self.value = value
        self.char = char
        super().__init__(f"refusing to pass {value!r} to cmd.exe: contains {char!r}")


# cmd.exe expands %VAR% (and !VAR! under delayed expansion) even inside
# quotes and ends the command at a line break; none of these can be escaped.
_CMD_UNSAFE = ("%", "!", "\r", "\n")
_CMD_META = frozenset('()^"<>&|')


def _quote_windows(text: str) -> str:
    for char in _CMD_UNSAFE:
        if char in text:
            raise UnsafeArgumentError(text, char)

    # Argument quoting as parsed by CommandLineToArgvW / the MSVC runtime
    parts = ['"']
    backslashes = 0
    for char in text:
        if char == "\\":
            backslashes += 1
            continue
        if char == '"':
            parts.append("\\" * (backslashes * 2 + 1))
        else:
            parts.append("\\" * backslashes)
        parts.append(char)
        backslashes = 0
    parts.append("\\" * (backslashes * 2))
    parts.append('"')
    quoted = "".join(parts)

    # cmd.exe sees every quote as escaped, so every metacharacter needs a caret
    return "".join("^" + c if c in _CMD_META else c for c in quoted)


def quote_arg(value: object, windows: bool = False) -> str:
    """Quote a single value for interpolation into a shell command.

    On Windows the value is always double-quoted and caret-escaped for
    cmd.exe; values holding ``%``, ``!`` or a line break are rejected
    with UnsafeArgumentError.
    """
    text = str(value)
    if windows:
        return _quote_windows(text)
    return shlex.quote(text)


def render_command(template: str, args: tuple[object, ...], windows: bool = False) -> str:
    """Substitute quoted ``args`` into the ``{}`` placeholders of ``template``."""
    if not args:
        return template
    return template.format(*(quote_arg(a, windows) for a in args))


class Connection(ABC):
    """Abstract base class for target connections.

    Subclasses implement ``identity``, ``is_windows`` and ``_run``;
    quoting and error classification live here.

    To create a new connection type:
        1. Subclass Connection
        2. Implement identity, is_windows, _run
        3. Raise TransportError from _run when the command never ran
    """

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    @property
    @abstractmethod
    def identity(self) -> Hashable:
        """Stable key meaning "the same reachable target"."""

    @abstractmethod
    def is_windows(self) -> bool:
        """Whether the target's shell is the Windows kind."""

    @abstractmethod
    def _run(self, command: str, timeout: float | None) -> tuple[int, str]:
        """Run a fully rendered command.

        Returns:
            (exit_code, combined_output).

        Raises:
            TransportError: if the command could not be executed.
        """

    def render(self, template: str, *args: object) -> str:
        return render_command(template, args, windows=self.is_windows())

    def execute_output(self, template: str, *args: object, timeout: float | None = None) -> str:
        """Run a command and return its output, stripped.

        Raises:
            CommandError: non-zero exit.
            TransportError: the command never ran.
            UnsafeArgumentError: an argument cannot be quoted for the target shell.
        """
        command = self.render(template, *args)
        exit_code, output = self._run(command, timeout if timeout is not None else self.timeout)
        if exit_code != 0:
            raise CommandError(command, exit_code, output.strip())
        return output.strip()

    def execute(self, template: str, *args: object, timeout: float | None = None) -> None:
        """Run a command, discarding its output."""
        self.execute_output(template, *args, timeout=timeout)

    def succeeds(self, template: str, *args: object, timeout: float | None = None) -> bool:
        """Run a check command. Non-zero exit is ``False``; transport faults propagate."""
        try:
            self.execute_output(template, *args, timeout=timeout)
        except CommandError:
            return False
        return True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} identity={self.identity!r}>"
