"""
Local shell connection — run commands on the machine hostcap runs on.

This is the most fundamental connection: it runs commands through the
local shell and captures their output.
"""

from __future__ import annotations

import logging
import os
import socket
import subprocess
import time

from hostcap.adapters.base import Connection, TransportError

logger = logging.getLogger(__name__)


class LocalConnection(Connection):
    """Execute commands on the local host.

    Args:
        timeout: Default per-command timeout in seconds (None = no limit).
    """

    def __init__(self, timeout: float | None = 300):
        super().__init__(timeout=timeout)
        self._identity = ("local", socket.gethostname())

    @property
    def identity(self) -> tuple[str, str]:
        return self._identity

    def is_windows(self) -> bool:
        return os.name == "nt"

    def _run(self, command: str, timeout: float | None) -> tuple[int, str]:
        logger.debug("Executing: %s", command)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise TransportError(command, f"timed out after {timeout}s") from e
        except OSError as e:
            raise TransportError(command, str(e)) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Exit %d after %dms: %s", result.returncode, elapsed_ms, command)
        return result.returncode, result.stdout or ""
