"""
Facility base — shared by every concrete implementation of every kind.

A facility is a stateless adapter: it holds no target state and takes
the connection on every call. Command failures are wrapped into
OperationError naming the operation, the facility and the target.
"""

from __future__ import annotations

from hostcap.adapters.base import CommandError, Connection, ExecutionError
from hostcap.core.errors import OperationError


class Facility:
    """Base class for concrete capability implementations."""

    name: str = ""

    def _exec(
        self,
        conn: Connection,
        operation: str,
        template: str,
        *args: object,
        timeout: float | None = None,
    ) -> str:
        try:
            return conn.execute_output(template, *args, timeout=timeout)
        except ExecutionError as e:
            raise OperationError(operation, self.name, conn.identity, e) from e

    def _check(
        self,
        conn: Connection,
        operation: str,
        template: str,
        *args: object,
        timeout: float | None = None,
    ) -> bool:
        """Run a check command: non-zero exit is False, anything else wraps."""
        try:
            conn.execute_output(template, *args, timeout=timeout)
        except CommandError:
            return False
        except ExecutionError as e:
            raise OperationError(operation, self.name, conn.identity, e) from e
        return True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
