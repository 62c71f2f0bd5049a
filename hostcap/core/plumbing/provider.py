"""
Capability provider — the generic probe registry and resolution cache.

One Provider exists per capability kind (service managers, package
managers, ...). It holds the kind's probes in registration order and
resolves a connection to the first implementation whose probe accepts
it. Results are memoized per connection identity.

Resolution outcomes:
    match       implementation cached and returned
    no match    kind's NoMatchError cached and raised on every call
    probe fault ProbeError raised, nothing cached (the next call re-probes)

Concurrency: the cache is shared across threads. Callers asking for the
same uncached identity wait on a per-identity lock, so a probe sequence
runs at most once per identity at a time.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from hostcap.adapters.base import Connection
from hostcap.core.errors import NoMatchError, ProbeError, RegistrationError

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Connection)
T = TypeVar("T")

# A probe returns a ready implementation, or None to decline.
Probe = Callable[[C], "T | None"]

_NO_MATCH = object()


class Provider(Generic[C, T]):
    """Ordered probe registry with a per-connection resolution cache.

    Args:
        kind: Human-readable capability kind (e.g. "init system").
        not_found: NoMatchError subclass raised when no probe matches.
    """

    def __init__(self, kind: str, not_found: type[NoMatchError] = NoMatchError):
        self.kind = kind
        self._not_found = not_found
        self._probes: list[tuple[str, Probe]] = []
        self._cache: dict[Hashable, object] = {}
        self._inflight: dict[Hashable, threading.Lock] = {}
        self._lock = threading.Lock()
        self._live = False

    def register(self, probe: Probe, name: str | None = None) -> None:
        """Append a probe. Only allowed before the first resolution."""
        name = name or getattr(probe, "__name__", repr(probe))
        with self._lock:
            if self._live:
                raise RegistrationError(
                    f"cannot register {self.kind} probe {name!r} after resolution started"
                )
            self._probes.append((name, probe))
        logger.debug("Registered %s probe: %s", self.kind, name)

    def probe_names(self) -> list[str]:
        """Registered probe names in evaluation order."""
        return [name for name, _ in self._probes]

    def cached(self, conn: C) -> bool:
        """Whether a resolution outcome is cached for this connection."""
        with self._lock:
            return conn.identity in self._cache

    def get(self, conn: C) -> T:
        """Resolve the implementation for a connection.

        Raises:
            NoMatchError: (kind subclass) no probe matched; cached.
            ProbeError: a probe raised instead of deciding; not cached.
        """
        key = conn.identity
        with self._lock:
            self._live = True
            if key in self._cache:
                return self._unwrap(self._cache[key])
            key_lock = self._inflight.setdefault(key, threading.Lock())

        with key_lock:
            # Another caller may have finished while we waited
            with self._lock:
                if key in self._cache:
                    return self._unwrap(self._cache[key])

            try:
                outcome = self._run_probes(conn)
                with self._lock:
                    self._cache[key] = outcome
            finally:
                with self._lock:
                    self._inflight.pop(key, None)

        return self._unwrap(outcome)

    def _run_probes(self, conn: C) -> object:
        for name, probe in self._probes:
            logger.debug("Probing %s %s on %r", self.kind, name, conn.identity)
            try:
                impl = probe(conn)
            except Exception as e:
                logger.warning(
                    "%s probe %s failed on %r: %s", self.kind, name, conn.identity, e
                )
                raise ProbeError(self.kind, name, conn.identity, e) from e
            if impl is not None:
                logger.info("Resolved %s for %r: %s", self.kind, conn.identity, name)
                return impl

        logger.info("No %s found for %r", self.kind, conn.identity)
        return _NO_MATCH

    def _unwrap(self, outcome: object) -> T:
        if outcome is _NO_MATCH:
            raise self._not_found()
        return outcome  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"<Provider kind={self.kind!r} probes={self.probe_names()!r}>"
