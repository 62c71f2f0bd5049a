"""
Capability errors — what resolution and capability operations can raise.

Taxonomy:
    NoMatchError      every registered probe declined (cached per target)
    ProbeError        a probe could not finish its check (never cached)
    OperationError    a resolved implementation's command failed
    RegistrationError probe registered after the provider went live

A missing extension contract is not an error: callers check with
``hostcap.core.plumbing.extensions.query`` and branch.
"""

from __future__ import annotations

from collections.abc import Hashable


class CapabilityError(Exception):
    """Base class for all capability resolution and operation errors."""


class NoMatchError(CapabilityError):
    """No registered probe matched the target.

    Each capability kind subclasses this with its own default message.
    """

    message = "no supported implementation found"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class ProbeError(CapabilityError):
    """A probe failed to determine applicability (not a decline)."""

    def __init__(self, kind: str, probe: str, target: Hashable, cause: BaseException):
        self.kind = kind
        self.probe = probe
        self.target = target
        super().__init__(f"{kind} probe {probe!r} failed on {target!r}: {cause}")


class OperationError(CapabilityError):
    """A capability operation's underlying command failed."""

    def __init__(self, operation: str, facility: str, target: Hashable, cause: BaseException):
        self.operation = operation
        self.facility = facility
        self.target = target
        super().__init__(f"{facility}: {operation} failed on {target!r}: {cause}")


class RegistrationError(CapabilityError):
    """A probe was registered after the provider started resolving."""
