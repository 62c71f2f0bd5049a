"""
Extension queries — ask a resolved implementation for optional behavior.

Every capability kind has one base contract and any number of small
extension contracts (log reading, direct restart, ...). Callers never
assume an extension is present:

    restarter = query(manager, ServiceRestarter)
    if restarter is None:
        manager.stop_service(conn, name)
        manager.start_service(conn, name)
    else:
        restarter.restart_service(conn, name)
"""

from __future__ import annotations

from typing import TypeVar

E = TypeVar("E")


class Extension:
    """Marker base for extension contracts.

    Subclasses set ``extension_name`` for reporting.
    """

    extension_name: str = ""


def query(implementation: object, contract: type[E]) -> E | None:
    """Return the implementation as ``contract`` if it provides it, else None."""
    if isinstance(implementation, contract):
        return implementation
    return None


def supported(implementation: object) -> list[str]:
    """Names of all extension contracts an implementation provides."""
    names = {
        cls.extension_name or cls.__name__
        for cls in type(implementation).__mro__
        if issubclass(cls, Extension) and cls is not Extension and Extension in cls.__bases__
    }
    return sorted(names)
