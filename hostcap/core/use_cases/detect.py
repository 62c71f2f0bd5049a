"""
Detection use case — report which facilities a target provides.

Resolves every capability kind against one connection and collects
the outcome per kind. Nothing is raised: each kind's error is captured
in the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hostcap.adapters.base import Connection
from hostcap.core.composition import Registries
from hostcap.core.errors import CapabilityError, NoMatchError
from hostcap.core.plumbing import Provider, supported

logger = logging.getLogger(__name__)


@dataclass
class KindResult:
    """Resolution outcome for one capability kind."""

    kind: str
    facility: str | None = None
    extensions: list[str] = field(default_factory=list)
    error: str | None = None
    unsupported: bool = False

    def to_dict(self) -> dict:
        result: dict = {"kind": self.kind}
        if self.error:
            result["error"] = self.error
            result["unsupported"] = self.unsupported
            return result
        result["facility"] = self.facility
        result["extensions"] = self.extensions
        return result


@dataclass
class DetectResult:
    """Result of the detect use case."""

    target: str = ""
    windows: bool = False
    init_system: KindResult | None = None
    package_manager: KindResult | None = None

    @property
    def ok(self) -> bool:
        return all(
            r is not None and r.error is None
            for r in (self.init_system, self.package_manager)
        )

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "windows": self.windows,
            "init_system": self.init_system.to_dict() if self.init_system else None,
            "package_manager": self.package_manager.to_dict() if self.package_manager else None,
        }


def _resolve(provider: Provider, conn: Connection) -> KindResult:
    result = KindResult(kind=provider.kind)
    try:
        impl = provider.get(conn)
    except NoMatchError as e:
        result.error = str(e)
        result.unsupported = True
        return result
    except CapabilityError as e:
        result.error = str(e)
        return result

    result.facility = getattr(impl, "name", type(impl).__name__)
    result.extensions = supported(impl)
    return result


def run_detect(conn: Connection, registries: Registries) -> DetectResult:
    """Detect the init system and package manager of a target.

    Args:
        conn: Connection to the target.
        registries: The application's providers.

    Returns:
        DetectResult with one KindResult per capability kind.
    """
    result = DetectResult(target=str(conn.identity), windows=conn.is_windows())
    result.init_system = _resolve(registries.init_systems, conn)
    result.package_manager = _resolve(registries.package_managers, conn)

    logger.info(
        "Detected on %r: init=%s pkg=%s",
        conn.identity,
        result.init_system.facility,
        result.package_manager.facility,
    )
    return result
