"""Plumbing — the capability-kind-agnostic resolver and extension model."""

from hostcap.core.plumbing.extensions import Extension, query, supported
from hostcap.core.plumbing.facility import Facility
from hostcap.core.plumbing.provider import Probe, Provider

__all__ = ["Extension", "Facility", "Probe", "Provider", "query", "supported"]
