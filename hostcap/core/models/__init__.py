"""
Domain models — Pydantic types for hostcap.

    from hostcap.core.models import Settings
"""

from hostcap.core.models.settings import DisabledFacilities, Settings, TimeoutSettings

__all__ = [
    "DisabledFacilities",
    "Settings",
    "TimeoutSettings",
]
