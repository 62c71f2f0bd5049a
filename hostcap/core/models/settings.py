"""
Settings models — the schema of hostcap.yml.

    log_level: INFO
    timeouts:
      probe: 10
      operation: 300
    disabled:
      init_systems: [upstart]
      package_managers: []
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class TimeoutSettings(BaseModel):
    """Per-command timeouts in seconds (None = no limit)."""

    probe: float | None = 10.0
    operation: float | None = 300.0

    @field_validator("probe", "operation")
    @classmethod
    def _positive(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("timeout must be positive")
        return v


class DisabledFacilities(BaseModel):
    """Facility names whose probes are never registered."""

    init_systems: list[str] = Field(default_factory=list)
    package_managers: list[str] = Field(default_factory=list)


class Settings(BaseModel):
    """Top-level hostcap configuration."""

    log_level: str = "WARNING"
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)
    disabled: DisabledFacilities = Field(default_factory=DisabledFacilities)

    @field_validator("log_level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()
