"""
Build settings snapshot and build target.

The snapshot is the user-configured view that decides which feature
modules are enabled. It is frozen: reconcilers read it, never write it.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class BuildTarget(str, Enum):
    """Platform a build is produced for. Selects the reconciler."""

    ANDROID = "android"
    IOS = "ios"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | BuildTarget) -> BuildTarget:
        """Map a user-supplied name to a target; unknown names are ``OTHER``."""
        if isinstance(value, BuildTarget):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


class BuildSettings(BaseModel):
    """Immutable snapshot of the options that drive module enablement."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ios_support_enabled: bool = False
    cloud_anchor_enabled: bool = False
    geospatial_enabled: bool = False
    semantics_enabled: bool = False

    android_authentication: Literal["none", "api_key", "keyless"] = "none"
    ios_authentication: Literal["none", "api_key", "authentication_token"] = "none"

    # Switches for modules declared in nativedeps.yml (enabled_when: <flag>)
    flags: dict[str, bool] = Field(default_factory=dict)

    def flag(self, name: str) -> bool:
        """Value of a declared-module flag; unset flags are off."""
        return bool(self.flags.get(name, False))
