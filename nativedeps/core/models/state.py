"""
BuildState — what nativedeps remembers between invocations.

Serialized to .state/current.json. Holds the define-symbol lists and
the active template set, so that a prebuild and the matching postbuild
can run as separate processes.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class BuildRecord(BaseModel):
    """Summary of the last build phase that ran."""

    target: str = ""
    phase: str = ""                 # prebuild, postbuild
    batch_mode: bool = False
    started_at: str = ""
    ended_at: str = ""
    status: str = ""                # ok, partial, failed
    manifests_written: list[str] = Field(default_factory=list)
    templates_activated: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class BuildState(BaseModel):
    """Root state model — disposable, rebuilt by the next prebuild."""

    schema_version: int = 1
    project_name: str = ""

    created_at: str = Field(default_factory=_now_iso)
    updated_at: str = Field(default_factory=_now_iso)

    # Semicolon-delimited define-symbol list per platform group
    define_symbols: dict[str, str] = Field(default_factory=dict)

    # Templates activated by the last iOS prebuild, in activation order
    active_templates: list[str] = Field(default_factory=list)

    last_build: BuildRecord = Field(default_factory=BuildRecord)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = _now_iso()
