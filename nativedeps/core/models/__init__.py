"""
Domain models — pydantic types for nativedeps.

    from nativedeps.core.models import Project, BuildSettings, BuildTarget, Receipt
"""

from nativedeps.core.models.action import Action, Receipt
from nativedeps.core.models.project import (
    AndroidOptions,
    AndroidPackage,
    HookCommands,
    IOSOptions,
    ModuleDecl,
    Project,
    ProjectPaths,
)
from nativedeps.core.models.settings import BuildSettings, BuildTarget
from nativedeps.core.models.state import BuildRecord, BuildState

__all__ = [
    "Action",
    "AndroidOptions",
    "AndroidPackage",
    "BuildRecord",
    "BuildSettings",
    "BuildState",
    "BuildTarget",
    "HookCommands",
    "IOSOptions",
    "ModuleDecl",
    "Project",
    "ProjectPaths",
    "Receipt",
]
