"""
Status use case — module enablement per platform plus remembered state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from nativedeps.core.config.loader import find_project_file, load_project, project_root
from nativedeps.core.errors import ConfigurationError
from nativedeps.core.models.project import Project
from nativedeps.core.models.settings import BuildTarget
from nativedeps.core.models.state import BuildState
from nativedeps.core.modules.registry import build_registry
from nativedeps.core.persistence.state_file import default_state_path, load_state


@dataclass
class ModuleStatus:
    name: str
    android: bool = False
    ios: bool = False
    has_android_dependencies: bool = False
    ios_templates: list[str] = field(default_factory=list)


@dataclass
class StatusResult:
    """Aggregated project status."""

    project: Project | None = None
    state: BuildState | None = None
    config_path: Path | None = None
    modules: list[ModuleStatus] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        result: dict = {
            "project": {"name": self.project.name if self.project else ""},
            "modules": [
                {
                    "name": m.name,
                    "android": m.android,
                    "ios": m.ios,
                    "has_android_dependencies": m.has_android_dependencies,
                    "ios_templates": m.ios_templates,
                }
                for m in self.modules
            ],
        }
        if self.state:
            result["state"] = {
                "define_symbols": self.state.define_symbols,
                "active_templates": self.state.active_templates,
                "last_build": self.state.last_build.model_dump(),
            }
        return result


def get_status(config_path: Path | None = None) -> StatusResult:
    """Load config and state and evaluate every module for both platforms."""
    result = StatusResult()

    try:
        if config_path is None:
            config_path = find_project_file()
        if config_path is None:
            result.error = "No nativedeps.yml found."
            return result

        project = load_project(config_path)
        registry = build_registry(project)
        result.project = project
        result.config_path = config_path

        for module in registry.get_modules():
            result.modules.append(ModuleStatus(
                name=module.name,
                android=registry.is_enabled(module, project.settings, BuildTarget.ANDROID),
                ios=registry.is_enabled(module, project.settings, BuildTarget.IOS),
                has_android_dependencies=bool(
                    module.android_dependencies_snippet(project.settings).strip()
                ),
                ios_templates=module.ios_dependency_template_names(),
            ))
    except ConfigurationError as e:
        result.error = str(e)
        return result

    result.state = load_state(default_state_path(project_root(config_path)))
    return result
