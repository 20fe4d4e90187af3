"""
Config check use case — validate nativedeps.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from nativedeps.core.config.loader import find_project_file, load_project, project_root
from nativedeps.core.errors import ConfigurationError
from nativedeps.core.models.project import Project
from nativedeps.core.models.settings import BuildTarget
from nativedeps.core.modules.registry import build_registry
from nativedeps.core.services.asset_lookup import resolve_template_folder


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    project: Project | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_name": self.project.name if self.project else None,
            "module_count": len(self.project.modules) if self.project else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate project configuration and report issues."""
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_project_file()
    if config_path is None:
        result.errors.append("No nativedeps.yml found.")
        return result
    result.config_path = config_path

    try:
        project = load_project(config_path)
    except ConfigurationError as e:
        result.errors.append(str(e))
        return result
    result.project = project
    root = project_root(config_path)

    # Duplicate identifiers would make two modules share one manifest file
    try:
        registry = build_registry(project)
    except ConfigurationError as e:
        result.errors.append(str(e))
        registry = None

    if registry is not None:
        if not any(
            registry.enabled_modules(project.settings, target)
            for target in (BuildTarget.ANDROID, BuildTarget.IOS)
        ):
            result.warnings.append("No module is enabled for any platform.")

    for decl in project.modules:
        unknown = set(decl.platforms) - {BuildTarget.ANDROID.value, BuildTarget.IOS.value}
        if unknown:
            result.warnings.append(
                f"Module '{decl.name}' lists unknown platforms: {', '.join(sorted(unknown))}"
            )
        if decl.enabled_when and decl.enabled_when not in project.settings.flags:
            result.warnings.append(
                f"Module '{decl.name}' depends on flag '{decl.enabled_when}', which is not set."
            )

    assets = Path(project.paths.assets)
    if not (assets if assets.is_absolute() else root / assets).is_dir():
        result.warnings.append(f"Asset directory does not exist: {project.paths.assets}")

    if project.settings.ios_support_enabled and resolve_template_folder(project, root) is None:
        result.errors.append(
            "iOS support is enabled but the dependency template folder cannot be resolved "
            f"(guid {project.ios.template_folder_guid})."
        )

    result.valid = len(result.errors) == 0
    return result
