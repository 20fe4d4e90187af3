"""
Build session — one pre-build/post-build cycle for one build target.

The session owns both reconcilers and the active template set for a
single build invocation. The build pipeline calls ``pre_build`` before
compilation starts and ``post_build`` once it is done.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from nativedeps.core.models.project import Project
from nativedeps.core.models.settings import BuildSettings, BuildTarget
from nativedeps.core.modules.registry import ModuleRegistry, build_registry
from nativedeps.core.services.android_deps import AndroidReconciler, AndroidStagingReport
from nativedeps.core.services.asset_lookup import resolve_template_folder
from nativedeps.core.services.host import HostBridge
from nativedeps.core.services.ios_deps import IOSReconciler, IOSReport

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass
class BuildReport:
    """What a build phase did, for the CLI and the state file."""

    target: BuildTarget
    phase: str
    batch_mode: bool = False
    started_at: str = field(default_factory=_now_iso)
    ended_at: str = ""
    android: AndroidStagingReport | None = None
    ios: IOSReport | None = None
    cleaned_templates: list[str] = field(default_factory=list)
    skipped_reason: str = ""

    @property
    def status(self) -> str:
        if self.ios is not None and self.ios.aborted:
            return "failed"
        section = self.android or self.ios
        if section is not None and not section.ok:
            return "partial"
        return "ok"

    @property
    def errors(self) -> list[str]:
        section = self.android or self.ios
        if section is None:
            return []
        return [f"{name}: {message}" for name, message in section.errors.items()]

    def to_dict(self) -> dict:
        return {
            "target": self.target.value,
            "phase": self.phase,
            "batch_mode": self.batch_mode,
            "status": self.status,
            "started_at": self.started_at,
            "ended_at": self.ended_at,
            "android": self.android.to_dict() if self.android else None,
            "ios": self.ios.to_dict() if self.ios else None,
            "cleaned_templates": self.cleaned_templates,
            "skipped_reason": self.skipped_reason,
        }


class BuildSession:
    """Reconciler pair plus the settings snapshot for one build."""

    def __init__(
        self,
        settings: BuildSettings,
        android: AndroidReconciler,
        ios: IOSReconciler,
    ):
        self.settings = settings
        self.android = android
        self.ios = ios

    @classmethod
    def from_project(
        cls,
        project: Project,
        project_root: Path,
        host: HostBridge,
        registry: ModuleRegistry | None = None,
        active_templates: Iterable[str] = (),
    ) -> BuildSession:
        """Wire up a session from nativedeps.yml; the template folder is resolved here, once."""
        registry = registry or build_registry(project)
        assets_path = Path(project.paths.assets)
        assets_dir = assets_path if assets_path.is_absolute() else project_root / assets_path

        template_dir = resolve_template_folder(project, project_root)
        if template_dir is None:
            logger.debug("iOS dependency template folder could not be resolved")

        android = AndroidReconciler(
            assets_dir=assets_dir,
            registry=registry,
            host=host,
            resolve_per_module=project.android.resolve_per_module,
        )
        ios = IOSReconciler(
            assets_dir=assets_dir,
            template_dir=template_dir,
            host=host,
            registry=registry,
            project_root=project_root,
            resolver_plugin=project.ios.resolver_plugin,
            plugin_search_dirs=project.paths.plugin_search_dirs,
            active_templates=active_templates,
        )
        return cls(project.settings, android, ios)

    def pre_build(self, target: BuildTarget) -> BuildReport:
        """Stage Android manifests or activate iOS templates for ``target``."""
        report = BuildReport(target=target, phase="prebuild")
        if target == BuildTarget.ANDROID:
            report.android = self.android.manage_dependencies(self.settings)
        elif target == BuildTarget.IOS:
            report.ios = self.ios.manage_dependencies(self.settings)
        else:
            report.skipped_reason = f"no native dependencies are managed for '{target.value}'"
            logger.info("Pre-build: %s", report.skipped_reason)
        report.ended_at = _now_iso()
        return report

    def post_build(self, target: BuildTarget, batch_mode: bool) -> BuildReport:
        """Undo the pre-build, but only in unattended (batch) runs.

        Interactive runs keep the generated files so they can be inspected.
        """
        report = BuildReport(target=target, phase="postbuild", batch_mode=batch_mode)
        if not batch_mode:
            report.skipped_reason = "cleanup only runs in batch mode"
            logger.info("Post-build: %s", report.skipped_reason)
        elif target == BuildTarget.ANDROID:
            self.android.cleanup()
        elif target == BuildTarget.IOS:
            report.cleaned_templates = self.ios.cleanup()
        else:
            report.skipped_reason = f"no native dependencies are managed for '{target.value}'"
        report.ended_at = _now_iso()
        return report
