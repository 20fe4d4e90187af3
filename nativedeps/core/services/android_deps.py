"""
Android reconciler — stages one dependency manifest per enabled module.

Pre-build the staging directory is recreated from scratch, so stale
manifests from an earlier module set disappear. Each enabled module
with a snippet gets ``<Module>Dependencies.xml`` and, by default, its
own resolver run. Post-build (batch mode only) the directory is removed
and the resolver runs once more against the empty set.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from nativedeps.core.errors import ConfigurationError
from nativedeps.core.models.settings import BuildSettings, BuildTarget
from nativedeps.core.modules.registry import ModuleRegistry
from nativedeps.core.services.host import HostBridge
from nativedeps.core.services.manifest import manifest_file_name, render_manifest, synthesize

logger = logging.getLogger(__name__)

DEPENDENCIES_DIRECTORY = Path("ExtensionsAssets") / "Editor" / "DependenciesTempFolder"


@dataclass
class AndroidStagingReport:
    """What one Android staging pass did."""

    staging_dir: Path
    written: list[str] = field(default_factory=list)     # module names, registry order
    no_snippet: list[str] = field(default_factory=list)
    disabled: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    resolve_calls: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "staging_dir": str(self.staging_dir),
            "written": self.written,
            "no_snippet": self.no_snippet,
            "disabled": self.disabled,
            "errors": self.errors,
            "resolve_calls": self.resolve_calls,
        }


class AndroidReconciler:
    """Turns Android module enablement into manifest files on disk."""

    def __init__(
        self,
        assets_dir: Path,
        registry: ModuleRegistry,
        host: HostBridge,
        resolve_per_module: bool = True,
    ):
        self._assets_dir = assets_dir
        self._registry = registry
        self._host = host
        self._resolve_per_module = resolve_per_module

    @property
    def staging_dir(self) -> Path:
        return self._assets_dir / DEPENDENCIES_DIRECTORY

    def manifest_path(self, module_name: str) -> Path:
        return self.staging_dir / manifest_file_name(module_name)

    def manage_dependencies(self, settings: BuildSettings) -> AndroidStagingReport:
        """Write a manifest for every enabled module that has Android dependencies.

        A module whose snippet is malformed is logged and skipped; the
        others are still written. Configuration errors from the registry
        and filesystem errors propagate.
        """
        self._recreate_staging_dir()
        report = AndroidStagingReport(staging_dir=self.staging_dir)

        for module in self._registry.get_modules():
            if not self._registry.is_enabled(module, settings, BuildTarget.ANDROID):
                report.disabled.append(module.name)
                continue

            try:
                snippet = synthesize(module, settings)
                if not snippet:
                    report.no_snippet.append(module.name)
                    continue
                content = render_manifest(snippet)
            except ConfigurationError as e:
                logger.error("Module %s: skipping Android dependencies: %s", module.name, e)
                report.errors[module.name] = str(e)
                continue

            path = self.manifest_path(module.name)
            path.write_text(content, encoding="utf-8")
            report.written.append(module.name)
            logger.info("Module %s added Android library dependencies:\n%s", module.name, content)

            if self._resolve_per_module:
                self._resolve(report)

        if not self._resolve_per_module and report.written:
            self._resolve(report)

        return report

    def cleanup(self) -> None:
        """Remove the staging directory and resolve against no extension dependencies."""
        logger.info("Cleaning up Android library dependencies.")
        if self.staging_dir.exists():
            shutil.rmtree(self.staging_dir)
        self._host.refresh_assets()
        self._host.resolve_dependencies(BuildTarget.ANDROID)

    def _recreate_staging_dir(self) -> None:
        if self.staging_dir.exists():
            shutil.rmtree(self.staging_dir)
        self.staging_dir.mkdir(parents=True, exist_ok=True)

    def _resolve(self, report: AndroidStagingReport) -> None:
        self._host.refresh_assets()
        self._host.resolve_dependencies(BuildTarget.ANDROID)
        report.resolve_calls += 1
