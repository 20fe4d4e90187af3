"""
iOS reconciler — activates dependency templates and the support symbol.

A template ``<Name>.template`` in the package's template folder is
active when it has been copied to ``ExtensionsAssets/Editor/<Name>.xml``
under the asset root. The reconciler remembers which templates a
pre-build activated so the post-build can deactivate exactly those.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from nativedeps.core.errors import DuplicateResourceError, MissingResourceError
from nativedeps.core.models.settings import BuildSettings, BuildTarget
from nativedeps.core.modules.registry import ModuleRegistry
from nativedeps.core.services.asset_lookup import locate_plugin
from nativedeps.core.services.define_symbols import (
    IOS_SUPPORT_SYMBOL,
    DefineSymbolStore,
    update_define_symbol,
)
from nativedeps.core.services.host import HostBridge

logger = logging.getLogger(__name__)

EXTENSION_ASSETS_EDITOR = Path("ExtensionsAssets") / "Editor"
IOS_DEPENDENCY_TEMPLATE = "ARCoreiOSDependencies"
TEMPLATE_SUFFIX = ".template"
ACTIVE_SUFFIX = ".xml"
META_SUFFIX = ".meta"


@dataclass
class IOSReport:
    """What one iOS dependency pass did."""

    activated: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    aborted: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors and not self.aborted

    def to_dict(self) -> dict:
        return {
            "activated": self.activated,
            "excluded": self.excluded,
            "errors": self.errors,
            "aborted": self.aborted,
        }


@dataclass
class IOSSupportResult:
    """Outcome of switching iOS support on or off."""

    enabled: bool
    symbol_changed: bool = False
    template_changed: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "symbol_changed": self.symbol_changed,
            "template_changed": self.template_changed,
            "error": self.error,
        }


class IOSReconciler:
    """Keeps active iOS dependency files in line with module enablement.

    Args:
        assets_dir: The host's asset root.
        template_dir: Folder holding ``*.template`` files, or None if it
            could not be resolved (every enable then fails).
        host: Bridge used to refresh the asset index and enable plugins.
        registry: Module registry queried by manage_dependencies.
        project_root: Base for relative ``plugin_search_dirs``.
        resolver_plugin: Name fragment of the iOS resolver plugin that
            must be present before a template is activated; "" skips it.
        plugin_search_dirs: Where to look for the resolver plugin.
        active_templates: Templates remembered from an earlier pre-build.
    """

    def __init__(
        self,
        assets_dir: Path,
        template_dir: Path | None,
        host: HostBridge,
        registry: ModuleRegistry,
        project_root: Path | None = None,
        resolver_plugin: str = "",
        plugin_search_dirs: Iterable[str] = (),
        active_templates: Iterable[str] = (),
    ):
        self._assets_dir = assets_dir
        self._template_dir = template_dir
        self._host = host
        self._registry = registry
        self._project_root = project_root or assets_dir.parent
        self._resolver_plugin = resolver_plugin
        self._plugin_search_dirs = list(plugin_search_dirs)
        self._resolver_path: Path | None = None
        self._active: dict[str, None] = dict.fromkeys(active_templates)

    @property
    def active_dir(self) -> Path:
        return self._assets_dir / EXTENSION_ASSETS_EDITOR

    @property
    def active_templates(self) -> list[str]:
        """Templates activated by the current pre-build, in activation order."""
        return list(self._active)

    def active_path(self, template_name: str) -> Path:
        return self.active_dir / f"{template_name}{ACTIVE_SUFFIX}"

    def template_path(self, template_name: str) -> Path | None:
        if self._template_dir is None:
            return None
        return self._template_dir / f"{template_name}{TEMPLATE_SUFFIX}"

    def set_enabled(self, enabled: bool, template_name: str) -> bool:
        """Activate or deactivate one dependency template.

        No-op when the file already matches the requested state.

        Returns:
            True if a file was copied or removed.

        Raises:
            MissingResourceError: enabling, but the template (or the
                resolver plugin) is absent. Nothing is changed.
            DuplicateResourceError: enabling, but more than one resolver
                plugin is installed. Nothing is changed.
        """
        self.active_dir.mkdir(parents=True, exist_ok=True)
        active = self.active_path(template_name)

        if enabled and not active.exists():
            template = self.template_path(template_name)
            if template is None or not template.is_file():
                raise MissingResourceError(
                    f"Failed to enable {template_name} dependency xml. Template file is missing."
                )
            self._ensure_resolver()

            logger.info("Adding %s:\n%s", template_name, template.read_text(encoding="utf-8"))
            shutil.copyfile(template, active)
            self._host.refresh_assets()
            return True

        if not enabled and active.exists():
            logger.info("Removing %s.", template_name)
            active.unlink()
            active.with_name(active.name + META_SUFFIX).unlink(missing_ok=True)
            self._active.pop(template_name, None)
            self._host.refresh_assets()
            return True

        return False

    def manage_dependencies(self, settings: BuildSettings) -> IOSReport:
        """Include or exclude every module's templates for an iOS build.

        A missing template only leaves its own feature disabled. A
        duplicate resolver plugin stops the whole pass, since picking
        one automatically is unsafe.
        """
        self._active.clear()
        report = IOSReport()

        for module in self._registry.get_modules():
            templates = [name for name in module.ios_dependency_template_names() if name]
            if not templates:
                continue

            enabled = self._registry.is_enabled(module, settings, BuildTarget.IOS)
            for name in templates:
                logger.info(
                    "%s %s for %s.", "Include" if enabled else "Exclude", name, module.name
                )
                try:
                    self.set_enabled(enabled, name)
                except MissingResourceError as e:
                    logger.error("%s: %s", module.name, e)
                    report.errors[name] = str(e)
                    continue
                except DuplicateResourceError as e:
                    logger.error("Aborting iOS dependency setup: %s", e)
                    report.errors[name] = str(e)
                    report.aborted = True
                    return report

                if enabled:
                    self._active[name] = None
                    report.activated.append(name)
                else:
                    report.excluded.append(name)

        return report

    def cleanup(self) -> list[str]:
        """Deactivate every template the last pre-build activated."""
        cleaned = self.active_templates
        for name in cleaned:
            logger.info("Cleaning up %s in post-build.", name)
            self.set_enabled(False, name)
        self._active.clear()
        return cleaned

    def set_ios_support_enabled(
        self,
        enabled: bool,
        symbols: DefineSymbolStore,
        group: str = "ios",
    ) -> IOSSupportResult:
        """Toggle the iOS support define symbol and the base dependency template."""
        if enabled:
            logger.info(
                "Enabling iOS support. Note that the ARKit XR plugin must also "
                "be added to the project for the extensions to work on iOS."
            )
        else:
            logger.info("Disabling iOS support.")

        result = IOSSupportResult(enabled=enabled)
        result.symbol_changed = update_define_symbol(symbols, group, IOS_SUPPORT_SYMBOL, enabled)
        try:
            result.template_changed = self.set_enabled(enabled, IOS_DEPENDENCY_TEMPLATE)
        except (MissingResourceError, DuplicateResourceError) as e:
            logger.error("%s", e)
            result.error = str(e)
        return result

    def _ensure_resolver(self) -> None:
        if not self._resolver_plugin or self._resolver_path is not None:
            return
        path = locate_plugin(self._project_root, self._resolver_plugin, self._plugin_search_dirs)
        self._host.enable_plugin(path)
        self._resolver_path = path
