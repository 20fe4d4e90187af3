"""
Declared modules — feature modules described in nativedeps.yml.
"""

from __future__ import annotations

from nativedeps.core.models.project import ModuleDecl
from nativedeps.core.models.settings import BuildSettings, BuildTarget
from nativedeps.core.modules.base import DependentModule, android_package_snippet


class DeclaredModule(DependentModule):
    """Module whose enablement and dependencies come from a ``modules:`` entry.

    ``enabled_when`` names a flag in ``settings.flags``; without it the
    module is on for every platform it lists.
    """

    def __init__(self, decl: ModuleDecl):
        self._decl = decl

    @property
    def name(self) -> str:
        return self._decl.name

    @property
    def decl(self) -> ModuleDecl:
        return self._decl

    def is_enabled(self, settings: BuildSettings, target: BuildTarget) -> bool:
        if target.value not in self._decl.platforms:
            return False
        if self._decl.enabled_when is None:
            return True
        return settings.flag(self._decl.enabled_when)

    def android_dependencies_snippet(self, settings: BuildSettings) -> str:
        return "\n".join(
            android_package_snippet(pkg.spec, pkg.repositories)
            for pkg in self._decl.android_packages
        )

    def ios_dependency_template_names(self) -> list[str]:
        return list(self._decl.ios_templates)
