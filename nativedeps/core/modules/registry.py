"""
Module registry — the fixed, ordered set of feature modules for a build.

Enablement is a pure query. Anything that goes wrong while answering it
is a configuration error and stops the build: defaulting a module to
on or off would only move the failure to link time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from nativedeps.core.errors import ConfigurationError
from nativedeps.core.models.project import Project
from nativedeps.core.models.settings import BuildSettings, BuildTarget
from nativedeps.core.modules.base import DependentModule
from nativedeps.core.modules.builtin import BUILTIN_MODULES
from nativedeps.core.modules.declared import DeclaredModule

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Ordered, duplicate-free collection of dependent modules."""

    def __init__(self, modules: Iterable[DependentModule]):
        self._modules = tuple(modules)
        seen: set[str] = set()
        for module in self._modules:
            if module.name in seen:
                raise ConfigurationError(f"Duplicate module identifier: {module.name}")
            seen.add(module.name)

    def get_modules(self) -> tuple[DependentModule, ...]:
        """All modules, in registration order."""
        return self._modules

    def get(self, name: str) -> DependentModule | None:
        for module in self._modules:
            if module.name == name:
                return module
        return None

    def is_enabled(
        self,
        module: DependentModule,
        settings: BuildSettings,
        target: BuildTarget,
    ) -> bool:
        """Whether ``module`` is part of a build for ``target``.

        Raises:
            ConfigurationError: settings is not a BuildSettings snapshot,
                or the module could not evaluate it.
        """
        if not isinstance(settings, BuildSettings):
            raise ConfigurationError(
                f"Malformed build settings: expected BuildSettings, got {type(settings).__name__}"
            )
        try:
            return bool(module.is_enabled(settings, target))
        except ConfigurationError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Module {module.name} cannot evaluate build settings: {e}"
            ) from e

    def enabled_modules(
        self, settings: BuildSettings, target: BuildTarget
    ) -> list[DependentModule]:
        return [m for m in self._modules if self.is_enabled(m, settings, target)]


def build_registry(project: Project | None = None) -> ModuleRegistry:
    """Built-in modules followed by the modules declared in the project."""
    modules: list[DependentModule] = [cls() for cls in BUILTIN_MODULES]
    if project is not None:
        modules.extend(DeclaredModule(decl) for decl in project.modules)
    registry = ModuleRegistry(modules)
    logger.debug("Module registry: %s", ", ".join(m.name for m in registry.get_modules()))
    return registry
