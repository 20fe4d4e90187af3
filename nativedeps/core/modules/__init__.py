"""Feature modules and the registry that enumerates them."""

from nativedeps.core.modules.base import DependentModule, android_package_snippet
from nativedeps.core.modules.builtin import (
    AuthenticationModule,
    CloudAnchorModule,
    GeospatialModule,
    SemanticsModule,
)
from nativedeps.core.modules.declared import DeclaredModule
from nativedeps.core.modules.registry import ModuleRegistry, build_registry

__all__ = [
    "AuthenticationModule",
    "CloudAnchorModule",
    "DeclaredModule",
    "DependentModule",
    "GeospatialModule",
    "ModuleRegistry",
    "SemanticsModule",
    "android_package_snippet",
    "build_registry",
]
