"""
Built-in feature modules.

Each mirrors one AR extension feature. On iOS nothing is enabled
unless iOS support itself is switched on.
"""

from __future__ import annotations

from nativedeps.core.models.settings import BuildSettings, BuildTarget
from nativedeps.core.modules.base import DependentModule, android_package_snippet

PLAY_SERVICES_AUTH = "com.google.android.gms:play-services-auth:16+"
PLAY_SERVICES_LOCATION = "com.google.android.gms:play-services-location:16+"


def _platform_supported(settings: BuildSettings, target: BuildTarget) -> bool:
    if target == BuildTarget.IOS:
        return settings.ios_support_enabled
    return target == BuildTarget.ANDROID


class AuthenticationModule(DependentModule):
    """Keyless authentication needs Google Play services auth on Android."""

    def is_enabled(self, settings: BuildSettings, target: BuildTarget) -> bool:
        if target != BuildTarget.ANDROID:
            return False
        uses_cloud = settings.cloud_anchor_enabled or settings.geospatial_enabled
        return uses_cloud and settings.android_authentication == "keyless"

    def android_dependencies_snippet(self, settings: BuildSettings) -> str:
        return android_package_snippet(PLAY_SERVICES_AUTH)


class CloudAnchorModule(DependentModule):
    def is_enabled(self, settings: BuildSettings, target: BuildTarget) -> bool:
        return settings.cloud_anchor_enabled and _platform_supported(settings, target)

    def ios_dependency_template_names(self) -> list[str]:
        return ["ARCoreiOSCloudAnchorDependencies"]


class GeospatialModule(DependentModule):
    """Geospatial needs fused location on Android and its own pod on iOS."""

    def is_enabled(self, settings: BuildSettings, target: BuildTarget) -> bool:
        return settings.geospatial_enabled and _platform_supported(settings, target)

    def android_dependencies_snippet(self, settings: BuildSettings) -> str:
        return android_package_snippet(PLAY_SERVICES_LOCATION)

    def ios_dependency_template_names(self) -> list[str]:
        return ["ARCoreiOSGeospatialDependencies"]


class SemanticsModule(DependentModule):
    def is_enabled(self, settings: BuildSettings, target: BuildTarget) -> bool:
        return settings.semantics_enabled and _platform_supported(settings, target)

    def ios_dependency_template_names(self) -> list[str]:
        return ["ARCoreiOSSemanticsDependencies"]


BUILTIN_MODULES: tuple[type[DependentModule], ...] = (
    AuthenticationModule,
    CloudAnchorModule,
    GeospatialModule,
    SemanticsModule,
)
