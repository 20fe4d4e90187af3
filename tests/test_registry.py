"""
Tests for the module registry and the built-in / declared modules.
"""

import pytest

from nativedeps.core.errors import ConfigurationError
from nativedeps.core.models.project import AndroidPackage, ModuleDecl, Project
from nativedeps.core.models.settings import BuildSettings, BuildTarget
from nativedeps.core.modules import (
    AuthenticationModule,
    CloudAnchorModule,
    DeclaredModule,
    GeospatialModule,
    ModuleRegistry,
    SemanticsModule,
    build_registry,
)
from tests.fakes import ExplodingModule, StaticModule


class TestModuleRegistry:
    def test_order_is_stable(self):
        registry = ModuleRegistry([StaticModule("B"), StaticModule("A")])
        first = [m.name for m in registry.get_modules()]
        assert first == ["B", "A"]
        assert [m.name for m in registry.get_modules()] == first

    def test_duplicate_identifiers_rejected(self):
        with pytest.raises(ConfigurationError):
            ModuleRegistry([StaticModule("A"), StaticModule("A")])

    def test_malformed_settings_raise(self):
        registry = ModuleRegistry([StaticModule("A")])
        with pytest.raises(ConfigurationError):
            registry.is_enabled(registry.get("A"), {"ios_support_enabled": True}, BuildTarget.IOS)

    def test_predicate_failure_becomes_configuration_error(self):
        registry = ModuleRegistry([ExplodingModule("X")])
        with pytest.raises(ConfigurationError):
            registry.is_enabled(registry.get("X"), BuildSettings(), BuildTarget.ANDROID)

    def test_enabled_modules(self):
        registry = ModuleRegistry([
            StaticModule("A", enabled={BuildTarget.ANDROID}),
            StaticModule("B", enabled={BuildTarget.IOS}),
        ])
        names = [m.name for m in registry.enabled_modules(BuildSettings(), BuildTarget.ANDROID)]
        assert names == ["A"]


class TestBuiltinModules:
    def test_identifiers_are_class_names(self):
        assert GeospatialModule().name == "GeospatialModule"

    def test_ios_requires_ios_support(self):
        settings = BuildSettings(geospatial_enabled=True)
        assert GeospatialModule().is_enabled(settings, BuildTarget.ANDROID)
        assert not GeospatialModule().is_enabled(settings, BuildTarget.IOS)

        with_ios = BuildSettings(geospatial_enabled=True, ios_support_enabled=True)
        assert GeospatialModule().is_enabled(with_ios, BuildTarget.IOS)

    def test_nothing_enabled_for_other_targets(self):
        settings = BuildSettings(
            geospatial_enabled=True, cloud_anchor_enabled=True, semantics_enabled=True
        )
        for module in (CloudAnchorModule(), GeospatialModule(), SemanticsModule()):
            assert not module.is_enabled(settings, BuildTarget.OTHER)

    def test_keyless_auth_needs_cloud_feature(self):
        module = AuthenticationModule()
        assert not module.is_enabled(
            BuildSettings(android_authentication="keyless"), BuildTarget.ANDROID
        )
        assert module.is_enabled(
            BuildSettings(android_authentication="keyless", cloud_anchor_enabled=True),
            BuildTarget.ANDROID,
        )
        assert "play-services-auth" in module.android_dependencies_snippet(BuildSettings())

    def test_template_names(self):
        assert CloudAnchorModule().ios_dependency_template_names() == [
            "ARCoreiOSCloudAnchorDependencies"
        ]
        assert AuthenticationModule().ios_dependency_template_names() == []


class TestDeclaredModule:
    def test_flag_controls_enablement(self):
        module = DeclaredModule(ModuleDecl(name="Analytics", enabled_when="analytics"))
        assert not module.is_enabled(BuildSettings(), BuildTarget.ANDROID)
        assert module.is_enabled(BuildSettings(flags={"analytics": True}), BuildTarget.ANDROID)

    def test_platform_filter(self):
        module = DeclaredModule(ModuleDecl(name="Pods", platforms=["ios"]))
        assert module.is_enabled(BuildSettings(), BuildTarget.IOS)
        assert not module.is_enabled(BuildSettings(), BuildTarget.ANDROID)

    def test_snippet_from_packages(self):
        module = DeclaredModule(ModuleDecl(
            name="Net",
            android_packages=[AndroidPackage(spec="a:b:1"), AndroidPackage(spec="c:d:2")],
        ))
        snippet = module.android_dependencies_snippet(BuildSettings())
        assert 'spec="a:b:1"' in snippet
        assert 'spec="c:d:2"' in snippet


def test_build_registry_puts_declared_modules_last():
    project = Project(name="p", modules=[ModuleDecl(name="Extra")])
    names = [m.name for m in build_registry(project).get_modules()]
    assert names[-1] == "Extra"
    assert names[:4] == [
        "AuthenticationModule",
        "CloudAnchorModule",
        "GeospatialModule",
        "SemanticsModule",
    ]


def test_declared_module_clashing_with_builtin():
    project = Project(name="p", modules=[ModuleDecl(name="GeospatialModule")])
    with pytest.raises(ConfigurationError):
        build_registry(project)
