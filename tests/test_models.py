"""
Tests for domain models — settings snapshot, targets, receipts, state.
"""

import pytest
from pydantic import ValidationError

from nativedeps.core.models import (
    BuildSettings,
    BuildState,
    BuildTarget,
    ModuleDecl,
    Project,
    Receipt,
)


class TestBuildTarget:
    def test_parse_known(self):
        assert BuildTarget.parse("Android") is BuildTarget.ANDROID
        assert BuildTarget.parse(" ios ") is BuildTarget.IOS

    def test_parse_unknown_is_other(self):
        assert BuildTarget.parse("webgl") is BuildTarget.OTHER

    def test_parse_passthrough(self):
        assert BuildTarget.parse(BuildTarget.IOS) is BuildTarget.IOS


class TestBuildSettings:
    def test_defaults_disable_everything(self):
        settings = BuildSettings()
        assert not settings.ios_support_enabled
        assert settings.android_authentication == "none"
        assert settings.flags == {}

    def test_snapshot_is_frozen(self):
        settings = BuildSettings()
        with pytest.raises(ValidationError):
            settings.ios_support_enabled = True

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            BuildSettings.model_validate({"geospatial": True})

    def test_bad_enum_rejected(self):
        with pytest.raises(ValidationError):
            BuildSettings(android_authentication="oauth")

    def test_flag_lookup(self):
        settings = BuildSettings(flags={"analytics": True})
        assert settings.flag("analytics")
        assert not settings.flag("other")


class TestProject:
    def test_minimal_project(self):
        project = Project(name="app")
        assert project.paths.assets == "Assets"
        assert project.ios.resolver_plugin == "Google.IOSResolver"
        assert project.android.resolve_per_module is True
        assert project.modules == []

    @pytest.mark.parametrize("name", ["../../Escaped", "Sub/Module", "..hidden", ".meta", ""])
    def test_module_name_must_be_a_plain_file_stem(self, name):
        with pytest.raises(ValidationError):
            ModuleDecl(name=name)

    def test_template_names_must_be_plain_file_stems(self):
        with pytest.raises(ValidationError):
            ModuleDecl(name="Pods", ios_templates=["Good", "../../ProjectSettings/Bad"])

    def test_dotted_names_allowed(self):
        decl = ModuleDecl(name="com.example.Analytics", ios_templates=["Pods-1.2"])
        assert decl.name == "com.example.Analytics"


class TestReceipt:
    def test_factories(self):
        assert Receipt.success(adapter="a", action_id="x").ok
        assert Receipt.failure(adapter="a", action_id="x", error="e").failed
        skipped = Receipt.skip(adapter="a", action_id="x", reason="why")
        assert skipped.skipped
        assert skipped.output == "why"


class TestBuildState:
    def test_touch_updates_timestamp(self):
        state = BuildState()
        state.updated_at = "2000-01-01T00:00:00+00:00"
        state.touch()
        assert state.updated_at != "2000-01-01T00:00:00+00:00"

    def test_serializes(self):
        state = BuildState(define_symbols={"ios": "X"}, active_templates=["Foo"])
        data = state.model_dump(mode="json")
        assert data["define_symbols"] == {"ios": "X"}
        assert data["active_templates"] == ["Foo"]
