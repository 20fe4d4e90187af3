"""
Tests for iOS template activation, post-build cleanup and iOS support toggling.
"""

from pathlib import Path

import pytest

from nativedeps.core.errors import DuplicateResourceError, MissingResourceError
from nativedeps.core.models.settings import BuildSettings
from nativedeps.core.models.state import BuildState
from nativedeps.core.modules.registry import ModuleRegistry
from nativedeps.core.services.define_symbols import IOS_SUPPORT_SYMBOL, StateSymbolStore
from nativedeps.core.services.host import ENABLE_PLUGIN, REFRESH_ASSETS
from nativedeps.core.services.ios_deps import IOS_DEPENDENCY_TEMPLATE, IOSReconciler
from tests.fakes import ExplodingModule, StaticModule, write_template


@pytest.fixture
def make_reconciler(tmp_path, assets_dir, template_dir, host):
    def factory(modules=(), **kwargs) -> IOSReconciler:
        kwargs.setdefault("template_dir", template_dir)
        return IOSReconciler(
            assets_dir=assets_dir,
            host=host,
            registry=ModuleRegistry(modules),
            project_root=tmp_path,
            **kwargs,
        )

    return factory


def _listing(path: Path) -> set[str]:
    return {p.name for p in path.iterdir()} if path.exists() else set()


class TestSetEnabled:
    def test_enable_copies_template(self, make_reconciler, template_dir):
        write_template(template_dir, "Foo", "<dependencies />\n")
        reconciler = make_reconciler()

        assert reconciler.set_enabled(True, "Foo") is True

        active = reconciler.active_path("Foo")
        assert active == reconciler.active_dir / "Foo.xml"
        assert active.read_text() == "<dependencies />\n"

    def test_enable_is_idempotent(self, make_reconciler, template_dir, mock_adapter):
        write_template(template_dir, "Foo")
        reconciler = make_reconciler()

        reconciler.set_enabled(True, "Foo")
        after_first = _listing(reconciler.active_dir)
        assert reconciler.set_enabled(True, "Foo") is False

        assert _listing(reconciler.active_dir) == after_first
        assert mock_adapter.count(REFRESH_ASSETS) == 1

    def test_disable_is_idempotent(self, make_reconciler):
        reconciler = make_reconciler()
        assert reconciler.set_enabled(False, "Foo") is False
        assert reconciler.set_enabled(False, "Foo") is False
        assert _listing(reconciler.active_dir) == set()

    def test_enable_then_disable_restores_directory(self, make_reconciler, template_dir):
        write_template(template_dir, "Foo")
        reconciler = make_reconciler()
        reconciler.active_dir.mkdir(parents=True)
        (reconciler.active_dir / "Unrelated.xml").write_text("<keep />")
        before = _listing(reconciler.active_dir)

        reconciler.set_enabled(True, "Foo")
        (reconciler.active_dir / "Foo.xml.meta").write_text("guid: 0\n")
        reconciler.set_enabled(False, "Foo")

        assert _listing(reconciler.active_dir) == before

    def test_missing_template_leaves_state_unchanged(self, make_reconciler):
        reconciler = make_reconciler()

        with pytest.raises(MissingResourceError):
            reconciler.set_enabled(True, "Foo")

        assert not reconciler.active_path("Foo").exists()
        assert "Foo" not in reconciler.active_templates

    def test_unresolved_template_folder(self, make_reconciler):
        reconciler = make_reconciler(template_dir=None)
        with pytest.raises(MissingResourceError):
            reconciler.set_enabled(True, "Foo")


class TestResolverPlugin:
    def test_enable_requires_resolver_plugin(self, make_reconciler, template_dir):
        write_template(template_dir, "Foo")
        reconciler = make_reconciler(
            resolver_plugin="Google.IOSResolver", plugin_search_dirs=["Assets"]
        )

        with pytest.raises(MissingResourceError):
            reconciler.set_enabled(True, "Foo")
        assert not reconciler.active_path("Foo").exists()

    def test_resolver_plugin_is_enabled_once(
        self, make_reconciler, template_dir, assets_dir, mock_adapter
    ):
        write_template(template_dir, "Foo")
        write_template(template_dir, "Bar")
        plugin_dir = assets_dir / "ExternalDependencyManager" / "Editor"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "Google.IOSResolver_v1.2.177.dll").write_bytes(b"")
        reconciler = make_reconciler(
            resolver_plugin="Google.IOSResolver", plugin_search_dirs=["Assets"]
        )

        reconciler.set_enabled(True, "Foo")
        reconciler.set_enabled(True, "Bar")

        calls = mock_adapter.calls_for(ENABLE_PLUGIN)
        assert len(calls) == 1
        assert calls[0].action.params["plugin_path"].endswith("Google.IOSResolver_v1.2.177.dll")

    def test_duplicate_resolver_plugins(self, make_reconciler, template_dir, assets_dir):
        write_template(template_dir, "Foo")
        (assets_dir / "Google.IOSResolver_v1.dll").write_bytes(b"")
        (assets_dir / "Google.IOSResolver_v2.dll").write_bytes(b"")
        reconciler = make_reconciler(
            resolver_plugin="Google.IOSResolver", plugin_search_dirs=["Assets"]
        )

        with pytest.raises(DuplicateResourceError):
            reconciler.set_enabled(True, "Foo")
        assert not reconciler.active_path("Foo").exists()


class TestManageDependencies:
    def test_enabled_templates_tracked(self, make_reconciler, template_dir):
        for name in ("Foo", "Bar", "Baz"):
            write_template(template_dir, name)
        modules = [
            StaticModule("On", enabled=True, templates=["Foo", "Bar"]),
            StaticModule("Off", enabled=False, templates=["Baz"]),
            StaticModule("AndroidOnly", enabled=True, snippet="<x />"),
        ]
        reconciler = make_reconciler(modules)

        report = reconciler.manage_dependencies(BuildSettings())

        assert reconciler.active_templates == ["Foo", "Bar"]
        assert report.activated == ["Foo", "Bar"]
        assert report.excluded == ["Baz"]
        assert _listing(reconciler.active_dir) == {"Foo.xml", "Bar.xml"}

    def test_disabled_module_removes_previous_activation(self, make_reconciler, template_dir):
        write_template(template_dir, "Baz")
        reconciler = make_reconciler([StaticModule("Off", enabled=False, templates=["Baz"])])
        reconciler.set_enabled(True, "Baz")

        reconciler.manage_dependencies(BuildSettings())

        assert not reconciler.active_path("Baz").exists()

    def test_missing_template_skips_only_that_template(self, make_reconciler, template_dir):
        write_template(template_dir, "Bar")
        reconciler = make_reconciler([StaticModule("M", templates=["Foo", "Bar"])])

        report = reconciler.manage_dependencies(BuildSettings())

        assert reconciler.active_templates == ["Bar"]
        assert "Foo" in report.errors
        assert not report.aborted

    def test_duplicate_resolver_aborts_everything(self, make_reconciler, template_dir, assets_dir):
        write_template(template_dir, "Foo")
        write_template(template_dir, "Bar")
        (assets_dir / "Google.IOSResolver_a.dll").write_bytes(b"")
        (assets_dir / "Google.IOSResolver_b.dll").write_bytes(b"")
        reconciler = make_reconciler(
            [StaticModule("M1", templates=["Foo"]), StaticModule("M2", templates=["Bar"])],
            resolver_plugin="Google.IOSResolver",
            plugin_search_dirs=["Assets"],
        )

        report = reconciler.manage_dependencies(BuildSettings())

        assert report.aborted
        assert reconciler.active_templates == []
        assert not reconciler.active_path("Bar").exists()

    def test_set_is_reset_each_build(self, make_reconciler, template_dir):
        reconciler = make_reconciler([], active_templates=["Leftover"])
        reconciler.manage_dependencies(BuildSettings())
        assert reconciler.active_templates == []

    def test_malformed_settings_are_fatal(self, make_reconciler):
        from nativedeps.core.errors import ConfigurationError

        reconciler = make_reconciler([ExplodingModule("X", templates=["Foo"])])
        with pytest.raises(ConfigurationError):
            reconciler.manage_dependencies(BuildSettings())


class TestCleanup:
    def test_cleanup_deactivates_remembered_templates(self, make_reconciler, template_dir):
        write_template(template_dir, "Foo")
        write_template(template_dir, "Bar")
        reconciler = make_reconciler([StaticModule("M", templates=["Foo", "Bar"])])
        reconciler.manage_dependencies(BuildSettings())

        cleaned = reconciler.cleanup()

        assert cleaned == ["Foo", "Bar"]
        assert reconciler.active_templates == []
        assert _listing(reconciler.active_dir) == set()

    def test_cleanup_from_restored_set(self, make_reconciler, template_dir):
        write_template(template_dir, "Foo")
        make_reconciler().set_enabled(True, "Foo")

        reconciler = make_reconciler(active_templates=["Foo"])
        reconciler.cleanup()

        assert not reconciler.active_path("Foo").exists()


class TestIOSSupport:
    def test_enable_adds_symbol_and_base_template(self, make_reconciler, template_dir):
        write_template(template_dir, IOS_DEPENDENCY_TEMPLATE)
        state = BuildState(define_symbols={"ios": "X;Y"})
        reconciler = make_reconciler()

        result = reconciler.set_ios_support_enabled(True, StateSymbolStore(state))

        assert state.define_symbols["ios"] == f"X;Y;{IOS_SUPPORT_SYMBOL}"
        assert result.symbol_changed and result.template_changed
        assert reconciler.active_path(IOS_DEPENDENCY_TEMPLATE).is_file()
        assert reconciler.active_templates == []

    def test_disable_removes_symbol_without_artifacts(self, make_reconciler):
        state = BuildState(define_symbols={"ios": f"X;{IOS_SUPPORT_SYMBOL};Y"})

        make_reconciler().set_ios_support_enabled(False, StateSymbolStore(state))

        assert state.define_symbols["ios"] == "X;Y"

    def test_missing_base_template_still_sets_symbol(self, make_reconciler):
        state = BuildState()

        result = make_reconciler().set_ios_support_enabled(True, StateSymbolStore(state))

        assert result.error is not None
        assert state.define_symbols["ios"] == IOS_SUPPORT_SYMBOL
