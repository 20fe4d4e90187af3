"""
Tests for state file persistence.
"""

import json
from pathlib import Path

from nativedeps.core.models.state import BuildState
from nativedeps.core.persistence.state_file import default_state_path, load_state, save_state


class TestStateFile:
    def test_save_and_load(self, tmp_path: Path):
        path = default_state_path(tmp_path)
        state = BuildState(project_name="app", active_templates=["Foo", "Bar"])
        state.define_symbols["ios"] = "X;Y"

        save_state(state, path)
        loaded = load_state(path)

        assert loaded.project_name == "app"
        assert loaded.active_templates == ["Foo", "Bar"]
        assert loaded.define_symbols == {"ios": "X;Y"}

    def test_default_location(self, tmp_path: Path):
        assert default_state_path(tmp_path) == tmp_path / ".state" / "current.json"

    def test_load_missing_returns_fresh(self, tmp_path: Path):
        state = load_state(tmp_path / "nope.json")
        assert state.active_templates == []

    def test_load_corrupt_returns_fresh(self, tmp_path: Path):
        path = tmp_path / "corrupt.json"
        path.write_text("{{{ not json")
        assert load_state(path).define_symbols == {}

    def test_save_is_readable_json_without_temp_files(self, tmp_path: Path):
        path = tmp_path / "deep" / "state.json"
        save_state(BuildState(project_name="x"), path)

        assert json.loads(path.read_text())["project_name"] == "x"
        assert [p.name for p in path.parent.iterdir()] == ["state.json"]
