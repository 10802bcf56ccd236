"""
Tests for hierarchical user configuration and type-checker detection.
"""

import json

import pytest

from rubynav.exceptions import ConfigError
from rubynav.user_config import UserConfig, detect_typechecker


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    return root


def make_config(project, tmp_path, local=None, global_=None):
    global_path = tmp_path / "global.json"
    if global_ is not None:
        global_path.write_text(json.dumps(global_))
    if local is not None:
        local_path = project / ".rubynav" / "config.json"
        local_path.parent.mkdir(parents=True, exist_ok=True)
        local_path.write_text(json.dumps(local))
    return UserConfig(project, global_config_path=global_path)


class TestUserConfig:

    def test_defaults(self, project, tmp_path):
        config = make_config(project, tmp_path)

        assert config.get("definition.typechecker") == "auto"
        assert config.index_path == project / ".rubynav" / "index.json"
        assert config.dependency_paths == [str(project / "vendor" / "bundle")]

    def test_local_overrides_global(self, project, tmp_path):
        config = make_config(
            project,
            tmp_path,
            global_={"definition": {"typechecker": True}, "index": {"path": "/shared/index.json"}},
            local={"definition": {"typechecker": False}},
        )

        assert config.typechecker_enabled() is False
        assert str(config.index_path) == "/shared/index.json"

    def test_relative_index_path(self, project, tmp_path):
        config = make_config(project, tmp_path, local={"index": {"path": "build/defs.json"}})

        assert config.index_path == project / "build" / "defs.json"

    def test_malformed_file_ignored(self, project, tmp_path):
        local_path = project / ".rubynav" / "config.json"
        local_path.parent.mkdir(parents=True)
        local_path.write_text("{oops")

        config = UserConfig(project, global_config_path=tmp_path / "none.json")

        assert config.get("definition.typechecker") == "auto"

    def test_invalid_typechecker_value(self, project, tmp_path):
        config = make_config(project, tmp_path, local={"definition": {"typechecker": "sometimes"}})

        with pytest.raises(ConfigError):
            config.typechecker_enabled()

    def test_invalid_dependency_paths(self, project, tmp_path):
        config = make_config(project, tmp_path, local={"index": {"dependency_paths": "vendor"}})

        with pytest.raises(ConfigError):
            config.dependency_paths

    def test_get_missing_key(self, project, tmp_path):
        assert make_config(project, tmp_path).get("definition.nope", 42) == 42


class TestTypecheckerDetection:

    def test_no_lockfile(self, project):
        assert detect_typechecker(project) is False

    def test_sorbet_in_lockfile(self, project, tmp_path):
        (project / "Gemfile.lock").write_text(
            "GEM\n  remote: https://rubygems.org/\n  specs:\n    rake (13.1.0)\n    sorbet-static (0.5.11000)\n"
        )

        assert detect_typechecker(project) is True
        assert make_config(project, tmp_path).typechecker_enabled() is True

    def test_other_gems_only(self, project):
        (project / "Gemfile.lock").write_text("GEM\n  specs:\n    rake (13.1.0)\n    sorbet-runtime (0.5.1)\n")

        assert detect_typechecker(project) is False
