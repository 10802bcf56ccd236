import json

import pytest
from typer.testing import CliRunner

from conftest import make_entry
from rubynav.index import MemoryIndex, save_index
from rubynav.main import app

runner = CliRunner()

SOURCE = '''module A
  class B
    def run
      m(1)
    end
  end
end
'''


@pytest.fixture
def workspace(tmp_path, sample_index):
    index_path = tmp_path / "index.json"
    save_index(sample_index, index_path)
    ruby_file = tmp_path / "b.rb"
    ruby_file.write_text(SOURCE)
    return tmp_path, index_path, ruby_file


def test_definition_json(workspace):
    root, index_path, ruby_file = workspace

    result = runner.invoke(app, [
        "definition", str(ruby_file), "3", "6",
        "--index", str(index_path),
        "--project-root", str(root),
        "--no-typechecker",
        "--json",
    ])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["typechecker"] is False
    assert payload["definitions"] == [{
        "uri": "file:///project/lib/a/b.rb",
        "range": {"start": {"line": 5, "character": 4}, "end": {"line": 7, "character": 7}},
    }]


def test_definition_with_typechecker(workspace):
    root, index_path, ruby_file = workspace

    result = runner.invoke(app, [
        "definition", str(ruby_file), "3", "6",
        "--index", str(index_path),
        "--project-root", str(root),
        "--typechecker",
        "--json",
    ])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["definitions"] == []


def test_definition_missing_index(tmp_path):
    ruby_file = tmp_path / "a.rb"
    ruby_file.write_text("Foo\n")

    result = runner.invoke(app, [
        "definition", str(ruby_file), "0", "0",
        "--index", str(tmp_path / "missing.json"),
        "--project-root", str(tmp_path),
    ])

    assert result.exit_code == 1


def test_definition_unreadable_file(workspace):
    root, index_path, _ = workspace

    result = runner.invoke(app, [
        "definition", str(root / "missing.rb"), "0", "0",
        "--index", str(index_path),
        "--project-root", str(root),
        "--no-typechecker",
    ])

    assert result.exit_code == 1


def test_stats_json(workspace):
    root, index_path, _ = workspace

    result = runner.invoke(app, ["stats", "--index", str(index_path), "--project-root", str(root), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["total_entries"] == 13
    assert payload["total_load_paths"] == 3


def test_typechecker_applies_to_index_without_project_root(tmp_path):
    project_file = tmp_path / "lib" / "b.rb"
    index = MemoryIndex(entries=[make_entry("m", "method", str(project_file), (6, 4, 8, 7), owner="A::B")])
    index_path = tmp_path / "index.json"
    save_index(index, index_path)
    ruby_file = tmp_path / "b.rb"
    ruby_file.write_text(SOURCE)

    args = ["definition", str(ruby_file), "3", "6", "--index", str(index_path), "--project-root", str(tmp_path), "--json"]
    without = runner.invoke(app, [*args, "--no-typechecker"])
    with_typechecker = runner.invoke(app, [*args, "--typechecker"])

    assert len(json.loads(without.stdout)["definitions"]) == 1
    assert json.loads(with_typechecker.stdout)["definitions"] == []
