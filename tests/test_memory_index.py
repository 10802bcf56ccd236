"""
Tests for MemoryIndex: ancestry, scoped lookups and ownership.
"""

import pytest

from conftest import make_entry
from rubynav.index import MemoryIndex
from rubynav.schemas import LoadPathEntry


class TestAncestors:

    def test_includes_then_superclass(self, sample_index):
        assert sample_index.ancestors_of("A::B") == ["A::B", "Helpers", "Base"]

    def test_prepends_come_first_and_last_include_wins(self):
        index = MemoryIndex(entries=[
            make_entry("Widget", "class", "/p/widget.rb", includes=("First", "Second"), prepends=("Loud",)),
        ])

        assert index.ancestors_of("Widget") == ["Loud", "Widget", "Second", "First"]

    def test_reopened_namespaces_merge(self):
        index = MemoryIndex(entries=[
            make_entry("Widget", "class", "/p/widget.rb", superclass="Base"),
            make_entry("Widget", "class", "/p/widget_ext.rb", includes=("Extra",)),
        ])

        assert index.ancestors_of("Widget") == ["Widget", "Extra", "Base"]

    def test_cycles_are_visited_once(self):
        index = MemoryIndex(entries=[
            make_entry("A", "module", "/p/a.rb", includes=("B",)),
            make_entry("B", "module", "/p/b.rb", includes=("A",)),
        ])

        assert index.ancestors_of("A") == ["A", "B"]

    def test_unknown_namespace_is_its_own_ancestor(self):
        assert MemoryIndex().ancestors_of("Ghost") == ["Ghost"]


class TestMethodLookup:

    def test_closest_ancestor_wins(self):
        index = MemoryIndex(entries=[
            make_entry("Child", "class", "/p/child.rb", superclass="Parent"),
            make_entry("Parent", "class", "/p/parent.rb"),
            make_entry("save", "method", "/p/parent.rb", owner="Parent"),
            make_entry("save", "method", "/p/child.rb", owner="Child"),
        ])

        found = index.resolve_method("save", "Child")

        assert [e.file_path for e in found] == ["/p/child.rb"]

    def test_top_level_methods_visible_everywhere(self):
        index = MemoryIndex(entries=[make_entry("setup", "method", "/p/script.rb")])

        assert len(index.resolve_method("setup", "Any::Where")) == 1
        assert len(index.resolve_method("setup", "")) == 1

    def test_lookup_by_name_returns_all_in_order(self, sample_index):
        owners = [e.owner for e in sample_index.lookup_by_name("m")]

        assert owners == ["A::B", "C"]

    def test_qualified_name(self, sample_index):
        names = [e.qualified_name for e in sample_index.lookup_by_name("m")]

        assert names == ["A::B#m", "C#m"]


class TestConstantLookup:

    def test_innermost_scope_first(self):
        index = MemoryIndex(entries=[
            make_entry("Error", "class", "/p/error.rb"),
            make_entry("A::Error", "class", "/p/a/error.rb"),
            make_entry("A::B::Error", "class", "/p/a/b/error.rb"),
        ])

        assert [e.name for e in index.resolve_constant("Error", ("A", "B"))] == ["A::B::Error"]
        assert [e.name for e in index.resolve_constant("Error", ("A",))] == ["A::Error"]
        assert [e.name for e in index.resolve_constant("Error", ("C",))] == ["Error"]

    def test_ancestor_constants_after_lexical_scope(self, sample_index):
        index = MemoryIndex(entries=[
            *sample_index.entries,
            make_entry("Helpers::LIMIT", "constant", "/project/lib/helpers.rb"),
        ])

        assert [e.name for e in index.resolve_constant("LIMIT", ("A", "B"))] == ["Helpers::LIMIT"]

    def test_leading_separator_means_top_level(self):
        index = MemoryIndex(entries=[
            make_entry("Error", "class", "/p/error.rb"),
            make_entry("A::Error", "class", "/p/a/error.rb"),
        ])

        assert [e.name for e in index.resolve_constant("::Error", ("A",))] == ["Error"]

    def test_nesting_entries_may_be_paths(self):
        index = MemoryIndex(entries=[make_entry("A::B::C", "class", "/p/c.rb")])

        assert [e.name for e in index.resolve_constant("C", ("A::B",))] == ["A::B::C"]

    def test_methods_are_not_constants(self):
        index = MemoryIndex(entries=[make_entry("Foo", "method", "/p/foo.rb")])

        assert index.resolve_constant("Foo", ()) == []

    def test_private_constants_are_returned(self, sample_index):
        found = sample_index.resolve_constant("SECRET", ("A", "B"))

        assert [e.visibility for e in found] == ["private"]


class TestLoadPathsAndOwnership:

    def test_search_load_paths_is_prefix_search(self, sample_index):
        found = sample_index.search_load_paths("foo")

        assert [e.require_path for e in found] == ["foo", "foo/bar"]

    def test_add_load_path(self):
        index = MemoryIndex()
        index.add_load_path(LoadPathEntry(require_path="json", full_path="/ruby/lib/json.rb"))

        assert [e.full_path for e in index.search_load_paths("json")] == ["/ruby/lib/json.rb"]

    @pytest.mark.parametrize("path,owned", [
        ("/project/lib/a.rb", True),
        ("/project/app/models/user.rb", True),
        ("/project/vendor/bundle/ruby/3.3.0/gems/rack/lib/rack.rb", False),
        ("/gems/foo/lib/foo.rb", False),
        ("/projectile/lib/a.rb", False),
    ])
    def test_is_project_owned(self, sample_index, path, owned):
        assert sample_index.is_project_owned(path) is owned

    @pytest.mark.parametrize("path, owned", [
        ("/project/lib/a.rb", True),
        ("/anywhere/else.rb", True),
        ("/gems/foo/lib/foo.rb", False),
    ])
    def test_ownership_without_project_root(self, path, owned):
        index = MemoryIndex(dependency_paths=["/gems"])

        assert index.is_project_owned(path) is owned

    def test_stats(self, sample_index):
        stats = sample_index.stats()

        assert stats.total_entries == 13
        assert stats.total_load_paths == 3
        assert stats.entry_kinds == {"module": 2, "method": 4, "class": 5, "constant": 2}
        assert stats.project_root == "/project"
