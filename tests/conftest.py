"""
Pytest configuration for the rubynav test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- A sample definition index covering namespaces, mixins, private
  constants, dependencies and load paths
- Helpers for building entries and contexts
"""

import os
from typing import Tuple

import pytest

from rubynav.cli.config import CLIConfig
from rubynav.logging_config import setup_logging
from rubynav.index import MemoryIndex
from rubynav.resolution import CollectionResponseBuilder
from rubynav.schemas import DefinitionEntry, LoadPathEntry, ResolutionContext, SourceLocation


PROJECT_ROOT = "/project"
GEMS_ROOT = "/gems"
VENDOR_ROOT = "/project/vendor/bundle"


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Run the CLI and logger in machine mode during tests."""
    os.environ.setdefault("RUBYNAV_MACHINE_MODE", "1")


@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, enable_file_logging=False, force=True)
    yield
    CLIConfig.reset()


# ============================================================================
# BUILDERS
# ============================================================================

def make_entry(
    name: str,
    kind: str,
    file_path: str,
    span: Tuple[int, int, int, int] = (1, 0, 1, 0),
    **kwargs,
) -> DefinitionEntry:
    """Build a DefinitionEntry; span is (start_line, start_column, end_line, end_column), lines 1-based."""
    start_line, start_column, end_line, end_column = span
    return DefinitionEntry(
        name=name,
        kind=kind,
        file_path=file_path,
        location=SourceLocation(
            start_line=start_line,
            start_column=start_column,
            end_line=end_line,
            end_column=end_column,
        ),
        **kwargs,
    )


def make_context(*nesting: str, uri: str = "file:///project/lib/a/b.rb", typechecker: bool = False) -> ResolutionContext:
    return ResolutionContext(uri=uri, nesting=tuple(nesting), typechecker_enabled=typechecker)


# ============================================================================
# INDEX FIXTURES
# ============================================================================

@pytest.fixture
def sample_entries():
    """
    Declarations of a small project plus one gem:

        module Helpers; def helper; end; end          (lib/helpers.rb)
        class Base; def base_method; end; end          (lib/base.rb)
        module A
          PUBLIC_CONST = 1                             (lib/a.rb)
          class B < Base                               (lib/a/b.rb)
            include Helpers
            SECRET = 2; private_constant :SECRET
            def m; end
          end
        end
        class C; def m; end; end                       (lib/c.rb)
        module C; class D; end; end                    (lib/c/d.rb)
        module Foo; class Thing; end; end              (gem foo)
    """
    return [
        make_entry("Helpers", "module", "/project/lib/helpers.rb", (1, 0, 5, 3)),
        make_entry("helper", "method", "/project/lib/helpers.rb", (2, 2, 4, 5), owner="Helpers"),
        make_entry("Base", "class", "/project/lib/base.rb", (1, 0, 5, 3)),
        make_entry("base_method", "method", "/project/lib/base.rb", (2, 2, 4, 5), owner="Base"),
        make_entry("A", "module", "/project/lib/a.rb", (1, 0, 3, 3)),
        make_entry("A::PUBLIC_CONST", "constant", "/project/lib/a.rb", (2, 2, 2, 18)),
        make_entry(
            "A::B", "class", "/project/lib/a/b.rb", (2, 2, 12, 5),
            superclass="Base", includes=("Helpers",),
        ),
        make_entry("A::B::SECRET", "constant", "/project/lib/a/b.rb", (4, 4, 4, 14), visibility="private"),
        make_entry("m", "method", "/project/lib/a/b.rb", (6, 4, 8, 7), owner="A::B"),
        make_entry("C", "class", "/project/lib/c.rb", (1, 0, 4, 3)),
        make_entry("m", "method", "/project/lib/c.rb", (2, 2, 3, 5), owner="C"),
        make_entry("C::D", "class", "/project/lib/c/d.rb", (2, 2, 3, 5)),
        make_entry("Foo::Thing", "class", "/gems/foo/lib/foo/thing.rb", (3, 2, 9, 5)),
    ]


@pytest.fixture
def sample_load_paths():
    return [
        LoadPathEntry(require_path="foo", full_path="/gems/foo/lib/foo.rb"),
        LoadPathEntry(require_path="foo/bar", full_path="/gems/foo/lib/foo/bar.rb"),
        LoadPathEntry(require_path="local_helper", full_path="/project/lib/local_helper.rb"),
    ]


@pytest.fixture
def sample_index(sample_entries, sample_load_paths):
    return MemoryIndex(
        entries=sample_entries,
        load_paths=sample_load_paths,
        project_root=PROJECT_ROOT,
        dependency_paths=[VENDOR_ROOT],
    )


@pytest.fixture
def response_builder():
    return CollectionResponseBuilder()
