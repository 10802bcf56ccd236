from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Literal, Tuple


Visibility = Literal["public", "private", "protected"]
EntryKind = Literal["class", "module", "constant", "method"]

NAMESPACE_KINDS = ("class", "module")


class SourceLocation(BaseModel):
    """
    Declaration span as stored by the index: 1-based lines, 0-based columns.
    """
    start_line: int
    start_column: int
    end_line: int
    end_column: int


class DefinitionEntry(BaseModel):
    """
    Represents one declaration site known to the index.

    For classes, modules and constants `name` is the fully qualified name
    ("A::B::SECRET"). For methods it is the bare method name and `owner`
    holds the qualified namespace that declares it.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    kind: EntryKind
    file_path: str
    location: SourceLocation
    visibility: Visibility = "public"
    owner: Optional[str] = None
    # Namespace ancestry, already qualified
    superclass: Optional[str] = None
    includes: Tuple[str, ...] = ()
    prepends: Tuple[str, ...] = ()

    @property
    def qualified_name(self) -> str:
        if self.kind == "method" and self.owner:
            return f"{self.owner}#{self.name}"
        return self.name

    @property
    def is_namespace(self) -> bool:
        return self.kind in NAMESPACE_KINDS


class LoadPathEntry(BaseModel):
    """
    Maps a `require` literal to the file it loads.
    """
    model_config = ConfigDict(frozen=True)

    require_path: str
    full_path: str


class Position(BaseModel):
    """Zero-based editor position."""
    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class Location(BaseModel):
    """
    A definition target handed to the editor.
    """
    model_config = ConfigDict(frozen=True)

    uri: str
    range: Range


class ResolutionContext(BaseModel):
    """
    Per-request state shared by every node visit of one document traversal.
    """
    model_config = ConfigDict(frozen=True)

    uri: str
    nesting: Tuple[str, ...] = ()
    typechecker_enabled: bool = False

    @property
    def scope_name(self) -> str:
        return "::".join(self.nesting)


class IndexStats(BaseModel):
    """
    Aggregate statistics for a loaded index.
    """
    total_entries: int
    total_load_paths: int
    entry_kinds: Dict[str, int] = Field(default_factory=dict)
    project_root: Optional[str] = None
    dependency_paths: List[str] = Field(default_factory=list)
