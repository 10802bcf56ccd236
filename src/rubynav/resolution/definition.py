"""
Go-to-definition resolution.

Turns reference nodes into definition locations: method calls, `&:symbol`
block arguments, constants, constant paths and require statements.
"""

import os
from pathlib import Path
from typing import Iterable, Optional, Sequence

from tree_sitter import Node

from rubynav.exceptions import UnresolvableBaseError
from rubynav.index.protocol import DefinitionIndex
from rubynav.logging_config import logger
from rubynav.parser.dispatcher import Dispatcher
from rubynav.parser.nodes import (
    classify_block_argument,
    classify_call,
    classify_constant,
    classify_identifier,
    classify_scope_resolution,
)
from rubynav.references import (
    ConstantPath,
    ConstantRead,
    LoadKind,
    MethodCall,
    ModuleLoad,
    Reference,
    SymbolBlockArgument,
)
from rubynav.schemas import DefinitionEntry, Location, Position, Range, ResolutionContext
from rubynav.uri import from_path, to_standardized_path
from .config import FILE_START, MAX_DEFINITION_CANDIDATES_WITHOUT_RECEIVER, RUBY_FILE_SUFFIX, SCOPE_SEPARATOR
from .response_builder import ResponseSink

EVENTS = (
    "on_call_enter",
    "on_block_argument_enter",
    "on_constant_enter",
    "on_scope_resolution_enter",
    "on_identifier_enter",
)


class DefinitionResolver:
    """
    Resolves references to their declarations and appends the locations
    to a response sink.

    One resolver serves one request: it is bound to a single
    `ResolutionContext` and keeps no other state.
    """

    def __init__(
        self,
        response_builder: ResponseSink[Location],
        index: DefinitionIndex,
        context: ResolutionContext,
        dispatcher: Optional[Dispatcher] = None,
    ):
        self.response_builder = response_builder
        self.index = index
        self.context = context

        if dispatcher is not None:
            dispatcher.register(self, *EVENTS)

    # ------------------------------------------------------------------
    # Dispatcher events
    # ------------------------------------------------------------------

    def on_call_enter(self, node: Node) -> None:
        self._resolve_classified(classify_call(node))

    def on_block_argument_enter(self, node: Node) -> None:
        self._resolve_classified(classify_block_argument(node))

    def on_constant_enter(self, node: Node) -> None:
        self._resolve_classified(classify_constant(node))

    def on_scope_resolution_enter(self, node: Node) -> None:
        self._resolve_classified(classify_scope_resolution(node))

    def on_identifier_enter(self, node: Node) -> None:
        # A bare `helper` is a receiver-less call unless it reads a local
        self._resolve_classified(classify_identifier(node))

    def _resolve_classified(self, reference: Optional[Reference]) -> None:
        if reference is not None:
            self.resolve(reference)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, reference: Reference) -> None:
        """Resolve one classified reference, appending any locations found."""
        if isinstance(reference, MethodCall):
            self._handle_method_definition(reference.name, reference.has_self_receiver)
        elif isinstance(reference, SymbolBlockArgument):
            self._handle_method_definition(reference.name, False)
        elif isinstance(reference, (ConstantRead, ConstantPath)):
            self._find_constant(reference.name)
        elif isinstance(reference, ModuleLoad):
            self._handle_module_load(reference)
        else:
            raise TypeError(f"Unsupported reference: {reference!r}")

    def _handle_method_definition(self, message: str, self_receiver: bool) -> None:
        if self_receiver:
            methods = self.index.resolve_method(message, self.context.scope_name)
        else:
            # Without a known receiver type any same-named method may be the target
            candidates = self.index.lookup_by_name(message) or []
            methods = list(candidates)[:MAX_DEFINITION_CANDIDATES_WITHOUT_RECEIVER]

        if not methods:
            logger.debug(f"No method definitions for '{message}'")
            return

        self._emit_entries(methods)

    def _find_constant(self, name: str) -> None:
        entries = self.index.resolve_constant(name, self.context.nesting)
        if not entries:
            logger.debug(f"No constant definitions for '{name}' in {self.context.nesting}")
            return

        if not self._visible_from_here(entries[0], name):
            logger.debug(f"Private constant '{entries[0].name}' is not visible from '{self.context.scope_name}'")
            return

        self._emit_entries(entries)

    def _visible_from_here(self, entry: DefinitionEntry, name: str) -> bool:
        """
        Private constants only resolve from the exact namespace that declares them.
        """
        if entry.visibility != "private":
            return True
        return entry.name == f"{self.context.scope_name}{SCOPE_SEPARATOR}{name}"

    def _handle_module_load(self, reference: ModuleLoad) -> None:
        if reference.literal is None:
            return

        if reference.kind is LoadKind.ABSOLUTE:
            candidate = self._find_load_path(reference.literal)
        else:
            candidate = self._relative_load_target(reference.literal)

        if candidate is not None:
            self._emit_file_start(candidate)

    def _find_load_path(self, literal: str) -> Optional[str]:
        for entry in self.index.search_load_paths(literal) or []:
            if entry.require_path == literal:
                return entry.full_path

        logger.debug(f"No load path matches require '{literal}'")
        return None

    def _relative_load_target(self, literal: str) -> Optional[str]:
        required_file = literal if literal.endswith(RUBY_FILE_SUFFIX) else f"{literal}{RUBY_FILE_SUFFIX}"
        try:
            base = self._current_folder()
        except UnresolvableBaseError as e:
            logger.warning(str(e))
            return None

        return os.path.abspath(os.path.join(base, required_file))

    def _current_folder(self) -> str:
        path = to_standardized_path(self.context.uri)
        if path:
            return str(Path(path).parent)

        try:
            return os.getcwd()
        except OSError as e:
            raise UnresolvableBaseError(self.context.uri, str(e))

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit_entries(self, entries: Iterable[DefinitionEntry]) -> None:
        for entry in entries:
            if self._suppressed(entry):
                logger.debug(f"Skipping project-owned {entry.qualified_name}; type-checker handles it")
                continue

            location = entry.location
            self.response_builder.append(
                _location(
                    entry.file_path,
                    (location.start_line - 1, location.start_column),
                    (location.end_line - 1, location.end_column),
                )
            )

    def _suppressed(self, entry: DefinitionEntry) -> bool:
        """A type-checker already navigates project code; only dependency hits are kept."""
        return self.context.typechecker_enabled and self.index.is_project_owned(entry.file_path)

    def _emit_file_start(self, file_path: str) -> None:
        self.response_builder.append(_location(file_path, FILE_START, FILE_START))


def _location(file_path: str, start: Sequence[int], end: Sequence[int]) -> Location:
    return Location(
        uri=from_path(file_path),
        range=Range(
            start=Position(line=max(start[0], 0), character=max(start[1], 0)),
            end=Position(line=max(end[0], 0), character=max(end[1], 0)),
        ),
    )
