"""
Public API for definition requests.

Provides the request-level entry points that wire parsing, cursor
targeting, the resolver and a response builder together.
"""

from typing import List, Sequence

from rubynav.index.protocol import DefinitionIndex
from rubynav.logging_config import logger
from rubynav.parser import Dispatcher, locate_target, parse_source
from rubynav.references import Reference
from rubynav.schemas import Location, ResolutionContext
from .definition import DefinitionResolver
from .response_builder import CollectionResponseBuilder


def find_definitions(
    index: DefinitionIndex,
    uri: str,
    source: str,
    line: int,
    character: int,
    typechecker_enabled: bool = False,
) -> List[Location]:
    """
    Resolve the reference under a cursor to its definition locations.

    This is the main entry point for go-to-definition. It:
    1. Parses the document
    2. Locates the reference node under the cursor and its lexical nesting
    3. Dispatches that node once to a fresh DefinitionResolver

    Args:
        index: Definition index to query
        uri: Document URI (file:// for on-disk documents)
        source: Document text
        line: Zero-based cursor line
        character: Zero-based cursor column
        typechecker_enabled: Whether a static type-checker owns project navigation

    Returns:
        Definition locations in candidate order (empty when nothing resolves)
    """
    tree = parse_source(source)
    target = locate_target(tree, source, line, character)
    if target is None:
        logger.debug(f"No reference under cursor at {uri}:{line}:{character}")
        return []

    context = ResolutionContext(
        uri=uri,
        nesting=target.nesting,
        typechecker_enabled=typechecker_enabled,
    )
    response_builder: CollectionResponseBuilder[Location] = CollectionResponseBuilder()
    dispatcher = Dispatcher()
    DefinitionResolver(response_builder, index, context, dispatcher)

    dispatcher.dispatch_once(target.node)

    locations = response_builder.response()
    logger.debug(f"Resolved {target.node.type} at {uri}:{line}:{character} to {len(locations)} location(s)")
    return locations


def resolve_reference(
    index: DefinitionIndex,
    reference: Reference,
    context: ResolutionContext,
) -> List[Location]:
    """
    Resolve an already-classified reference under the given context.
    """
    response_builder: CollectionResponseBuilder[Location] = CollectionResponseBuilder()
    DefinitionResolver(response_builder, index, context).resolve(reference)
    return response_builder.response()


def resolve_references(
    index: DefinitionIndex,
    references: Sequence[Reference],
    context: ResolutionContext,
) -> List[Location]:
    """
    Resolve several references with one resolver, results in reference order.
    """
    response_builder: CollectionResponseBuilder[Location] = CollectionResponseBuilder()
    resolver = DefinitionResolver(response_builder, index, context)
    for reference in references:
        resolver.resolve(reference)
    return response_builder.response()
