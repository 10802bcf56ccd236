"""
Event dispatcher over tree-sitter syntax trees.

Listeners register for events named `on_<node type>_enter` and are called
once per matching node, in pre-order.
"""

from typing import Any, Dict, List

from tree_sitter import Node

from rubynav.logging_config import logger


def event_name(node_type: str) -> str:
    return f"on_{node_type}_enter"


class Dispatcher:
    """Fans node visits out to registered listeners."""

    def __init__(self):
        self._listeners: Dict[str, List[Any]] = {}

    def register(self, listener: Any, *events: str) -> None:
        """
        Subscribe `listener` to the given events.

        Raises:
            AttributeError: If the listener has no handler for an event.
        """
        for event in events:
            if not callable(getattr(listener, event, None)):
                raise AttributeError(f"{type(listener).__name__} has no handler for '{event}'")
            self._listeners.setdefault(event, []).append(listener)
        logger.debug(f"Registered {type(listener).__name__} for {', '.join(events)}")

    def dispatch(self, root: Node) -> None:
        """Walk the tree under `root` in pre-order, firing enter events."""
        stack = [root]
        while stack:
            node = stack.pop()
            self._fire(node)
            stack.extend(reversed(node.named_children))

    def dispatch_once(self, node: Node) -> None:
        """Fire the enter event for a single node without descending."""
        self._fire(node)

    def _fire(self, node: Node) -> None:
        event = event_name(node.type)
        for listener in self._listeners.get(event, ()):
            getattr(listener, event)(node)
