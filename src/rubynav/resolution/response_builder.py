"""
Result sinks for definition requests.
"""

from typing import Generic, List, Protocol, TypeVar

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class ResponseSink(Protocol[T_contra]):
    """Append-only destination for results produced by a listener."""

    def append(self, item: T_contra) -> None:
        ...


class CollectionResponseBuilder(Generic[T]):
    """
    Ordered in-memory sink.

    Listeners only append; the request that owns the builder reads the
    collected items once traversal is over.
    """

    def __init__(self):
        self._items: List[T] = []

    def append(self, item: T) -> None:
        self._items.append(item)

    def response(self) -> List[T]:
        """Snapshot of everything appended so far, in insertion order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)
